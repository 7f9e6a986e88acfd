import logging
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import JsonOutputParser
from pydantic import BaseModel
from typing import Any, Dict, Tuple, Type
from backend.errors import UpstreamError
from backend.models import Task
from backend.schemas import LearnMaterials, PracticeMaterials, ReviewMaterials
from backend.segmentation import render_markdown

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a specialized study material creator. Adapt your materials based on whether "
    "the task is for learning, practicing, or reviewing. Use clear formatting and ensure "
    "content is engaging and memorable. Always return valid JSON matching the requested schema."
)

LEARN_PROMPT = """Create a comprehensive learning summary for: {title}
Task description: {description}
Content: {content}

The overview should cover:
1. Clear explanation of main concepts
2. Key definitions and terminology
3. Examples and illustrations
4. Relationship between concepts
5. Common misconceptions and clarifications

Use markdown formatting with headers for different sections.
List the key concepts separately as short key points.

{format_instructions}"""

PRACTICE_PROMPT = """Create a practice session for: {title}
Task description: {description}
Content: {content}

Create 5-7 practice problems with varying difficulty.
Include step-by-step solutions.
Use realistic scenarios when possible.
Use markdown inside problem statements and solutions.

{format_instructions}"""

REVIEW_PROMPT = """Create a review summary for: {title}
Task description: {description}
Content: {content}

Provide:
1. A quick review summary of key points, important formulas or rules and critical concepts to remember
2. A quick-reference list of the most important facts
3. At least 10 flashcards covering the main concepts. Make questions specific and answers concise.

{format_instructions}"""

TEMPLATES: Dict[str, Tuple[str, Type[BaseModel]]] = {
    "learn": (LEARN_PROMPT, LearnMaterials),
    "practice": (PRACTICE_PROMPT, PracticeMaterials),
    "review": (REVIEW_PROMPT, ReviewMaterials),
}


class SummaryGenerationError(UpstreamError):
    message = "Error generating summary"


class StudyMaterialGenerator:
    """Generates per-task study materials, with the prompt chosen by task type"""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    def generate(self, task: Task) -> Tuple[str, Dict[str, Any]]:
        """
        Generate study materials for a task.

        Returns:
            (markdown summary, structured materials dict)

        Raises:
            SummaryGenerationError: the LLM call failed or returned output
                that does not match the task type's schema
        """
        template, schema = TEMPLATES.get(task.task_type, TEMPLATES["learn"])
        parser = JsonOutputParser(pydantic_object=schema)

        prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT),
            ("human", template)
        ])
        chain = prompt | self.llm | parser

        try:
            result = chain.invoke({
                "title": task.title,
                "description": task.description or "",
                "content": task.study_block.content,
                "format_instructions": parser.get_format_instructions()
            })
            materials = schema.model_validate(result).model_dump()
        except Exception as e:
            logger.exception("Summary generation failed for task %s", task.id)
            raise SummaryGenerationError() from e

        summary = render_markdown(task.task_type, materials)
        logger.info("Generated %s materials for task %s", task.task_type, task.id)
        return summary, materials
