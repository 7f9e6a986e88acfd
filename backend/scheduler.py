import logging
from langchain_core.language_models import BaseChatModel
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import JsonOutputParser
from pydantic import ValidationError
from typing import List
from backend.errors import UpstreamError
from backend.models import StudyBlock
from backend.schemas import GeneratedPlan, GeneratedTask

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = {
    "mon": "Monday",
    "tue": "Tuesday",
    "wed": "Wednesday",
    "thu": "Thursday",
    "fri": "Friday",
    "sat": "Saturday",
    "sun": "Sunday",
}


class PlanGenerationError(UpstreamError):
    message = "Error generating study plan"


class StudyPlanScheduler:
    """AI-powered decomposition of a study block into dated tasks"""

    def __init__(self, llm: BaseChatModel):
        self.llm = llm
        self.parser = JsonOutputParser(pydantic_object=GeneratedPlan)

    def generate_plan(self, study_block: StudyBlock) -> List[GeneratedTask]:
        """
        Ask the LLM for a study plan covering the block's content.

        Args:
            study_block: Block providing title, content, hours/day, weekdays and dates

        Returns:
            Validated tasks in the order returned by the model

        Raises:
            PlanGenerationError: the call failed or the output did not match
                the GeneratedPlan schema. Nothing is partially returned.
        """
        prompt = ChatPromptTemplate.from_messages([
            ("system", self._build_system_prompt()),
            ("human", self._build_plan_prompt())
        ])

        chain = prompt | self.llm | self.parser
        variables = self._prompt_variables(study_block)
        logger.debug("Plan prompt variables for block %s: %s", study_block.id, variables)

        try:
            result = chain.invoke({
                **variables,
                "format_instructions": self.parser.get_format_instructions()
            })
            plan = GeneratedPlan.model_validate(self._normalize(result))
        except ValidationError as e:
            logger.error("Plan for block %s did not match schema: %s", study_block.id, e)
            raise PlanGenerationError() from e
        except Exception as e:
            logger.exception("Plan generation failed for block %s", study_block.id)
            raise PlanGenerationError() from e

        logger.info("Generated %d tasks for block %s", len(plan.tasks), study_block.id)
        return plan.tasks

    @staticmethod
    def _normalize(result):
        """Models sometimes return the bare task array instead of {"tasks": [...]}"""
        if isinstance(result, list):
            return {"tasks": result}
        return result

    def _build_system_prompt(self) -> str:
        """Build system prompt for LLM"""
        return "You are a study plan creation assistant. Always return valid JSON containing study tasks."

    def _build_plan_prompt(self) -> str:
        """Human prompt template; block fields are filled in at invoke time"""
        return """Generate a detailed study plan for this exam/course:
Title: {title}
Content to Study: {content}
Available study time: {total_hours} hours per day
Available days: {days}
Start date: {start_date}
Test date: {end_date}

Create a structured study plan that:
1. Breaks down the content into logical learning units
2. Arranges topics in the most effective learning sequence
3. Includes practice exercises and review sessions
4. Accounts for spaced repetition
5. Adapts to the available study hours per day
6. Ensures all major topics are covered before the test date

Each task has a title, a description, a taskType ("learn", "practice" or "review") and a dueDate (YYYY-MM-DD).

Make sure:
- Tasks fit within the daily time limits
- Include regular review sessions
- Balance between learning, practice, and review
- Tasks are evenly distributed across available days
- Due dates are between the start date and the test date
- Task descriptions are specific and actionable

{format_instructions}"""

    def _prompt_variables(self, study_block: StudyBlock) -> dict:
        days = [WEEKDAY_NAMES.get(d, d) for d in study_block.days_of_week or []]
        return {
            "title": study_block.title,
            "content": study_block.content,
            "total_hours": study_block.total_hours,
            "days": ", ".join(days),
            "start_date": study_block.start_date.strftime("%Y-%m-%d"),
            "end_date": study_block.end_date.strftime("%Y-%m-%d"),
        }
