from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional
from datetime import date, datetime

TaskType = Literal["learn", "practice", "review"]
WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys (accepts snake_case too)"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class UserCreate(BaseModel):
    """Schema for registering an account"""
    email: EmailStr
    password: str = Field(min_length=6)
    name: Optional[str] = None

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None

class SessionResponse(CamelModel):
    token: str
    user: UserResponse


# ---------------------------------------------------------------------------
# Study blocks
# ---------------------------------------------------------------------------

class StudyBlockCreate(CamelModel):
    """Schema for creating a study block.

    Accepts the field names sent by the create form (``hoursPerDay``,
    ``selectedDays``, ``testDate``) as well as the stored names. Any
    ``userId`` in the payload is ignored; ownership comes from the session.
    """
    title: str = Field(min_length=1)
    content: str = ""
    start_date: Optional[date] = None
    end_date: date = Field(validation_alias=AliasChoices("endDate", "testDate", "end_date"))
    total_hours: float = Field(gt=0, le=24, validation_alias=AliasChoices("totalHours", "hoursPerDay", "total_hours"))
    days_of_week: List[str] = Field(
        min_length=1,
        validation_alias=AliasChoices("daysOfWeek", "selectedDays", "days_of_week")
    )

    @field_validator("days_of_week")
    @classmethod
    def normalize_days(cls, days: List[str]) -> List[str]:
        normalized = []
        for day in days:
            code = day.strip().lower()[:3]
            if code not in WEEKDAYS:
                raise ValueError(f"Unknown weekday: {day}")
            if code not in normalized:
                normalized.append(code)
        return sorted(normalized, key=WEEKDAYS.index)

class TaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: datetime
    task_type: str
    completed: bool
    summary: Optional[str] = None
    last_summary_date: Optional[datetime] = None
    study_block_id: int
    user_id: int

class TaskDetail(TaskResponse):
    materials: Optional[Dict[str, Any]] = None

class StudyBlockResponse(CamelModel):
    id: int
    title: str
    start_date: datetime
    end_date: datetime
    total_hours: float
    days_of_week: List[str]
    content: str
    status: str
    user_id: int
    created_at: Optional[datetime] = None
    tasks: List[TaskResponse] = []


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

class TaskUpdate(BaseModel):
    """Partial task update; only fields present in the payload are applied"""
    completed: Optional[bool] = None
    summary: Optional[str] = None

class TodayTask(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    due_date: datetime
    completed: bool
    task_type: str
    block_title: str
    block_id: int


# ---------------------------------------------------------------------------
# LLM output schemas
# ---------------------------------------------------------------------------

class GeneratedTask(BaseModel):
    """Schema for one task returned by plan generation"""
    title: str = Field(description="Clear, specific task title")
    description: str = Field(default="", description="Detailed description of what to study/practice")
    taskType: TaskType = Field(description='One of "learn", "practice" or "review"')
    dueDate: date = Field(description="Due date in YYYY-MM-DD format")

class GeneratedPlan(BaseModel):
    """Schema for the complete generated study plan"""
    tasks: List[GeneratedTask] = Field(description="Study tasks in the order they should be done")

class PracticeProblem(BaseModel):
    question: str = Field(description="Problem statement in markdown")
    solution: str = Field(description="Step-by-step solution in markdown")

class Flashcard(BaseModel):
    question: str = Field(description="Specific question")
    answer: str = Field(description="Concise answer")

class LearnMaterials(BaseModel):
    """Learning summary for a learn task"""
    overview: str = Field(description="Markdown explanation with headers, definitions, examples and misconceptions")
    key_points: List[str] = Field(description="Key concepts to remember, one sentence each")

class PracticeMaterials(BaseModel):
    """Practice session for a practice task"""
    problems: List[PracticeProblem] = Field(description="5-7 practice problems of varying difficulty")

class ReviewMaterials(BaseModel):
    """Review sheet for a review task"""
    summary: str = Field(description="Markdown quick review of the key points, formulas and rules")
    quick_reference: List[str] = Field(description="Critical facts to remember, one per item")
    flashcards: List[Flashcard] = Field(description="At least 10 question/answer flashcards")


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------

class UserEnvelope(CamelModel):
    user: UserResponse

class StudyBlockEnvelope(CamelModel):
    study_block: StudyBlockResponse

class StudyBlockListEnvelope(CamelModel):
    study_blocks: List[StudyBlockResponse]

class TaskEnvelope(CamelModel):
    task: TaskDetail

class TodayEnvelope(CamelModel):
    tasks: List[TodayTask]

class PlanResponse(CamelModel):
    message: str
    tasks: List[TaskResponse]

class SummaryResponse(CamelModel):
    summary: str
    materials: Dict[str, Any]
