from backend.models.user import User
from backend.models.auth_session import AuthSession
from backend.models.study_block import StudyBlock
from backend.models.plan_generation import PlanGeneration
from backend.models.task import Task

__all__ = [
    "User",
    "AuthSession",
    "StudyBlock",
    "PlanGeneration",
    "Task"
]
