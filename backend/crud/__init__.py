from backend.crud.user import create_user, get_user_by_email
from backend.crud.auth_session import create_auth_session, get_auth_session, delete_auth_session
from backend.crud.study_block import create_study_block, get_study_blocks, get_study_block
from backend.crud.task import (
    create_plan_tasks,
    get_plan_generation,
    get_task,
    update_task,
    save_task_summary,
    get_tasks_due_between,
    get_tasks_due_on,
    day_bounds,
    get_block_progress
)

__all__ = [
    "create_user",
    "get_user_by_email",
    "create_auth_session",
    "get_auth_session",
    "delete_auth_session",
    "create_study_block",
    "get_study_blocks",
    "get_study_block",
    "create_plan_tasks",
    "get_plan_generation",
    "get_task",
    "update_task",
    "save_task_summary",
    "get_tasks_due_between",
    "get_tasks_due_on",
    "day_bounds",
    "get_block_progress",
]
