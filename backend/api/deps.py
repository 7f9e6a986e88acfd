"""
Request-scoped dependencies shared by every route.

``get_current_user`` is the single session check; the ``get_owned_*``
dependencies build on it so a resource that is missing and one that belongs
to someone else look the same (404).
"""

from typing import Optional

from fastapi import Depends, Header, Path, Request
from langchain_core.language_models import BaseChatModel
from sqlalchemy.orm import Session

from backend.auth import resolve_session_user, token_from_headers
from backend.config import settings
from backend.crud import get_study_block, get_task
from backend.database import get_db
from backend.errors import NotFoundError
from backend.llm import get_llm
from backend.models import StudyBlock, Task, User
from backend.scheduler import StudyPlanScheduler
from backend.study_materials import StudyMaterialGenerator


def get_session_token(request: Request, authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    return token_from_headers(authorization, request.cookies.get(settings.session_cookie_name))


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> User:
    return resolve_session_user(db, token)


def get_owned_study_block(
    id: int = Path(),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> StudyBlock:
    study_block = get_study_block(db, id, user.id)
    if not study_block:
        raise NotFoundError("Study block not found")
    return study_block


def get_owned_task(
    id: int = Path(),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Task:
    task = get_task(db, id, user.id)
    if not task:
        raise NotFoundError("Task not found")
    return task


def get_chat_model() -> BaseChatModel:
    return get_llm()


def get_plan_scheduler(llm: BaseChatModel = Depends(get_chat_model)) -> StudyPlanScheduler:
    return StudyPlanScheduler(llm)


def get_material_generator(llm: BaseChatModel = Depends(get_chat_model)) -> StudyMaterialGenerator:
    return StudyMaterialGenerator(llm)
