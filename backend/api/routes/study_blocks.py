import logging
from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session
from typing import Optional

from backend import crud
from backend.api.deps import get_current_user, get_owned_study_block, get_plan_scheduler
from backend.database import get_db
from backend.models import StudyBlock, User
from backend.scheduler import StudyPlanScheduler
from backend.schemas import (
    PlanResponse,
    StudyBlockCreate,
    StudyBlockEnvelope,
    StudyBlockListEnvelope,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/study-blocks", tags=["Study Blocks"])


@router.get("", response_model=StudyBlockListEnvelope)
def list_study_blocks(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"study_blocks": crud.get_study_blocks(db, user.id)}


@router.post("", response_model=StudyBlockEnvelope)
def create_study_block(
    data: StudyBlockCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    study_block = crud.create_study_block(db, user.id, data)
    logger.info("User %s created study block %s", user.id, study_block.id)
    return {"study_block": study_block}


@router.get("/{id}", response_model=StudyBlockEnvelope)
def get_study_block(study_block: StudyBlock = Depends(get_owned_study_block)):
    return {"study_block": study_block}


@router.post("/{id}/generate-plan", response_model=PlanResponse)
def generate_plan(
    study_block: StudyBlock = Depends(get_owned_study_block),
    scheduler: StudyPlanScheduler = Depends(get_plan_scheduler),
    idempotency_key: Optional[str] = Header(default=None),
    db: Session = Depends(get_db)
):
    if idempotency_key:
        previous = crud.get_plan_generation(db, study_block.id, idempotency_key)
        if previous:
            logger.info("Replaying plan generation %s for block %s", previous.id, study_block.id)
            return {"message": "Study plan generated successfully", "tasks": previous.tasks}

    generated = scheduler.generate_plan(study_block)
    generation = crud.create_plan_tasks(db, study_block, generated, idempotency_key)
    return {"message": "Study plan generated successfully", "tasks": generation.tasks}
