import logging
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from backend import crud
from backend.api.deps import get_current_user, get_material_generator, get_owned_task
from backend.database import get_db
from backend.models import Task, User
from backend.schemas import (
    SummaryResponse,
    TaskDetail,
    TaskEnvelope,
    TaskUpdate,
    TodayEnvelope,
    TodayTask,
)
from backend.segmentation import materials_for_task
from backend.study_materials import StudyMaterialGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


def task_detail(task: Task) -> TaskDetail:
    detail = TaskDetail.model_validate(task)
    detail.materials = materials_for_task(task)
    return detail


# Registered before "/{id}" so "today" is not read as a task id
@router.get("/today", response_model=TodayEnvelope)
def tasks_due_today(
    day: Optional[date] = Query(default=None, description="Calendar day, defaults to today (server local time)"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    tasks = crud.get_tasks_due_on(db, user.id, day or date.today())
    return {
        "tasks": [
            TodayTask(
                id=t.id,
                title=t.title,
                description=t.description,
                due_date=t.due_date,
                completed=t.completed,
                task_type=t.task_type,
                block_title=t.study_block.title,
                block_id=t.study_block_id
            )
            for t in tasks
        ]
    }


@router.get("/{id}", response_model=TaskEnvelope)
def get_task(task: Task = Depends(get_owned_task)):
    return {"task": task_detail(task)}


@router.patch("/{id}", response_model=TaskEnvelope)
def update_task(data: TaskUpdate, task: Task = Depends(get_owned_task), db: Session = Depends(get_db)):
    task = crud.update_task(db, task, data.model_dump(exclude_unset=True))
    return {"task": task_detail(task)}


@router.post("/{id}/generate-summary", response_model=SummaryResponse)
def generate_summary(
    task: Task = Depends(get_owned_task),
    generator: StudyMaterialGenerator = Depends(get_material_generator),
    db: Session = Depends(get_db)
):
    summary, materials = generator.generate(task)
    crud.save_task_summary(db, task, summary, materials)
    return {"summary": summary, "materials": materials}
