from sqlalchemy.orm import Session, joinedload
from backend.models import Task, StudyBlock, PlanGeneration
from backend.schemas import GeneratedTask
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple

def create_plan_tasks(
    db: Session,
    study_block: StudyBlock,
    generated_tasks: List[GeneratedTask],
    idempotency_key: Optional[str] = None
) -> PlanGeneration:
    """
    Insert all generated tasks for a study block in a single transaction.

    Either every task is written together with its PlanGeneration record,
    or nothing is (the transaction is rolled back and the error re-raised).
    """
    generation = PlanGeneration(
        study_block_id=study_block.id,
        user_id=study_block.user_id,
        idempotency_key=idempotency_key
    )
    try:
        db.add(generation)
        for item in generated_tasks:
            db.add(Task(
                title=item.title,
                description=item.description,
                due_date=datetime.combine(item.dueDate, time.min),
                task_type=item.taskType,
                completed=False,
                study_block_id=study_block.id,
                user_id=study_block.user_id,
                plan_generation=generation
            ))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(generation)
    return generation

def get_plan_generation(db: Session, study_block_id: int, idempotency_key: str) -> Optional[PlanGeneration]:
    """Find an earlier generation for the same block and key"""
    return db.query(PlanGeneration).filter(
        PlanGeneration.study_block_id == study_block_id,
        PlanGeneration.idempotency_key == idempotency_key
    ).first()

def get_task(db: Session, task_id: int, user_id: int) -> Optional[Task]:
    """Get a task only if it belongs to user_id"""
    return db.query(Task).filter(
        Task.id == task_id,
        Task.user_id == user_id
    ).first()

def update_task(db: Session, task: Task, updates: Dict[str, Any]) -> Task:
    """
    Apply a partial update.

    Setting a summary by hand also stamps last_summary_date and drops any
    structured materials, which no longer describe the new text.
    """
    if updates.get("completed") is not None:
        task.completed = updates["completed"]
    if updates.get("summary"):
        task.summary = updates["summary"]
        task.materials = None
        task.last_summary_date = datetime.now()
    db.commit()
    db.refresh(task)
    return task

def save_task_summary(db: Session, task: Task, summary: str, materials: Optional[Dict[str, Any]]) -> Task:
    """Overwrite a task's generated study materials"""
    task.summary = summary
    task.materials = materials
    task.last_summary_date = datetime.now()
    db.commit()
    db.refresh(task)
    return task

def get_tasks_due_between(db: Session, user_id: int, start: datetime, end: datetime) -> List[Task]:
    """Get tasks with start <= due_date < end, with their study block loaded"""
    return db.query(Task).options(joinedload(Task.study_block)).filter(
        Task.user_id == user_id,
        Task.due_date >= start,
        Task.due_date < end
    ).order_by(Task.due_date.asc(), Task.id.asc()).all()

def get_block_progress(study_block: StudyBlock) -> Dict[str, int]:
    """Completion counts for a block's tasks"""
    total = len(study_block.tasks)
    done = sum(1 for t in study_block.tasks if t.completed)
    percent = round(done * 100 / total) if total else 0
    return {"completed": done, "total": total, "percent": percent}

def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """[start of day, start of next day) as naive local datetimes"""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)

def get_tasks_due_on(db: Session, user_id: int, day: date) -> List[Task]:
    """Tasks due on a calendar day; midnight counts, the next midnight does not"""
    start, end = day_bounds(day)
    return get_tasks_due_between(db, user_id, start, end)
