from sqlalchemy.orm import Session, selectinload
from backend.models import StudyBlock
from backend.schemas import StudyBlockCreate
from datetime import date, datetime, time
from typing import List, Optional

def create_study_block(db: Session, user_id: int, block: StudyBlockCreate) -> StudyBlock:
    """Create a study block owned by user_id"""
    start = block.start_date or date.today()
    db_block = StudyBlock(
        user_id=user_id,
        title=block.title,
        start_date=datetime.combine(start, time.min),
        end_date=datetime.combine(block.end_date, time.min),
        total_hours=block.total_hours,
        days_of_week=block.days_of_week,
        content=block.content,
        status="ACTIVE"
    )
    db.add(db_block)
    db.commit()
    db.refresh(db_block)
    return db_block

def get_study_blocks(db: Session, user_id: int) -> List[StudyBlock]:
    """Get all study blocks for a user, newest first, with their tasks"""
    return db.query(StudyBlock).options(selectinload(StudyBlock.tasks)).filter(
        StudyBlock.user_id == user_id
    ).order_by(StudyBlock.created_at.desc(), StudyBlock.id.desc()).all()

def get_study_block(db: Session, block_id: int, user_id: int) -> Optional[StudyBlock]:
    """Get a study block only if it belongs to user_id"""
    return db.query(StudyBlock).filter(
        StudyBlock.id == block_id,
        StudyBlock.user_id == user_id
    ).first()
