from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class PlanGeneration(Base):
    """One successful plan generation run for a study block"""
    __tablename__ = "plan_generations"
    __table_args__ = (
        UniqueConstraint("study_block_id", "idempotency_key", name="uq_plan_generation_key"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    study_block_id = Column(Integer, ForeignKey("study_blocks.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    idempotency_key = Column(String)  # client supplied, optional
    created_at = Column(DateTime, default=datetime.utcnow)
    
    study_block = relationship("StudyBlock", back_populates="plan_generations")
    tasks = relationship("Task", back_populates="plan_generation", order_by="Task.due_date")
