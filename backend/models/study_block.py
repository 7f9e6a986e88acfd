from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class StudyBlock(Base):
    """Exam/course preparation window with its source content"""
    __tablename__ = "study_blocks"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)  # test date
    total_hours = Column(Float, nullable=False)  # hours per day
    days_of_week = Column(JSON, nullable=False)  # ["mon", "wed", ...]
    content = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default="ACTIVE")
    created_at = Column(DateTime, default=datetime.utcnow)
    
    user = relationship("User", back_populates="study_blocks")
    tasks = relationship(
        "Task",
        back_populates="study_block",
        order_by="Task.due_date",
        cascade="all, delete-orphan"
    )
    plan_generations = relationship("PlanGeneration", back_populates="study_block", cascade="all, delete-orphan")
