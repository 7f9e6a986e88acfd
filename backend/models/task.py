from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class Task(Base):
    """Single dated unit of work generated for a study block"""
    __tablename__ = "tasks"
    
    id = Column(Integer, primary_key=True, index=True)
    study_block_id = Column(Integer, ForeignKey("study_blocks.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    plan_generation_id = Column(Integer, ForeignKey("plan_generations.id"))
    
    title = Column(String, nullable=False)
    description = Column(Text)
    due_date = Column(DateTime, nullable=False, index=True)
    task_type = Column(String, nullable=False)  # "learn", "practice" or "review"
    completed = Column(Boolean, nullable=False, default=False)
    
    summary = Column(Text)  # generated markdown
    materials = Column(JSON)  # structured study materials behind the summary
    last_summary_date = Column(DateTime)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    
    study_block = relationship("StudyBlock", back_populates="tasks")
    user = relationship("User", back_populates="tasks")
    plan_generation = relationship("PlanGeneration", back_populates="tasks")
