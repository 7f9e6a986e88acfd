from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from backend.database import Base

class User(Base):
    """Account that owns study blocks and tasks"""
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    study_blocks = relationship("StudyBlock", back_populates="user")
    tasks = relationship("Task", back_populates="user")
