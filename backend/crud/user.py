from sqlalchemy.orm import Session
from backend.models import User
from typing import Optional

def create_user(db: Session, email: str, password_hash: str, name: Optional[str] = None) -> User:
    """Create a new user account"""
    db_user = User(email=email.lower(), password_hash=password_hash, name=name)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by (case-insensitive) email"""
    return db.query(User).filter(User.email == email.lower()).first()
