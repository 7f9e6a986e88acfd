from sqlalchemy.orm import Session
from backend.models import AuthSession
from datetime import datetime, timedelta
from typing import Optional
import secrets

def create_auth_session(db: Session, user_id: int, ttl_days: int) -> AuthSession:
    """Issue a new session token for a user"""
    auth_session = AuthSession(
        token=secrets.token_urlsafe(32),
        user_id=user_id,
        expires_at=datetime.utcnow() + timedelta(days=ttl_days)
    )
    db.add(auth_session)
    db.commit()
    db.refresh(auth_session)
    return auth_session

def get_auth_session(db: Session, token: str) -> Optional[AuthSession]:
    """Get an unexpired session by token"""
    return db.query(AuthSession).filter(
        AuthSession.token == token,
        AuthSession.expires_at > datetime.utcnow()
    ).first()

def delete_auth_session(db: Session, token: str) -> bool:
    """Delete a session; returns whether one existed"""
    deleted = db.query(AuthSession).filter(AuthSession.token == token).delete()
    db.commit()
    return deleted > 0
