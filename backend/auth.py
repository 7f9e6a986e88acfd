"""Password hashing and session resolution."""

import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from backend.crud import create_auth_session, create_user, get_auth_session, get_user_by_email
from backend.config import settings
from backend.errors import ConflictError, UnauthorizedError
from backend.models import AuthSession, User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def register_user(db: Session, email: str, password: str, name: Optional[str] = None) -> User:
    if get_user_by_email(db, email):
        raise ConflictError("Email already registered")
    user = create_user(db, email, hash_password(password), name)
    logger.info("Registered user %s", user.id)
    return user


def login(db: Session, email: str, password: str) -> AuthSession:
    """Check credentials and open a session. Raises UnauthorizedError on mismatch."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    return create_auth_session(db, user.id, settings.session_ttl_days)


def token_from_headers(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    """Bearer header wins over the session cookie."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return cookie_token or None


def resolve_session_user(db: Session, token: Optional[str]) -> User:
    if not token:
        raise UnauthorizedError()
    auth_session = get_auth_session(db, token)
    if not auth_session:
        raise UnauthorizedError()
    return auth_session.user
