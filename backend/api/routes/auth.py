from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import Optional

from backend import auth
from backend.api.deps import get_current_user, get_session_token
from backend.config import settings
from backend.crud import delete_auth_session
from backend.database import get_db
from backend.models import User
from backend.schemas import LoginRequest, SessionResponse, UserCreate, UserEnvelope

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=UserEnvelope)
def register(data: UserCreate, db: Session = Depends(get_db)):
    user = auth.register_user(db, data.email, data.password, data.name)
    return {"user": user}


@router.post("/login", response_model=SessionResponse)
def login(data: LoginRequest, response: Response, db: Session = Depends(get_db)):
    auth_session = auth.login(db, data.email, data.password)
    response.set_cookie(
        settings.session_cookie_name,
        auth_session.token,
        max_age=settings.session_ttl_days * 24 * 3600,
        httponly=True,
        samesite="lax"
    )
    return {"token": auth_session.token, "user": auth_session.user}


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
):
    if token:
        delete_auth_session(db, token)
    response.delete_cookie(settings.session_cookie_name)
    return {"ok": True}


@router.get("/session", response_model=UserEnvelope)
def current_session(user: User = Depends(get_current_user)):
    return {"user": user}
