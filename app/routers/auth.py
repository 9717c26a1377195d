# app/routers/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.dependencies import get_optional_user, get_storage
from app.core.limiter import limiter
from app.core.security import jwt_manager
from app.models.user import User
from app.schemas.auth import SessionResponse, SignInRequest, SignUpRequest
from app.schemas.base import MessageResponse
from app.schemas.user import UserResponse
from app.services.auth import AuthService
from app.services.user import UserService
from app.utils.storage import StorageService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/sign-up/email",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.rate_limit_auth)
def sign_up(
    request: Request,
    response: Response,
    payload: SignUpRequest,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """Create an account and start a session"""
    service = AuthService(db)
    user = service.register_user(payload)
    jwt_manager.set_session_cookie(response, service.create_session(user))
    return UserService(db, storage).to_response(user, include_email=True)


@router.post("/sign-in/email", response_model=UserResponse)
@limiter.limit(settings.rate_limit_auth)
def sign_in(
    request: Request,
    response: Response,
    payload: SignInRequest,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """Start a session with email and password"""
    service = AuthService(db)
    user = service.authenticate(payload)
    jwt_manager.set_session_cookie(response, service.create_session(user))
    return UserService(db, storage).to_response(user, include_email=True)


@router.post("/sign-out", response_model=MessageResponse)
def sign_out(response: Response):
    jwt_manager.clear_session_cookie(response)
    return {"message": "Signed out"}


@router.get("/get-session", response_model=SessionResponse)
def get_session(
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """Current session user, or null when signed out"""
    if not current_user:
        return SessionResponse(user=None)
    user = UserService(db, storage).to_response(current_user, include_email=True)
    return SessionResponse(user=user)
