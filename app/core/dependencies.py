import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.security import jwt_manager
from app.models.user import User
from app.utils.storage import StorageService, storage_service

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _read_session_tokens(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> List[str]:
    """Cookie first, then the Bearer header used by API clients."""
    tokens = []
    cookie = request.cookies.get(settings.session_cookie_name)
    if cookie:
        tokens.append(cookie)
    if credentials and credentials.credentials not in tokens:
        tokens.append(credentials.credentials)
    return tokens


def _verify_session(tokens: List[str]) -> Dict[str, Any]:
    """
    Return the payload of the first token that verifies. A stale cookie does
    not mask a valid Bearer token; the last failure is raised otherwise.
    """
    error = None
    for token in tokens:
        try:
            return jwt_manager.verify_token(token, "session")
        except HTTPException as e:
            error = e
    raise error


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency that requires a valid session and returns the user.
    Raises 401 Unauthorized if the session is missing, invalid, or the user is gone.
    """
    tokens = _read_session_tokens(request, credentials)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    payload = _verify_session(tokens)

    user_id = payload.get("user_id")
    user = db.query(User).filter(User.id == user_id).first()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    return user


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    Dependency that returns a user if a valid session is provided, or None otherwise.
    Invalid or expired sessions are treated as anonymous callers.
    """
    tokens = _read_session_tokens(request, credentials)
    if not tokens:
        return None

    try:
        payload = _verify_session(tokens)
    except HTTPException:
        return None

    user_id = payload.get("user_id")
    return db.query(User).filter(User.id == user_id).first()


async def get_current_reviewer(
    current_user: User = Depends(get_current_user),
) -> User:
    """Dependency for moderation routes."""
    if not current_user.is_reviewer:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Reviewer access required",
        )
    return current_user


def get_storage() -> StorageService:
    return storage_service
