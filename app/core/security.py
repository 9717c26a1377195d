# core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Response, status
from jose import JWTError, jwt

from app.core.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)


class JWTManager:
    """Session token management. Tokens are HS256 JWTs carried in a cookie."""

    def __init__(self):
        self.secret_key = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.session_expire = timedelta(days=settings.session_expiration_days)
        self.issuer = settings.jwt_issuer

    def create_session_token(
        self,
        user: User,
        custom_expiration: Optional[timedelta] = None,
    ) -> str:
        """
        Create a session token for user

        Args:
            user: User model instance
            custom_expiration: Override default expiration

        Returns:
            JWT session token string
        """
        current_time = datetime.now(timezone.utc)
        expire = current_time + (custom_expiration or self.session_expire)

        payload = {
            "sub": str(user.id),
            "user_id": user.id,
            "email": user.email,
            "reviewer": bool(user.is_reviewer),
            "exp": int(expire.timestamp()),
            "iat": int(current_time.timestamp()),
            "iss": self.issuer,
            "type": "session",
        }

        try:
            token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        except JWTError as e:
            logger.error(f"Failed to create session token: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create session token",
            )

        logger.info(f"Session token created for user: {user.id}")
        return token

    def verify_token(self, token: str, token_type: str = "session") -> Dict[str, Any]:
        """
        Verify and decode a session token
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"verify_exp": True},
            )
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired session",
            )

        if payload.get("type") != token_type:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid token type. Expected {token_type}",
            )

        return payload

    def set_session_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=settings.session_cookie_name,
            value=token,
            max_age=int(self.session_expire.total_seconds()),
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="none" if settings.session_cookie_secure else "lax",
        )

    def clear_session_cookie(self, response: Response) -> None:
        response.delete_cookie(key=settings.session_cookie_name)


# Global instance
jwt_manager = JWTManager()
