# services/auth.py
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.core.hasher import PasswordHelper
from app.core.security import jwt_manager
from app.models.user import User
from app.schemas.auth import SignInRequest, SignUpRequest

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.password_helper = PasswordHelper()

    def _get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    @db_exception
    def register_user(self, request: SignUpRequest) -> User:
        """
        Create an account with email and password
        """
        if self._get_by_email(request.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists",
            )

        user = User(
            name=request.name,
            email=request.email.lower(),
            hashed_password=self.password_helper.hash_password(request.password),
        )

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"New user registered: {user.id}")
        return user

    def authenticate(self, request: SignInRequest) -> User:
        """
        Check email and password, returning the matching user
        """
        user = self._get_by_email(request.email)

        if not user or not self.password_helper.check_password(
            request.password, user.hashed_password
        ):
            logger.warning(f"Failed sign-in attempt for {request.email}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        return user

    def create_session(self, user: User) -> str:
        return jwt_manager.create_session_token(user)
