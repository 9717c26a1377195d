# app/schemas/auth.py
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import ApiModel
from app.schemas.user import UserResponse

# bcrypt only reads the first 72 bytes and rejects anything longer
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class SignUpRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class SignInRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_bytes(v)


class SessionResponse(ApiModel):
    user: Optional[UserResponse] = None
