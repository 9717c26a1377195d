# app/schemas/upload.py
from enum import Enum
from typing import Optional

from pydantic import Field

from app.schemas.base import ApiModel


class UploadType(str, Enum):
    AVATAR = "avatar"
    POST = "post"


class PresignedUrlRequest(ApiModel):
    filename: str = Field(..., min_length=1)
    content_type: str = Field(..., min_length=1)
    type: UploadType
    # Required when type is "post"
    post_id: Optional[int] = None


class PresignedUrlResponse(ApiModel):
    presigned_url: str
    key: str
    public_url: str


class DirectUploadResponse(ApiModel):
    url: str
    key: str
    public_url: str
