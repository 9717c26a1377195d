# app/routers/upload.py
import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from app.core.dependencies import get_current_user, get_storage
from app.models.user import User
from app.schemas.upload import (
    DirectUploadResponse,
    PresignedUrlRequest,
    PresignedUrlResponse,
    UploadType,
)
from app.utils.storage import StorageError, StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["Upload"])


def _object_key(
    storage: StorageService,
    user_id: int,
    upload_type: UploadType,
    filename: str,
    post_id: Optional[int],
) -> str:
    if upload_type == UploadType.AVATAR:
        return storage.generate_user_image_key(user_id, filename)

    if post_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="postId is required for post images",
        )
    return storage.generate_post_image_key(user_id, post_id, filename)


def _storage_failure(error_message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": error_message, "details": str(exc)},
    )


@router.post("/presigned-url", response_model=PresignedUrlResponse)
def get_presigned_upload_url(
    request: PresignedUrlRequest,
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Get a URL the client can PUT an image to directly.
    The URL is valid for one hour.
    """
    storage.validate_image_name(request.filename)
    key = _object_key(
        storage, current_user.id, request.type, request.filename, request.post_id
    )

    try:
        presigned_url = storage.get_presigned_upload_url(key, request.content_type)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error generating presigned upload URL for {key}: {e}")
        return _storage_failure("Failed to generate upload URL", e)

    return PresignedUrlResponse(
        presigned_url=presigned_url,
        key=key,
        public_url=storage.public_url(key),
    )


@router.post("/direct", response_model=DirectUploadResponse)
async def upload_direct(
    file: UploadFile = File(..., description="Image file"),
    upload_type: UploadType = Form(..., alias="type"),
    post_id: Optional[int] = Form(None, alias="postId"),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Upload an image through the server.
    Replacing an avatar removes the previous object first.
    """
    contents = await storage.read_image(file)
    key = _object_key(storage, current_user.id, upload_type, file.filename, post_id)

    if upload_type == UploadType.AVATAR and current_user.image:
        old_key = storage.extract_key(current_user.image)
        if old_key:
            try:
                storage.delete_file(old_key)
            except StorageError as e:
                logger.warning(f"Could not delete previous avatar {old_key}: {e}")

    try:
        public_url = storage.upload_file(
            contents, key, file.content_type or "application/octet-stream"
        )
        url = storage.get_presigned_read_url(key)
    except (StorageError, BotoCoreError, ClientError) as e:
        logger.error(f"Upload error for user {current_user.id}: {e}")
        return _storage_failure("Failed to upload file", e)

    return DirectUploadResponse(url=url, key=key, public_url=public_url)
