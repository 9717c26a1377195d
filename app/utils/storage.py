# app/utils/storage.py

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, UploadFile

from app.core.config import Settings, settings

logger = logging.getLogger(__name__)

# Query parameters that only appear in SigV4 presigned URLs
SIGNATURE_MARKERS = ("X-Amz-Signature", "X-Amz-Algorithm")


class StorageError(Exception):
    """Raised when the object store rejects an upload or delete."""


@dataclass(frozen=True)
class StorageConfig:
    bucket: str
    region: str = "us-east-1"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    read_expiration: int = 3600 * 24 * 7
    upload_expiration: int = 3600
    max_upload_size: int = 10 * 1024 * 1024
    allowed_extensions: tuple = ("jpg", "jpeg", "png", "gif", "webp")

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            bucket=settings.aws_s3_bucket_name,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id or None,
            secret_access_key=settings.aws_secret_access_key or None,
            endpoint_url=settings.aws_endpoint_url,
            read_expiration=settings.presigned_read_expiration,
            upload_expiration=settings.presigned_upload_expiration,
            max_upload_size=settings.max_upload_size_mb * 1024 * 1024,
            allowed_extensions=tuple(ext.lower() for ext in settings.allowed_image_types),
        )

    @property
    def public_base_url(self) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com"


class StorageService:
    """S3 access: uploads, deletes, and presigned URLs for stored media."""

    def __init__(self, config: StorageConfig, client=None):
        self.config = config
        self.client = client or boto3.client(
            "s3",
            region_name=config.region,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            endpoint_url=config.endpoint_url,
            config=BotoConfig(signature_version="s3v4"),
        )

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------
    @staticmethod
    def get_file_extension(filename: str) -> str:
        return Path(filename).suffix.lower().lstrip(".")

    @classmethod
    def generate_user_image_key(cls, user_id: int, filename: str) -> str:
        extension = cls.get_file_extension(filename)
        timestamp = int(time.time() * 1000)
        return f"users/{user_id}/avatar-{timestamp}.{extension}"

    @classmethod
    def generate_post_image_key(cls, user_id: int, post_id: int, filename: str) -> str:
        extension = cls.get_file_extension(filename)
        timestamp = int(time.time() * 1000)
        return f"posts/{user_id}/{post_id}-{timestamp}.{extension}"

    def public_url(self, key: str) -> str:
        return f"{self.config.public_base_url}/{key}"

    def extract_key(self, url: str) -> Optional[str]:
        """
        Derive the object key from a stored media reference.

        Accepts virtual-hosted URLs (https://bucket.s3.region.amazonaws.com/key),
        path-style URLs (https://s3.region.amazonaws.com/bucket/key) and bare keys.
        Returns None when no key can be derived.
        """
        parsed = urlparse(url)
        if not parsed.scheme:
            key = url.split("?", 1)[0].lstrip("/")
            return key or None

        key = unquote(parsed.path).lstrip("/")
        bucket = self.config.bucket
        if (
            bucket
            and not parsed.netloc.startswith(f"{bucket}.")
            and key.startswith(f"{bucket}/")
        ):
            key = key[len(bucket) + 1 :]
        return key or None

    # ------------------------------------------------------------------
    # Presigned URLs
    # ------------------------------------------------------------------
    @staticmethod
    def is_presigned(url: str) -> bool:
        return any(marker in url for marker in SIGNATURE_MARKERS)

    def get_presigned_read_url(self, key: str, expires_in: Optional[int] = None) -> str:
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.config.bucket, "Key": key},
            ExpiresIn=expires_in or self.config.read_expiration,
        )

    def get_presigned_upload_url(
        self, key: str, content_type: str, expires_in: Optional[int] = None
    ) -> str:
        return self.client.generate_presigned_url(
            "put_object",
            Params={
                "Bucket": self.config.bucket,
                "Key": key,
                "ContentType": content_type,
            },
            ExpiresIn=expires_in or self.config.upload_expiration,
        )

    def ensure_accessible_url(self, url: Optional[str]) -> Optional[str]:
        """
        Return a readable URL for a stored media reference.

        Already-signed URLs pass through untouched. Signing failures are logged
        and the stored reference is returned as-is.
        """
        if not url or self.is_presigned(url):
            return url

        try:
            key = self.extract_key(url)
            if not key:
                return url
            return self.get_presigned_read_url(key)
        except (BotoCoreError, ClientError, ValueError) as e:
            logger.error(f"Error generating presigned URL for {url}: {e}")
            return url

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------
    def upload_file(self, body: bytes, key: str, content_type: str) -> str:
        """Store an object and return its unsigned public URL."""
        try:
            self.client.put_object(
                Bucket=self.config.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Storage upload failed for {key}: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"Uploaded object to storage: {key}")
        return self.public_url(key)

    def delete_file(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.config.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Storage delete failed for {key}: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"Deleted object from storage: {key}")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate_image_name(self, filename: Optional[str]) -> None:
        """
        Validate the name of an image about to be stored.

        Raises:
            HTTPException: If the filename is missing or has a disallowed extension
        """
        if not filename:
            raise HTTPException(status_code=400, detail="No filename provided")

        extension = self.get_file_extension(filename)
        if extension not in self.config.allowed_extensions:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid file type. Allowed types: {', '.join(self.config.allowed_extensions)}",
            )

    async def read_image(self, file: UploadFile) -> bytes:
        """
        Validate an uploaded image and return its content.

        Raises:
            HTTPException: If file validation fails
        """
        self.validate_image_name(file.filename)

        try:
            contents = await file.read()
        finally:
            await file.seek(0)

        if len(contents) == 0:
            raise HTTPException(status_code=400, detail="Empty file uploaded")

        if len(contents) > self.config.max_upload_size:
            raise HTTPException(
                status_code=400,
                detail=f"File size exceeds maximum allowed size of {self.config.max_upload_size / (1024 * 1024)}MB",
            )

        return contents


# Created once at process start; injected through app.core.dependencies.get_storage
storage_service = StorageService(StorageConfig.from_settings(settings))
