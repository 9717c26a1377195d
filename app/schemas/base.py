# app/schemas/base.py
from typing import Annotated, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationInfo(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int


class MessageResponse(ApiModel):
    message: str


def validate_media_url(value: Optional[str]) -> Optional[str]:
    """Accept absolute http(s) URLs only; None passes through."""
    if value is None:
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


MediaUrl = Annotated[Optional[str], AfterValidator(validate_media_url)]
