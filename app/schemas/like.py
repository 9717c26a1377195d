# app/schemas/like.py
from app.schemas.base import ApiModel


class LikeToggleResponse(ApiModel):
    liked: bool
