# app/routers/likes.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.models.user import User
from app.schemas.like import LikeToggleResponse
from app.services.like import LikeService

router = APIRouter(
    prefix="/likes",
    tags=["Likes"],
    responses={404: {"description": "Not found"}},
)


@router.post("/posts/{post_id}", response_model=LikeToggleResponse)
def toggle_post_like(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Like a post, or remove the like if it is already there"""
    result = LikeService(db).toggle_post_like(post_id, current_user.id)

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )

    return result


@router.post("/comments/{comment_id}", response_model=LikeToggleResponse)
def toggle_comment_like(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Like a comment, or remove the like if it is already there"""
    result = LikeService(db).toggle_comment_like(comment_id, current_user.id)

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )

    return result
