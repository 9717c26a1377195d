# app/routers/comments.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user, get_optional_user, get_storage
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
)
from app.services.comment import CommentService
from app.utils.pagination import PageParams, page_params
from app.utils.storage import StorageService

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/posts/{post_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Comment on a post"""
    service = CommentService(db, storage)
    comment = service.create_comment(post_id, comment_in, current_user.id)

    if not comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )

    return comment


@router.get("/posts/{post_id}", response_model=CommentListResponse)
def get_comments(
    post_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Get comments on a post, oldest first"""
    service = CommentService(db, storage)
    user_id = current_user.id if current_user else None
    result = service.get_comments(post_id, params, user_id)

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )

    comments, pagination = result
    return {"comments": comments, "pagination": pagination}


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: int,
    comment_in: CommentUpdate,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    service = CommentService(db, storage)
    comment = service.update_comment(comment_id, comment_in, current_user.id)

    if not comment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found or unauthorized",
        )

    return comment


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Soft delete a comment (author only)"""
    service = CommentService(db, storage)

    if not service.delete_comment(comment_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found or unauthorized",
        )

    return {"message": "Comment deleted successfully"}
