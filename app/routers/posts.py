# app/routers/posts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user, get_optional_user, get_storage
from app.models.user import User
from app.schemas.base import MessageResponse
from app.schemas.post import PostCreate, PostListResponse, PostResponse, PostUpdate
from app.services.post import PostService
from app.utils.pagination import PageParams, page_params
from app.utils.storage import StorageService

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Create a new post"""
    service = PostService(db, storage)
    return service.create_post(post_in, current_user.id)


@router.get("", response_model=PostListResponse)
def get_posts(
    params: PageParams = Depends(page_params),
    author_id: Optional[int] = Query(None, alias="authorId"),
    search: Optional[str] = Query(None, max_length=200),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Get the feed, newest first.
    Can be filtered by author or by a case-insensitive search on title and content.
    """
    service = PostService(db, storage)
    user_id = current_user.id if current_user else None
    posts, pagination = service.get_posts(params, user_id, author_id, search)
    return {"posts": posts, "pagination": pagination}


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: Optional[User] = Depends(get_optional_user),
):
    service = PostService(db, storage)
    user_id = current_user.id if current_user else None
    post = service.get_post(post_id, user_id)

    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )

    return post


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    post_in: PostUpdate,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Update a post.
    Only the author can update it.
    """
    service = PostService(db, storage)
    post = service.update_post(post_id, post_in, current_user.id)

    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found or unauthorized",
        )

    return post


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Soft delete a post (author only)"""
    service = PostService(db, storage)

    if not service.delete_post(post_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found or unauthorized",
        )

    return {"message": "Post deleted successfully"}
