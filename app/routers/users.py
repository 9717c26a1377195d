# app/routers/users.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user, get_optional_user, get_storage
from app.models.user import User
from app.schemas.post import PostListResponse
from app.schemas.user import UserResponse, UserUpdate
from app.services.user import UserService
from app.utils.pagination import PageParams, page_params
from app.utils.storage import StorageService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={404: {"description": "Not found"}},
)


# /me routes must be registered before /{user_id}


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Get current user's profile, including email.
    """
    return UserService(db, storage).to_response(current_user, include_email=True)


@router.put("/me", response_model=UserResponse)
def update_current_user_profile(
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return UserService(db, storage).update_user(current_user, user_in)


@router.get("/{user_id}", response_model=UserResponse)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Retrieve a user's public profile by their ID.
    """
    viewer_id = current_user.id if current_user else None
    profile = UserService(db, storage).get_user_profile(user_id, viewer_id)

    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return profile


@router.get("/{user_id}/posts", response_model=PostListResponse)
def read_user_posts(
    user_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: Optional[User] = Depends(get_optional_user),
):
    viewer_id = current_user.id if current_user else None
    posts, pagination = UserService(db, storage).get_user_posts(
        user_id, params, viewer_id
    )
    return {"posts": posts, "pagination": pagination}
