# app/routers/follows.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.dependencies import get_current_user, get_storage
from app.models.user import User
from app.schemas.follow import (
    FollowCheckResponse,
    FollowersListResponse,
    FollowingListResponse,
    FollowResponse,
    UnfollowResponse,
)
from app.services.follow import FollowService
from app.utils.pagination import PageParams, page_params
from app.utils.storage import StorageService

router = APIRouter(
    prefix="/follows",
    tags=["Follows"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "/{user_id}",
    response_model=FollowResponse,
    status_code=status.HTTP_201_CREATED,
)
def follow_user(
    user_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    service = FollowService(db, storage)
    return service.follow_user(current_user.id, user_id)


@router.delete("/{user_id}", response_model=UnfollowResponse)
def unfollow_user(
    user_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    service = FollowService(db, storage)
    return {"success": service.unfollow_user(current_user.id, user_id)}


@router.get("/{user_id}/followers", response_model=FollowersListResponse)
def get_followers(
    user_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """Users following `user_id`"""
    service = FollowService(db, storage)
    followers, pagination = service.get_followers(user_id, params)
    return {"followers": followers, "pagination": pagination}


@router.get("/{user_id}/following", response_model=FollowingListResponse)
def get_following(
    user_id: int,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """Users that `user_id` follows"""
    service = FollowService(db, storage)
    following, pagination = service.get_following(user_id, params)
    return {"following": following, "pagination": pagination}


@router.get("/{user_id}/check", response_model=FollowCheckResponse)
def check_following(
    user_id: int,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    service = FollowService(db, storage)
    return {"is_following": service.is_following(current_user.id, user_id)}
