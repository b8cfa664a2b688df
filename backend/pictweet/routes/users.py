"""
PicTweet Backend — User & Follow Route Handlers
=================================================

What:  Follow/unfollow, profile, follower/following listings and liked tweets.
Who:   Called by the frontend profile pages.

    POST   /users/{id}/follow       (auth)
    DELETE /users/{id}/unfollow     (auth)
    GET    /users/{id}/profile
    GET    /users/{id}/followers
    GET    /users/{id}/following
    GET    /users/{id}/likes        (auth optional, drives hasLiked)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from pictweet.database import get_db_session
from pictweet.dependencies import get_current_user, get_optional_user
from pictweet.models import User
from pictweet.schemas.common import ErrorResponse, MessageResponse
from pictweet.schemas.tweet import LikedTweetResponse
from pictweet.schemas.user import UserProfileResponse
from pictweet.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users & Follows"])


@router.post(
    "/{user_id_to_follow}/follow",
    status_code=200,
    response_model=MessageResponse,
    responses={
        400: {"description": "Cannot follow yourself", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "User to follow not found", "model": ErrorResponse},
        409: {"description": "Already following", "model": ErrorResponse},
    },
    summary="Follow a user",
)
async def follow_user(
    user_id_to_follow: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await user_service.follow_user(db, current_user, user_id_to_follow)


@router.delete(
    "/{user_id_to_unfollow}/unfollow",
    status_code=200,
    response_model=MessageResponse,
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "Follow relationship not found", "model": ErrorResponse},
    },
    summary="Unfollow a user",
)
async def unfollow_user(
    user_id_to_unfollow: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await user_service.unfollow_user(db, current_user, user_id_to_unfollow)


@router.get(
    "/{user_id}/profile",
    response_model=UserProfileResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="User profile with follower counts",
)
async def get_user_profile(
    user_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> UserProfileResponse:
    return await user_service.get_user_profile(db, user_id)


@router.get(
    "/{user_id}/followers",
    response_model=List[UserProfileResponse],
    responses={404: {"description": "No followers", "model": ErrorResponse}},
    summary="Users following this user",
)
async def get_user_followers(
    user_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserProfileResponse]:
    return await user_service.get_user_followers(db, user_id)


@router.get(
    "/{user_id}/following",
    response_model=List[UserProfileResponse],
    responses={404: {"description": "Not following anyone", "model": ErrorResponse}},
    summary="Users this user follows",
)
async def get_user_following(
    user_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserProfileResponse]:
    return await user_service.get_user_following(db, user_id)


@router.get(
    "/{user_id}/likes",
    response_model=List[LikedTweetResponse],
    responses={404: {"description": "User not found or no likes", "model": ErrorResponse}},
    summary="Tweets liked by this user",
)
async def get_user_likes(
    user_id: int = Path(..., ge=1),
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[LikedTweetResponse]:
    return await user_service.get_user_likes(db, user_id, viewer=viewer)
