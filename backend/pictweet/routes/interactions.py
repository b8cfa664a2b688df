"""
PicTweet Backend — Like & Comment Route Handlers
==================================================

What:  POST /tweets/{id}/like, DELETE /tweets/{id}/unlike,
       POST/GET /tweets/{id}/comments.
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pictweet.database import get_db_session
from pictweet.dependencies import get_current_user
from pictweet.models import User
from pictweet.schemas.common import ErrorResponse, MessageResponse
from pictweet.schemas.interaction import CommentResponse, CreateCommentRequest
from pictweet.services.interaction_service import interaction_service

router = APIRouter(prefix="/tweets/{tweet_id}", tags=["Interactions (Likes & Comments)"])


@router.post(
    "/like",
    status_code=201,
    response_model=MessageResponse,
    responses={
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "Tweet not found", "model": ErrorResponse},
        409: {"description": "Already liked", "model": ErrorResponse},
    },
    summary="Like a tweet",
)
async def like_tweet(
    tweet_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await interaction_service.like_tweet(db, current_user, tweet_id)


@router.delete(
    "/unlike",
    status_code=200,
    response_model=MessageResponse,
    responses={401: {"description": "Not authenticated", "model": ErrorResponse}},
    summary="Remove your like from a tweet",
)
async def unlike_tweet(
    tweet_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await interaction_service.unlike_tweet(db, current_user, tweet_id)


@router.post(
    "/comments",
    status_code=201,
    response_model=CommentResponse,
    responses={
        400: {"description": "Empty comment", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "Tweet not found", "model": ErrorResponse},
    },
    summary="Comment on a tweet",
)
async def create_comment(
    body: CreateCommentRequest,
    tweet_id: int = Path(..., ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await interaction_service.create_comment(db, current_user, tweet_id, body.text)


@router.get(
    "/comments",
    response_model=List[CommentResponse],
    responses={404: {"description": "Tweet not found", "model": ErrorResponse}},
    summary="Comments on a tweet, newest first",
)
async def get_comments(
    tweet_id: int = Path(..., ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentResponse]:
    return await interaction_service.get_comments(db, tweet_id, limit=limit, offset=offset)
