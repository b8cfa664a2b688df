"""
PicTweet Backend — Tweet Route Handlers
=========================================

What:  POST /tweets, GET /tweets (feed), GET /tweets/search, GET /tweets/{id}.
How:   Extracts query/path/body parameters, delegates to TweetService.
Who:   Called by the frontend feed, composer and tweet detail views.

Route order matters: /tweets/search is declared before /tweets/{tweet_id}
so "search" is never parsed as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pictweet.database import get_db_session
from pictweet.dependencies import get_current_user
from pictweet.models import User
from pictweet.schemas.common import ErrorResponse
from pictweet.schemas.tweet import CreateTweetRequest, TweetResponse
from pictweet.services.tweet_service import tweet_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/tweets", tags=["Tweets"])


@router.post(
    "",
    status_code=200,
    response_model=TweetResponse,
    responses={
        200: {"description": "Tweet Created", "model": TweetResponse},
        400: {"description": "Missing or invalid image", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        500: {"description": "Storage or database failure", "model": ErrorResponse},
    },
    summary="Create a tweet with an image",
    description=(
        "Upload a base64-encoded image (optionally as a data URI) with optional text. "
        "The image is stored and its URL saved on the new tweet."
    ),
)
async def create_tweet(
    body: CreateTweetRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TweetResponse:
    logger.info(
        "Create tweet request: user=%s type=%s base64_len=%d",
        current_user.id,
        body.image_file_type,
        len(body.image_base64 or ""),
    )
    return await tweet_service.create_tweet(db=db, author=current_user, payload=body)


@router.get(
    "",
    response_model=List[TweetResponse],
    summary="Reverse-chronological feed",
)
async def get_feed_tweets(
    limit: int = Query(default=10, ge=1, le=100, description="Page size (max 100)"),
    offset: int = Query(default=0, ge=0, description="Number of tweets to skip"),
    db: AsyncSession = Depends(get_db_session),
) -> List[TweetResponse]:
    """
    Newest tweets first.

    Example client usage:
        Page 1: GET /api/v1/tweets?limit=10
        Page 2: GET /api/v1/tweets?limit=10&offset=10
    """
    return await tweet_service.get_feed(db=db, limit=limit, offset=offset)


@router.get(
    "/search",
    response_model=List[TweetResponse],
    responses={
        400: {"description": "Empty search query", "model": ErrorResponse},
    },
    summary="Full-text search over tweet text",
)
async def search_tweets(
    query: str = Query(..., description="Words to search for"),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
) -> List[TweetResponse]:
    return await tweet_service.search_tweets(db=db, query=query, limit=limit, offset=offset)


@router.get(
    "/{tweet_id}",
    response_model=TweetResponse,
    responses={
        404: {"description": "Tweet not found", "model": ErrorResponse},
    },
    summary="Get a single tweet by ID",
)
async def get_tweet_by_id(
    tweet_id: int = Path(..., ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> TweetResponse:
    return await tweet_service.get_tweet(db=db, tweet_id=tweet_id)
