"""
PicTweet Backend — Tweet Service
==================================

What:  Controller logic behind the /tweets routes: create, feed, search, detail.
How:   Async SQLAlchemy queries with the author eager-loaded (selectinload),
       image bytes delegated to StorageService.
Who:   Called by pictweet.routes.tweets.

Query shapes:
    Feed:    SELECT ... FROM tweets ORDER BY created_at DESC, id DESC
             LIMIT :limit OFFSET :offset
    Search:  same ordering, filtered by
             to_tsvector('english', tweet_text) @@ plainto_tsquery('english', :q)
             on PostgreSQL; term-wise case-insensitive LIKE elsewhere.
"""

import logging
from typing import List

from sqlalchemy import and_, cast, func, select
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pictweet.config import settings
from pictweet.exceptions import DatabaseError, NotFoundError, ValidationError
from pictweet.models import Tweet, User
from pictweet.schemas.tweet import CreateTweetRequest, TweetResponse
from pictweet.services.storage_service import storage_service

logger = logging.getLogger(__name__)

SEARCH_CONFIG = "english"


def tweet_to_response(tweet: Tweet) -> TweetResponse:
    """Shape a Tweet (with `user` loaded) into the API representation."""
    author = tweet.user
    return TweetResponse(
        id=tweet.id,
        image_url=tweet.image_url,
        tweet_text=tweet.tweet_text,
        created_at=tweet.created_at,
        user_id=tweet.user_id,
        username=author.username if author is not None else "unknown",
        avatar_url=author.avatar_url if author is not None else None,
    )


class TweetService:
    """
    Business logic for tweets.

    Error Handling:
        Missing rows become NotFoundError; SQLAlchemy failures are wrapped in
        DatabaseError so no SQL reaches the client.
    """

    async def create_tweet(
        self,
        db: AsyncSession,
        author: User,
        payload: CreateTweetRequest,
    ) -> TweetResponse:
        """
        Store the image, then insert the tweet row.

        Workflow:
            1. StorageService validates + writes the image → public URL
            2. Tweet row inserted (flush assigns id and created_at)
            3. On insert failure the stored image is removed

        Raises:
            ValidationError: missing/invalid image or non-image file type
            StorageError: image could not be written
            DatabaseError: insert failed
        """
        absolute_path, image_url = await storage_service.store_base64_image(
            payload.image_base64,
            payload.image_file_type,
        )

        try:
            tweet = Tweet(
                user_id=author.id,
                image_url=image_url,
                tweet_text=payload.tweet_text or None,
            )
            db.add(tweet)
            await db.flush()
        except SQLAlchemyError as e:
            await storage_service.cleanup_file(absolute_path)
            logger.error("Tweet insert failed for user %s: %s", author.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to create tweet.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Tweet %s created by user %s", tweet.id, author.id)
        return TweetResponse(
            id=tweet.id,
            image_url=tweet.image_url,
            tweet_text=tweet.tweet_text,
            created_at=tweet.created_at,
            user_id=author.id,
            username=author.username,
            avatar_url=author.avatar_url,
        )

    async def get_feed(
        self,
        db: AsyncSession,
        limit: int = 10,
        offset: int = 0,
    ) -> List[TweetResponse]:
        """Reverse-chronological page of all tweets."""
        query = (
            select(Tweet)
            .options(selectinload(Tweet.user))
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await db.execute(query)
            tweets = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error loading feed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not load tweets. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [tweet_to_response(tweet) for tweet in tweets]

    async def search_tweets(
        self,
        db: AsyncSession,
        query: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[TweetResponse]:
        """
        Full-text search over tweet text, newest first.

        Raises:
            ValidationError: blank query
        """
        term = (query or "").strip()
        if not term:
            raise ValidationError(message="Search query cannot be empty", field="query")

        statement = (
            select(Tweet)
            .options(selectinload(Tweet.user))
            .where(self._match_clause(term))
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            result = await db.execute(statement)
            tweets = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error searching tweets: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not search tweets. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.debug("Search %r matched %d tweets", term, len(tweets))
        return [tweet_to_response(tweet) for tweet in tweets]

    def _match_clause(self, term: str):
        """
        WHERE clause for `term`.

        PostgreSQL uses the tsvector expression covered by the GIN index
        twitter_tweets_search_vector_idx; other backends (SQLite in tests)
        require every word to appear in the text.
        """
        if make_url(settings.database_url).get_backend_name() == "postgresql":
            config = cast(SEARCH_CONFIG, REGCONFIG)
            return func.to_tsvector(config, Tweet.tweet_text).op("@@")(
                func.plainto_tsquery(config, term)
            )
        return and_(
            *(Tweet.tweet_text.icontains(word, autoescape=True) for word in term.split())
        )

    async def get_tweet(self, db: AsyncSession, tweet_id: int) -> TweetResponse:
        """
        Single tweet with its author.

        Raises:
            NotFoundError: no tweet with this id
        """
        try:
            result = await db.execute(
                select(Tweet).options(selectinload(Tweet.user)).where(Tweet.id == tweet_id)
            )
            tweet = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching tweet %s: %s", tweet_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the tweet. Please try again.",
                context={"tweet_id": tweet_id},
            )

        if tweet is None:
            raise NotFoundError(resource="tweet", resource_id=str(tweet_id), message="Tweet not found")

        return tweet_to_response(tweet)


# ── Singleton Instance ────────────────────────────────────────────────────
tweet_service = TweetService()
