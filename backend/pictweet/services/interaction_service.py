"""
PicTweet Backend — Interaction Service (Likes & Comments)
===========================================================

What:  Controller logic behind /tweets/{tweetId}/like, /unlike and /comments.
Who:   Called by pictweet.routes.interactions.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pictweet.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from pictweet.models import Comment, Like, Tweet, User
from pictweet.schemas.common import MessageResponse
from pictweet.schemas.interaction import CommentResponse

logger = logging.getLogger(__name__)


def comment_to_response(comment: Comment, author: User) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        text=comment.content,
        user_id=comment.user_id,
        tweet_id=comment.tweet_id,
        username=author.username if author is not None else "unknown",
        avatar_url=author.avatar_url if author is not None else None,
        created_at=comment.created_at,
    )


class InteractionService:
    """Likes and comments on tweets."""

    async def _require_tweet(self, db: AsyncSession, tweet_id: int) -> Tweet:
        tweet = await db.get(Tweet, tweet_id)
        if tweet is None:
            raise NotFoundError(resource="tweet", resource_id=str(tweet_id), message="Tweet not found.")
        return tweet

    async def like_tweet(self, db: AsyncSession, user: User, tweet_id: int) -> MessageResponse:
        """
        Record that `user` likes `tweet_id`.

        The likes table has no unique constraint, so the existing-like check
        happens here.

        Raises:
            NotFoundError: tweet does not exist
            ConflictError: already liked
        """
        try:
            await self._require_tweet(db, tweet_id)

            existing = await db.execute(
                select(Like.id).where(Like.user_id == user.id, Like.tweet_id == tweet_id).limit(1)
            )
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(message="You have already liked this tweet.")

            db.add(Like(user_id=user.id, tweet_id=tweet_id))
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error liking tweet %s: %s", tweet_id, str(e))
            raise DatabaseError(context={"tweet_id": tweet_id})

        logger.info("User %s liked tweet %s", user.id, tweet_id)
        return MessageResponse(message="Tweet liked successfully")

    async def unlike_tweet(self, db: AsyncSession, user: User, tweet_id: int) -> MessageResponse:
        """Remove `user`'s like(s) on `tweet_id`. Succeeds even if none existed."""
        try:
            result = await db.execute(
                delete(Like).where(Like.tweet_id == tweet_id, Like.user_id == user.id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error unliking tweet %s: %s", tweet_id, str(e))
            raise DatabaseError(context={"tweet_id": tweet_id})

        logger.info("User %s unliked tweet %s (%s rows)", user.id, tweet_id, result.rowcount)
        return MessageResponse(message="Tweet unliked successfully")

    async def create_comment(
        self,
        db: AsyncSession,
        user: User,
        tweet_id: int,
        text: str,
    ) -> CommentResponse:
        """
        Raises:
            ValidationError: text is only whitespace
            NotFoundError: tweet does not exist
        """
        content = (text or "").strip()
        if not content:
            raise ValidationError(message="Comment text cannot be empty.", field="text")

        try:
            await self._require_tweet(db, tweet_id)

            comment = Comment(user_id=user.id, tweet_id=tweet_id, content=content)
            db.add(comment)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error commenting on tweet %s: %s", tweet_id, str(e))
            raise DatabaseError(context={"tweet_id": tweet_id})

        logger.info("User %s commented on tweet %s", user.id, tweet_id)
        return comment_to_response(comment, user)

    async def get_comments(
        self,
        db: AsyncSession,
        tweet_id: int,
        limit: int = 10,
        offset: int = 0,
    ) -> List[CommentResponse]:
        """
        Comments on a tweet, newest first.

        Raises:
            NotFoundError: tweet does not exist
        """
        try:
            await self._require_tweet(db, tweet_id)

            result = await db.execute(
                select(Comment)
                .options(selectinload(Comment.user))
                .where(Comment.tweet_id == tweet_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
                .limit(limit)
                .offset(offset)
            )
            comments = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing comments of tweet %s: %s", tweet_id, str(e))
            raise DatabaseError(context={"tweet_id": tweet_id})

        return [comment_to_response(comment, comment.user) for comment in comments]


# ── Singleton Instance ────────────────────────────────────────────────────
interaction_service = InteractionService()
