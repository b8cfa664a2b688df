"""
PicTweet Backend — Tweet SQLAlchemy Model
===========================================

What:  ORM model representing the `tweets` table.
Who:   Used by TweetService (create, feed, search, detail) and
       InteractionService (existence checks before likes and comments).

Table Design:
    - image_url: required; every tweet carries exactly one image
    - tweet_text: optional caption, NULL when the author wrote nothing
    - user_id: owning user

    Index on created_at serves the feed query
    (ORDER BY created_at DESC LIMIT :limit OFFSET :offset).
    The full-text GIN index on to_tsvector('english', tweet_text) is
    PostgreSQL-only and lives in the Alembic migration.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pictweet.database import Base

if TYPE_CHECKING:
    from pictweet.models.comment import Comment
    from pictweet.models.like import Like
    from pictweet.models.user import User


class Tweet(Base):
    """
    A post consisting of a mandatory image and optional text.

    Lifecycle:
        Created by POST /tweets after the image has been stored.
        There is no edit or delete endpoint; rows persist.
    """

    __tablename__ = "tweets"

    id: Mapped[int] = mapped_column(primary_key=True)

    image_url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Public URL of the stored image",
    )

    tweet_text: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # ── Relationships ─────────────────────────────────────────────────────
    user: Mapped["User"] = relationship(back_populates="tweets")
    comments: Mapped[List["Comment"]] = relationship(back_populates="tweet")
    likes: Mapped[List["Like"]] = relationship(back_populates="tweet")

    __table_args__ = (
        Index("idx_tweets_created_at", "created_at"),
        Index("idx_tweets_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Tweet(id={self.id}, user_id={self.user_id}, created_at='{self.created_at}')>"
