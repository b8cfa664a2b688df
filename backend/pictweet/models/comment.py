"""
PicTweet Backend — Comment SQLAlchemy Model
=============================================

What:  ORM model representing the `comments` table.
Who:   Written and listed by InteractionService.

The API calls the body `text`; the column keeps the name `content`.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pictweet.database import Base

if TYPE_CHECKING:
    from pictweet.models.tweet import Tweet
    from pictweet.models.user import User


class Comment(Base):
    """A text reply by a user on a tweet."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

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

    tweet_id: Mapped[int] = mapped_column(
        ForeignKey("tweets.id", ondelete="CASCADE"),
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="comments")
    tweet: Mapped["Tweet"] = relationship(back_populates="comments")

    __table_args__ = (
        Index("idx_comments_tweet_id", "tweet_id"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, tweet_id={self.tweet_id}, user_id={self.user_id})>"
