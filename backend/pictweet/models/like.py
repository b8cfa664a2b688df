"""
PicTweet Backend — Like SQLAlchemy Model
==========================================

What:  ORM model representing the `likes` table.

One row per (user, tweet) is expected, but the schema carries no unique
constraint; InteractionService checks for an existing like before inserting.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pictweet.database import Base

if TYPE_CHECKING:
    from pictweet.models.tweet import Tweet
    from pictweet.models.user import User


class Like(Base):
    __tablename__ = "likes"

    id: Mapped[int] = mapped_column(primary_key=True)

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

    user: Mapped["User"] = relationship(back_populates="likes")
    tweet: Mapped["Tweet"] = relationship(back_populates="likes")

    __table_args__ = (
        Index("idx_likes_user_tweet", "user_id", "tweet_id"),
    )

    def __repr__(self) -> str:
        return f"<Like(id={self.id}, user_id={self.user_id}, tweet_id={self.tweet_id})>"
