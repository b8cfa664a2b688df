"""
PicTweet Backend — Follow SQLAlchemy Model
============================================

What:  ORM model representing the `follows` table, a directed edge
       follower → followed between two users.

Self-follows are not prevented here; UserService.follow_user rejects them.
Duplicate edges are likewise rejected by the service, not by a constraint.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pictweet.database import Base

if TYPE_CHECKING:
    from pictweet.models.user import User


class Follow(Base):
    __tablename__ = "follows"

    id: Mapped[int] = mapped_column(primary_key=True)

    follower_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    followed_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Two foreign keys to the same table, so each side names its column
    follower: Mapped["User"] = relationship(foreign_keys=[follower_id])
    followed: Mapped["User"] = relationship(foreign_keys=[followed_id])

    __table_args__ = (
        Index("idx_follows_follower_id", "follower_id"),
        Index("idx_follows_followed_id", "followed_id"),
    )

    def __repr__(self) -> str:
        return f"<Follow(follower_id={self.follower_id}, followed_id={self.followed_id})>"
