"""
PicTweet Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table.
Who:   Used by AuthService for registration/login, by UserService for
       profiles and follows, and as the author of tweets, comments and likes.

Table Design:
    - Integer identity primary key (ids appear in URLs: /users/{id}/profile)
    - username: unique, at most 50 characters
    - email: unique, at most 255 characters
    - password_hash: bcrypt hash, never returned by the API
    - bio / avatar_url: optional profile fields
    - created_at: UTC with timezone
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pictweet.database import Base

if TYPE_CHECKING:
    from pictweet.models.comment import Comment
    from pictweet.models.like import Like
    from pictweet.models.tweet import Tweet


class User(Base):
    """
    A registered account.

    Follow relationships are not mapped on this side; they are queried through
    the Follow model (follower_id / followed_id) by UserService.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="Public handle, unique across all users",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    avatar_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # ── Relationships ─────────────────────────────────────────────────────
    tweets: Mapped[List["Tweet"]] = relationship(back_populates="user")
    comments: Mapped[List["Comment"]] = relationship(back_populates="user")
    likes: Mapped[List["Like"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
