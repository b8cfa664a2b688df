"""
PicTweet Backend — User Schemas
=================================

What:  Public representation of a user profile.
Who:   Returned by the /users routes and embedded in auth responses.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pictweet.schemas.common import APIModel


class UserProfileResponse(APIModel):
    """
    A user's public profile.

    `followers` / `following` are live counts on GET /users/{id}/profile and
    /auth/me. In follower/following listings they are reported as 0.
    """
    id: int
    username: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    followers: int = Field(default=0, description="Number of users following this user")
    following: int = Field(default=0, description="Number of users this user follows")
