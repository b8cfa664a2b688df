"""
PicTweet Backend — Like & Comment Schemas
===========================================
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pictweet.schemas.common import APIModel


class CreateCommentRequest(APIModel):
    """Body of POST /tweets/{tweetId}/comments."""
    text: str = Field(min_length=1, max_length=2000)


class CommentResponse(APIModel):
    id: int
    text: str
    user_id: int
    tweet_id: int
    username: str
    avatar_url: Optional[str] = None
    created_at: datetime
