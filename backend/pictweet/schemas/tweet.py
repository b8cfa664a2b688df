"""
PicTweet Backend — Tweet Schemas
==================================

What:  Request and response bodies for the /tweets routes.

Wire format (camelCase):
    POST /tweets     {"imageBase64": "...", "imageFileType": "image/png", "tweetText": "hi"}
    TweetResponse    {"id", "imageUrl", "tweetText", "createdAt",
                      "userId", "username", "avatarUrl"}
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from pictweet.schemas.common import APIModel


class CreateTweetRequest(APIModel):
    """
    Body of POST /tweets.

    Both image fields are plain strings so that an empty value reaches the
    service and is answered with a 400 and a readable message. A leading
    `data:image/...;base64,` prefix on imageBase64 is accepted.
    """
    image_base64: str = Field(description="Base64-encoded image bytes")
    image_file_type: str = Field(description="MIME type of the image, e.g. image/jpeg")
    tweet_text: Optional[str] = Field(default=None, max_length=2000)


class TweetResponse(APIModel):
    """A tweet joined with its author's handle and avatar."""
    id: int
    image_url: str
    tweet_text: Optional[str] = None
    created_at: datetime
    user_id: int
    username: str
    avatar_url: Optional[str] = None


class LikedTweetResponse(TweetResponse):
    """Item of GET /users/{id}/likes."""
    has_liked: bool = Field(
        default=False,
        description="Whether the authenticated viewer has liked this tweet",
    )
