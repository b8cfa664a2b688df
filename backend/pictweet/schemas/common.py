"""
PicTweet Backend — Shared Pydantic Schemas
============================================

What:  Base model and the response shapes shared by every route module.
How:   `APIModel` turns snake_case attributes into camelCase JSON keys
       (imageUrl, tweetText, createdAt) and still accepts snake_case input.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for request/response bodies exchanged with the frontend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(APIModel):
    """Plain acknowledgement returned by follow/unfollow/like/unlike."""
    message: str = Field(description="Human-readable result")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: one error shape for every endpoint
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Tweet not found.",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
