"""
PicTweet Backend — Auth Schemas
=================================

What:  Registration/login bodies and the token response.

Validation rules:
    username: 3-50 chars, letters/digits/underscore (it appears in URLs)
    email:    RFC-valid address (pydantic EmailStr)
    password: 6-72 chars; bcrypt only hashes the first 72 bytes
"""

from typing import Optional

from pydantic import EmailStr, Field

from pictweet.schemas.common import APIModel
from pictweet.schemas.user import UserProfileResponse


class RegisterRequest(APIModel):
    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_]+$")
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar_url: Optional[str] = Field(default=None, max_length=2048)


class LoginRequest(APIModel):
    """`username` may also be the account's email address."""
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=72)


class AuthResponse(APIModel):
    """
    Returned by register and login.

    Send `accessToken` back as `Authorization: Bearer <token>`.
    """
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserProfileResponse
