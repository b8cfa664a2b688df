"""
PicTweet Backend — Authentication Dependencies
================================================

What:  FastAPI dependencies that resolve the calling user from a bearer token.

    get_current_user   → User, or AuthenticationError (401)
    get_optional_user  → User or None; never rejects the request

Usage in a route:
    @router.post("/{tweet_id}/like")
    async def like_tweet(current_user: User = Depends(get_current_user)):
        ...
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pictweet.database import get_db_session
from pictweet.exceptions import AuthenticationError
from pictweet.models import User
from pictweet.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches our code so the response uses
# the application error format instead of FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the authenticated user or raise AuthenticationError."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Not authenticated")

    payload = decode_access_token(credentials.credentials)
    user = await db.get(User, payload["userId"])
    if user is None:
        logger.info("Token for unknown user %s", payload["userId"])
        raise AuthenticationError(context={"reason": "unknown_user"})
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Optional[User]:
    """Like get_current_user, but anonymous (None) instead of 401."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        payload = decode_access_token(credentials.credentials)
    except AuthenticationError:
        return None
    return await db.get(User, payload["userId"])
