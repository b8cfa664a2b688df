"""
PicTweet Backend — Password Hashing & Access Tokens
=====================================================

What:  bcrypt password hashing and JWT access-token issue/verify.
Who:   AuthService (register/login) and the auth dependencies.

Token payload:
    {"sub": "<user id>", "userId": <int>, "username": "<handle>", "exp": <unix ts>}
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from pictweet.config import settings
from pictweet.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def hash_password(raw_password: str) -> str:
    """Returns the bcrypt hash of `raw_password` as a str for storage."""
    return bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    """Verifies the provided password against the stored hash."""
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Password hash has an invalid format")
        return False


def create_access_token(
    user_id: int,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT for `user_id`.

    Args:
        user_id: Subject of the token
        username: Copied into the payload for clients that decode it
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {
        "sub": str(user_id),
        "userId": user_id,
        "username": username,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT.

    Returns:
        The payload dict; `userId` is guaranteed to be an int.

    Raises:
        AuthenticationError: bad signature, expired, or missing subject
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected access token: %s", str(e))
        raise AuthenticationError(context={"reason": type(e).__name__})

    subject = payload.get("sub")
    try:
        payload["userId"] = int(subject)
    except (TypeError, ValueError):
        raise AuthenticationError(context={"reason": "invalid_subject"})
    return payload
