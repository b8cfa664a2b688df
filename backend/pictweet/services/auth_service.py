"""
PicTweet Backend — Auth Service
=================================

What:  Account registration, password login and token issuance.
How:   bcrypt for passwords, python-jose for tokens (pictweet.security).
Who:   Called by pictweet.routes.auth.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pictweet.config import settings
from pictweet.exceptions import AuthenticationError, ConflictError, DatabaseError
from pictweet.models import User
from pictweet.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from pictweet.schemas.user import UserProfileResponse
from pictweet.security import create_access_token, hash_password, verify_password
from pictweet.services.user_service import user_service, user_to_profile

logger = logging.getLogger(__name__)


class AuthService:

    def _issue(self, user: User, profile: UserProfileResponse) -> AuthResponse:
        return AuthResponse(
            access_token=create_access_token(user.id, user.username),
            token_type="bearer",
            expires_in=settings.access_token_expire_minutes * 60,
            user=profile,
        )

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> AuthResponse:
        """
        Create an account and log it in.

        Emails are stored lower-cased. Uniqueness is checked up front for a
        precise message; the unique constraints catch concurrent races.

        Raises:
            ConflictError: username or email already taken
        """
        email = payload.email.lower()
        try:
            result = await db.execute(
                select(User).where(or_(User.username == payload.username, User.email == email))
            )
            for existing in result.scalars().all():
                if existing.username == payload.username:
                    raise ConflictError(message="Username is already taken.", context={"field": "username"})
                raise ConflictError(message="Email is already registered.", context={"field": "email"})

            user = User(
                username=payload.username,
                email=email,
                password_hash=hash_password(payload.password),
                bio=payload.bio,
                avatar_url=payload.avatar_url,
            )
            db.add(user)
            await db.flush()
        except IntegrityError:
            raise ConflictError(message="Username or email is already registered.")
        except SQLAlchemyError as e:
            logger.error("Database error registering %s: %s", payload.username, str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Registered user %s (%s)", user.id, user.username)
        return self._issue(user, user_to_profile(user))

    async def login(self, db: AsyncSession, payload: LoginRequest) -> AuthResponse:
        """
        Exchange username (or email) + password for a token.

        Raises:
            AuthenticationError: unknown account or wrong password; the
                message does not say which
        """
        identifier = payload.username.strip()
        try:
            result = await db.execute(
                select(User).where(
                    or_(User.username == identifier, User.email == identifier.lower())
                )
            )
            user = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None or not verify_password(payload.password, user.password_hash):
            logger.info("Failed login for %r", identifier)
            raise AuthenticationError(message="Invalid username or password.")

        logger.info("User %s logged in", user.id)
        profile = await user_service.build_profile(db, user)
        return self._issue(user, profile)


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
