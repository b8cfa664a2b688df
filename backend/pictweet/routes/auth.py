"""
PicTweet Backend — Auth Route Handlers
========================================

What:  POST /auth/register, POST /auth/login, GET /auth/me.
How:   Register and login return an AuthResponse whose accessToken the
       client sends back as `Authorization: Bearer <token>`.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pictweet.database import get_db_session
from pictweet.dependencies import get_current_user
from pictweet.models import User
from pictweet.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from pictweet.schemas.common import ErrorResponse
from pictweet.schemas.user import UserProfileResponse
from pictweet.services.auth_service import auth_service
from pictweet.services.user_service import user_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={409: {"description": "Username or email taken", "model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.register(db, body)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Log in with username (or email) and password",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await auth_service.login(db, body)


@router.get(
    "/me",
    response_model=UserProfileResponse,
    responses={401: {"description": "Not authenticated", "model": ErrorResponse}},
    summary="The authenticated user's profile",
)
async def me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserProfileResponse:
    return await user_service.build_profile(db, current_user)
