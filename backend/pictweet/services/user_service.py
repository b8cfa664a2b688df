"""
PicTweet Backend — User & Follow Service
==========================================

What:  Controller logic behind the /users routes: follow, unfollow, profile,
       follower/following listings and a user's liked tweets.
Who:   Called by pictweet.routes.users and pictweet.services.auth_service.

Follow semantics:
    A Follow row is a directed edge follower_id → followed_id.
    - "followers of U"  = rows WHERE followed_id = U
    - "U is following"  = rows WHERE follower_id = U
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from pictweet.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from pictweet.models import Follow, Like, Tweet, User
from pictweet.schemas.common import MessageResponse
from pictweet.schemas.tweet import LikedTweetResponse
from pictweet.schemas.user import UserProfileResponse
from pictweet.services.tweet_service import tweet_to_response

logger = logging.getLogger(__name__)


def user_to_profile(user: User, followers: int = 0, following: int = 0) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        username=user.username,
        bio=user.bio,
        avatar_url=user.avatar_url,
        created_at=user.created_at,
        followers=followers,
        following=following,
    )


class UserService:
    """
    Business logic for profiles and the follow graph.

    Every public method wraps SQLAlchemy failures in DatabaseError; domain
    errors (NotFoundError, ConflictError, ValidationError) pass through.
    """

    # ── Follows ───────────────────────────────────────────────────────────

    async def follow_user(
        self,
        db: AsyncSession,
        follower: User,
        user_id_to_follow: int,
    ) -> MessageResponse:
        """
        Create the edge follower → user_id_to_follow.

        Raises:
            ValidationError: following yourself
            NotFoundError: target user does not exist
            ConflictError: already following
        """
        if follower.id == user_id_to_follow:
            raise ValidationError(message="You cannot follow yourself.")

        try:
            target = await db.get(User, user_id_to_follow)
            if target is None:
                raise NotFoundError(
                    resource="user",
                    resource_id=str(user_id_to_follow),
                    message="User to follow not found.",
                )

            existing = await db.execute(
                select(Follow.id).where(
                    Follow.follower_id == follower.id,
                    Follow.followed_id == user_id_to_follow,
                ).limit(1)
            )
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(message="You are already following this user.")

            db.add(Follow(follower_id=follower.id, followed_id=user_id_to_follow))
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error following user %s: %s", user_id_to_follow, str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s followed user %s", follower.id, user_id_to_follow)
        return MessageResponse(message=f"Successfully followed user {user_id_to_follow}")

    async def unfollow_user(
        self,
        db: AsyncSession,
        follower: User,
        user_id_to_unfollow: int,
    ) -> MessageResponse:
        """
        Delete the edge follower → user_id_to_unfollow.

        Raises:
            NotFoundError: there was no such edge
        """
        try:
            result = await db.execute(
                delete(Follow).where(
                    Follow.follower_id == follower.id,
                    Follow.followed_id == user_id_to_unfollow,
                )
            )
        except SQLAlchemyError as e:
            logger.error("Database error unfollowing user %s: %s", user_id_to_unfollow, str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if not result.rowcount:
            raise NotFoundError(resource="follow", message="Follow relationship not found.")

        logger.info("User %s unfollowed user %s", follower.id, user_id_to_unfollow)
        return MessageResponse(message=f"Successfully unfollowed user {user_id_to_unfollow}")

    # ── Profiles ──────────────────────────────────────────────────────────

    async def build_profile(self, db: AsyncSession, user: User) -> UserProfileResponse:
        """Profile of `user` with live follower/following counts."""
        followers = await db.execute(
            select(func.count(Follow.id)).where(Follow.followed_id == user.id)
        )
        following = await db.execute(
            select(func.count(Follow.id)).where(Follow.follower_id == user.id)
        )
        return user_to_profile(
            user,
            followers=followers.scalar() or 0,
            following=following.scalar() or 0,
        )

    async def get_user_profile(self, db: AsyncSession, user_id: int) -> UserProfileResponse:
        """
        Raises:
            NotFoundError: no such user
        """
        try:
            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError(resource="user", resource_id=str(user_id), message="User not found")
            return await self.build_profile(db, user)
        except SQLAlchemyError as e:
            logger.error("Database error loading profile %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})

    async def get_user_followers(self, db: AsyncSession, user_id: int) -> List[UserProfileResponse]:
        """
        Users following `user_id`, most recent follow first.

        Counts on each entry are 0. An empty result is reported as 404.
        """
        try:
            result = await db.execute(
                select(Follow)
                .options(joinedload(Follow.follower))
                .where(Follow.followed_id == user_id)
                .order_by(Follow.created_at.desc(), Follow.id.desc())
            )
            follows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing followers of %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})

        if not follows:
            raise NotFoundError(resource="followers", message="No followers found for this user.")

        return [user_to_profile(follow.follower) for follow in follows if follow.follower is not None]

    async def get_user_following(self, db: AsyncSession, user_id: int) -> List[UserProfileResponse]:
        """
        Users that `user_id` follows, most recent follow first.

        Counts on each entry are 0. An empty result is reported as 404.
        """
        try:
            result = await db.execute(
                select(Follow)
                .options(joinedload(Follow.followed))
                .where(Follow.follower_id == user_id)
                .order_by(Follow.created_at.desc(), Follow.id.desc())
            )
            follows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing following of %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})

        if not follows:
            raise NotFoundError(resource="following", message="No following found for this user.")

        return [user_to_profile(follow.followed) for follow in follows if follow.followed is not None]

    # ── Likes ─────────────────────────────────────────────────────────────

    async def get_user_likes(
        self,
        db: AsyncSession,
        user_id: int,
        viewer: Optional[User] = None,
    ) -> List[LikedTweetResponse]:
        """
        Tweets liked by `user_id`, most recent like first.

        `hasLiked` on each item reflects the optional `viewer`; anonymous
        viewers get False everywhere.

        Raises:
            NotFoundError: no such user, or the user has liked nothing
        """
        try:
            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError(resource="user", resource_id=str(user_id), message="User not found")

            result = await db.execute(
                select(Like)
                .options(selectinload(Like.tweet).selectinload(Tweet.user))
                .where(Like.user_id == user_id)
                .order_by(Like.created_at.desc(), Like.id.desc())
            )
            likes = [like for like in result.scalars().all() if like.tweet is not None]

            if not likes:
                raise NotFoundError(resource="likes", message="No liked tweets found for this user.")

            tweet_ids = {like.tweet_id for like in likes}
            viewer_liked = set()
            if viewer is not None:
                if viewer.id == user_id:
                    viewer_liked = tweet_ids
                else:
                    liked = await db.execute(
                        select(Like.tweet_id).where(
                            Like.user_id == viewer.id,
                            Like.tweet_id.in_(tweet_ids),
                        )
                    )
                    viewer_liked = set(liked.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing likes of %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})

        items: List[LikedTweetResponse] = []
        seen = set()
        for like in likes:
            # Duplicate like rows are possible; list each tweet once
            if like.tweet_id in seen:
                continue
            seen.add(like.tweet_id)
            tweet = tweet_to_response(like.tweet)
            items.append(
                LikedTweetResponse(**tweet.model_dump(), has_liked=like.tweet_id in viewer_liked)
            )
        return items


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
