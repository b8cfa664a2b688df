"""
PicTweet Backend — Like & Comment Service Unit Tests
======================================================
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from pictweet.exceptions import ConflictError, NotFoundError, ValidationError
from pictweet.models import Comment, Like, Tweet
from pictweet.services.interaction_service import InteractionService

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def a_tweet(tweet_id=1):
    return Tweet(id=tweet_id, image_url="/media/x.png", created_at=NOW, user_id=9)


class TestLikes:

    def setup_method(self):
        self.service = InteractionService()

    @pytest.mark.asyncio
    async def test_like_success(self, mock_db_session, make_user, result_with):
        mock_db_session.get.return_value = a_tweet(1)
        mock_db_session.execute.return_value = result_with(scalar=None)

        result = await self.service.like_tweet(mock_db_session, make_user(2), 1)

        assert result.message == "Tweet liked successfully"
        added = mock_db_session.add.call_args[0][0]
        assert isinstance(added, Like)
        assert (added.user_id, added.tweet_id) == (2, 1)

    @pytest.mark.asyncio
    async def test_like_missing_tweet(self, mock_db_session, make_user):
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError, match="Tweet not found."):
            await self.service.like_tweet(mock_db_session, make_user(2), 404)

    @pytest.mark.asyncio
    async def test_like_twice(self, mock_db_session, make_user, result_with):
        mock_db_session.get.return_value = a_tweet(1)
        mock_db_session.execute.return_value = result_with(scalar=17)

        with pytest.raises(ConflictError, match="already liked"):
            await self.service.like_tweet(mock_db_session, make_user(2), 1)
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount", [0, 1])
    async def test_unlike_always_succeeds(self, mock_db_session, make_user, result_with, rowcount):
        mock_db_session.execute.return_value = result_with(rowcount=rowcount)
        result = await self.service.unlike_tweet(mock_db_session, make_user(2), 1)
        assert result.message == "Tweet unliked successfully"


class TestComments:

    def setup_method(self):
        self.service = InteractionService()

    @pytest.mark.asyncio
    async def test_blank_comment_rejected(self, mock_db_session, make_user):
        with pytest.raises(ValidationError, match="Comment text cannot be empty."):
            await self.service.create_comment(mock_db_session, make_user(), 1, "   ")
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_comment_on_missing_tweet(self, mock_db_session, make_user):
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError):
            await self.service.create_comment(mock_db_session, make_user(), 1, "nice")

    @pytest.mark.asyncio
    async def test_comment_success(self, mock_db_session, make_user):
        mock_db_session.get.return_value = a_tweet(1)

        async def assign_ids():
            added = mock_db_session.add.call_args[0][0]
            added.id = 33
            added.created_at = NOW

        mock_db_session.flush = AsyncMock(side_effect=assign_ids)

        comment = await self.service.create_comment(
            mock_db_session, make_user(2, "bob"), 1, "  great shot  "
        )

        assert comment.id == 33
        assert comment.text == "great shot"
        assert comment.username == "bob"
        assert comment.tweet_id == 1

    @pytest.mark.asyncio
    async def test_list_comments(self, mock_db_session, make_user, result_with):
        mock_db_session.get.return_value = a_tweet(1)
        bob = make_user(2, "bob")
        comments = [
            Comment(id=2, content="second", created_at=NOW, user_id=2, tweet_id=1, user=bob),
            Comment(id=1, content="first", created_at=NOW, user_id=2, tweet_id=1, user=bob),
        ]
        mock_db_session.execute.return_value = result_with(scalars=comments)

        listed = await self.service.get_comments(mock_db_session, 1, limit=10, offset=0)

        assert [c.text for c in listed] == ["second", "first"]
        assert listed[0].username == "bob"

    @pytest.mark.asyncio
    async def test_list_comments_missing_tweet(self, mock_db_session):
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError):
            await self.service.get_comments(mock_db_session, 1)
