"""
PicTweet Backend — ORM Models
===============================

Importing this package registers every table on `Base.metadata`, which
Alembic and `create_all_tables()` rely on. Relationship targets are declared
by class name, so all five modules must be imported together.
"""

from pictweet.models.user import User
from pictweet.models.tweet import Tweet
from pictweet.models.comment import Comment
from pictweet.models.like import Like
from pictweet.models.follow import Follow

__all__ = ["User", "Tweet", "Comment", "Like", "Follow"]
