"""Create users, tweets, comments, likes and follows

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

Tables live in DB_SCHEMA ("twitter" by default). On PostgreSQL the
revision also adds a GIN index over to_tsvector('english', tweet_text)
for the search endpoint.

Rollback: downgrade() drops all five tables (destructive).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from pictweet.config import settings

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = settings.schema_name


def _fk(table: str) -> str:
    return f"{SCHEMA}.{table}.id" if SCHEMA else f"{table}.id"


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    is_postgres = op.get_bind().dialect.name == "postgresql"
    if SCHEMA and is_postgres:
        op.execute(sa.text(f'CREATE SCHEMA IF NOT EXISTS "{SCHEMA}"'))

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        _created_at(),
        sa.UniqueConstraint("username", name="users_username_key"),
        sa.UniqueConstraint("email", name="users_email_key"),
        schema=SCHEMA,
    )

    op.create_table(
        "tweets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("tweet_text", sa.Text(), nullable=True),
        _created_at(),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey(_fk("users"), ondelete="CASCADE"),
            nullable=False,
        ),
        schema=SCHEMA,
    )
    op.create_index("idx_tweets_created_at", "tweets", [sa.text("created_at DESC")], schema=SCHEMA)
    op.create_index("idx_tweets_user_id", "tweets", ["user_id"], schema=SCHEMA)

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey(_fk("users"), ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "tweet_id",
            sa.Integer(),
            sa.ForeignKey(_fk("tweets"), ondelete="CASCADE"),
            nullable=False,
        ),
        schema=SCHEMA,
    )
    op.create_index("idx_comments_tweet_id", "comments", ["tweet_id"], schema=SCHEMA)

    op.create_table(
        "likes",
        sa.Column("id", sa.Integer(), primary_key=True),
        _created_at(),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey(_fk("users"), ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "tweet_id",
            sa.Integer(),
            sa.ForeignKey(_fk("tweets"), ondelete="CASCADE"),
            nullable=False,
        ),
        schema=SCHEMA,
    )
    op.create_index("idx_likes_user_tweet", "likes", ["user_id", "tweet_id"], schema=SCHEMA)

    op.create_table(
        "follows",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "follower_id",
            sa.Integer(),
            sa.ForeignKey(_fk("users"), ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "followed_id",
            sa.Integer(),
            sa.ForeignKey(_fk("users"), ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        schema=SCHEMA,
    )
    op.create_index("idx_follows_follower_id", "follows", ["follower_id"], schema=SCHEMA)
    op.create_index("idx_follows_followed_id", "follows", ["followed_id"], schema=SCHEMA)

    if is_postgres:
        op.create_index(
            "twitter_tweets_search_vector_idx",
            "tweets",
            [sa.text("to_tsvector('english', tweet_text)")],
            postgresql_using="gin",
            schema=SCHEMA,
        )


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        op.drop_index("twitter_tweets_search_vector_idx", table_name="tweets", schema=SCHEMA)
    op.drop_table("follows", schema=SCHEMA)
    op.drop_table("likes", schema=SCHEMA)
    op.drop_table("comments", schema=SCHEMA)
    op.drop_table("tweets", schema=SCHEMA)
    op.drop_table("users", schema=SCHEMA)
