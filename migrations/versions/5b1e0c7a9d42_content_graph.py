"""content graph

Revision ID: 5b1e0c7a9d42
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e0c7a9d42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COUNTER_COLUMNS = (
    "likes_count",
    "dislikes_count",
    "quotes_count",
    "comments_count",
    "reposts_count",
    "bookmarks_count",
)


def upgrade() -> None:
    """Create users, posts, reactions and bookmarks."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("profile_pic_link", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("media", sa.JSON(), nullable=False),
        *(
            sa.Column(column, sa.Integer(), nullable=False, server_default="0")
            for column in COUNTER_COLUMNS
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "(kind = 'ORIGINAL' AND parent_id IS NULL) "
            "OR (kind != 'ORIGINAL' AND parent_id IS NOT NULL)",
            name="ck_post_parent_matches_kind",
        ),
        sa.CheckConstraint("kind != 'REPOST' OR body IS NULL", name="ck_post_repost_no_body"),
        sa.CheckConstraint(
            "kind = 'ORIGINAL' OR status = 'PUBLISHED'", name="ck_post_draft_original"
        ),
        *(
            sa.CheckConstraint(f"{column} >= 0", name=f"ck_post_{column}_non_negative")
            for column in COUNTER_COLUMNS
        ),
        sa.ForeignKeyConstraint(["author_id"], ["app_user.id"]),
        sa.ForeignKeyConstraint(["parent_id"], ["post.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_post_author_status_created", "post", ["author_id", "status", "created_at"]
    )
    op.create_index(
        "ix_post_parent_kind_created", "post", ["parent_id", "kind", "created_at"]
    )
    op.create_table(
        "post_reaction",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "user_id"),
    )
    op.create_index("ix_post_reaction_user_id", "post_reaction", ["user_id"])
    op.create_table(
        "bookmark",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "post_id", name="uq_bookmark_user_post"),
    )


def downgrade() -> None:
    """Drop the content graph tables."""
    op.drop_table("bookmark")
    op.drop_index("ix_post_reaction_user_id", table_name="post_reaction")
    op.drop_table("post_reaction")
    op.drop_index("ix_post_parent_kind_created", table_name="post")
    op.drop_index("ix_post_author_status_created", table_name="post")
    op.drop_table("post")
    op.drop_table("app_user")
