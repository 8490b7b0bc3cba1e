"""SQLAlchemy models for posts and the content graph."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadline.db.session import Base
from threadline.db.time import utcnow
from threadline.models.user import User


class PostKind(str, enum.Enum):
    """Structural role of a post in the content graph. Immutable after creation."""

    ORIGINAL = "ORIGINAL"
    QUOTE = "QUOTE"
    REPLY = "REPLY"
    REPOST = "REPOST"


class PostStatus(str, enum.Enum):
    """Publication state. DRAFT -> PUBLISHED is the only legal transition."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


# Counter columns kept on the post row.
COUNTER_COLUMNS = (
    "likes_count",
    "dislikes_count",
    "quotes_count",
    "comments_count",
    "reposts_count",
    "bookmarks_count",
)


class Post(Base):
    """Primary content entity produced by users.

    Originals are roots; quotes, replies and reposts always point at a
    published, non-repost parent. Counters are denormalized and only ever
    changed through single-statement increments.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint(
            "(kind = 'ORIGINAL' AND parent_id IS NULL) "
            "OR (kind != 'ORIGINAL' AND parent_id IS NOT NULL)",
            name="ck_post_parent_matches_kind",
        ),
        CheckConstraint("kind != 'REPOST' OR body IS NULL", name="ck_post_repost_no_body"),
        CheckConstraint("kind = 'ORIGINAL' OR status = 'PUBLISHED'", name="ck_post_draft_original"),
        *(
            CheckConstraint(f"{column} >= 0", name=f"ck_post_{column}_non_negative")
            for column in COUNTER_COLUMNS
        ),
        Index("ix_post_author_status_created", "author_id", "status", "created_at"),
        Index("ix_post_parent_kind_created", "parent_id", "kind", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kind: Mapped[PostKind] = mapped_column(
        Enum(PostKind, name="post_kind", native_enum=False, length=16),
        nullable=False,
    )
    status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, name="post_status", native_enum=False, length=16),
        nullable=False,
        default=PostStatus.PUBLISHED,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id"),
        nullable=False,
    )

    # Parent link for quotes, replies and reposts; originals have parent_id = NULL.
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("post.id"),
        nullable=True,
    )

    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Ordered list of {"type", "link", "storage_id"} supplied by the media service.
    media: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislikes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quotes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reposts_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bookmarks_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="joined", innerjoin=True)
    parent: Mapped[Post | None] = relationship("Post", remote_side=[id], lazy="select")
