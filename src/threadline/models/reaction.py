"""Models capturing like/dislike reactions on posts."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from threadline.db.session import Base
from threadline.db.time import utcnow


class ReactionKind(str, enum.Enum):
    """The two mutually exclusive reactions a user can hold on a post."""

    LIKE = "LIKE"
    DISLIKE = "DISLIKE"


class PostReaction(Base):
    """Per-user reaction edge on a post.

    The composite primary key allows a single row per (post, user), so a user
    can never hold a like and a dislike on the same post at once.
    """

    __tablename__ = "post_reaction"
    __table_args__ = (
        Index("ix_post_reaction_user_id", "user_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )

    kind: Mapped[ReactionKind] = mapped_column(
        Enum(ReactionKind, name="reaction_kind", native_enum=False, length=8),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
