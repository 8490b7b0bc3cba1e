# src/threadline/models/__init__.py
"""SQLAlchemy models for the Threadline application."""

from .bookmark import Bookmark
from .post import COUNTER_COLUMNS, Post, PostKind, PostStatus
from .reaction import PostReaction, ReactionKind
from .user import User

__all__ = [
    "Bookmark",
    "COUNTER_COLUMNS",
    "Post", "PostKind", "PostStatus",
    "PostReaction", "ReactionKind",
    "User",
]
