# src/threadline/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .bookmarks import router as bookmarks_router
from .drafts import router as drafts_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .users import router as users_router

__all__ = [
    "bookmarks_router",
    "drafts_router",
    "posts_router",
    "reactions_router",
    "users_router",
]
