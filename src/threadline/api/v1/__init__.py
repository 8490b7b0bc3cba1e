# src/threadline/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    bookmarks_router,
    drafts_router,
    posts_router,
    reactions_router,
    users_router,
)

__all__ = [
    "posts_router",
    "reactions_router",
    "drafts_router",
    "users_router",
    "bookmarks_router",
]
