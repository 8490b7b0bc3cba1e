"""Bookmark-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel

from .post import PostResponse


class BookmarkCreate(BaseModel):
    """Schema for bookmarking a post."""

    post_id: int


class BookmarkResponse(BaseModel):
    """A saved post as returned to its owner."""

    id: int
    created_at: datetime
    post: PostResponse
