"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .bookmark import BookmarkCreate, BookmarkResponse
from .common import PageParams
from .post import (
    AuthorSummary,
    CountResponse,
    EmbeddedPostResponse,
    MediaItem,
    PostContent,
    PostResponse,
    ViewerMetrics,
)
from .reaction import MyReactionResponse, ReactionResponse

__all__ = [
    "BookmarkCreate", "BookmarkResponse",
    "PageParams",
    "AuthorSummary", "CountResponse", "EmbeddedPostResponse", "MediaItem",
    "PostContent", "PostResponse", "ViewerMetrics",
    "MyReactionResponse", "ReactionResponse",
]
