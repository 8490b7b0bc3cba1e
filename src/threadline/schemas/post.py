# src/threadline/schemas/post.py
"""Post-related Pydantic schemas."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from threadline.core.errors import ValidationFailure
from threadline.models.post import PostKind, PostStatus

MediaType = Literal["audio", "image", "video"]


class MediaItem(BaseModel):
    """Attachment descriptor produced by the media service; stored verbatim."""

    type: MediaType = Field(..., description="Attachment type")
    link: str = Field(..., min_length=1, description="Public URL of the uploaded file")
    storage_id: str = Field(..., min_length=1, description="Identifier in the media store")


class PostContent(BaseModel):
    """Body and attachments submitted for an original, draft, quote or reply."""

    body: str | None = Field(None, description="Post text")
    media: list[MediaItem] = Field(default_factory=list, description="Uploaded attachments")

    def validated(self, *, max_body_length: int, max_media_per_type: int) -> PostContent:
        """Return a normalized copy or raise ``ValidationFailure``.

        Blank bodies count as absent; a post needs a body or at least one
        attachment.
        """
        body = self.body.strip() if self.body is not None else None
        if not body:
            body = None

        if body is not None and len(body) > max_body_length:
            raise ValidationFailure(f"Post body cannot exceed {max_body_length} characters")

        if body is None and not self.media:
            raise ValidationFailure("Post must have a body or at least one media attachment")

        per_type = Counter(item.type for item in self.media)
        for media_type, count in sorted(per_type.items()):
            if count > max_media_per_type:
                raise ValidationFailure(
                    f"At most {max_media_per_type} {media_type} attachments are allowed"
                )

        return PostContent(body=body, media=list(self.media))

    def media_payload(self) -> list[dict[str, Any]]:
        """Serialize attachments for the JSON column, preserving order."""
        return [item.model_dump() for item in self.media]


class AuthorSummary(BaseModel):
    """Public author fields embedded in every post."""

    id: int
    username: str
    display_name: str | None = None
    profile_pic: str | None = None


class ViewerMetrics(BaseModel):
    """Relationship between the requesting user and a post."""

    is_liked_by_user: bool = False
    is_disliked_by_user: bool = False
    is_reposted_by_user: bool = False
    is_bookmarked_by_user: bool = False


class EmbeddedPostResponse(BaseModel):
    """Post projection without a parent; used for the one embedded level."""

    id: int
    body: str | None
    media: list[MediaItem]
    created_at: datetime
    kind: PostKind
    status: PostStatus
    likes_count: int
    dislikes_count: int
    quotes_count: int
    comments_count: int
    reposts_count: int
    bookmarks_count: int
    author: AuthorSummary

    model_config = ConfigDict(from_attributes=True)


class PostResponse(EmbeddedPostResponse):
    """Schema for post information returned by the API."""

    parent: EmbeddedPostResponse | None = None
    viewer: ViewerMetrics | None = None


class CountResponse(BaseModel):
    """Simple count payload."""

    count: int
