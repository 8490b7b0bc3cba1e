"""Shared eligibility rules for posts that can be interacted with.

Both the content graph and the reaction ledger decide "exists and can be
interacted with" through this module, in Python and in SQL.
"""
from __future__ import annotations

from sqlalchemy import ColumnElement, and_

from threadline.models.post import Post, PostKind, PostStatus

INTERACTABLE_KINDS: frozenset[PostKind] = frozenset(
    {PostKind.ORIGINAL, PostKind.QUOTE, PostKind.REPLY}
)


def is_interactable(post: Post | None) -> bool:
    """Return True if ``post`` is published and not a repost."""
    if post is None:
        return False
    return post.status == PostStatus.PUBLISHED and post.kind in INTERACTABLE_KINDS


def interactable_clause() -> ColumnElement[bool]:
    """SQL form of :func:`is_interactable` for use in WHERE clauses."""
    return and_(
        Post.status == PostStatus.PUBLISHED,
        Post.kind.in_(sorted(INTERACTABLE_KINDS, key=lambda kind: kind.value)),
    )
