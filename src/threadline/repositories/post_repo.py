"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from threadline.models.post import COUNTER_COLUMNS, Post, PostKind, PostStatus
from threadline.services.eligibility import interactable_clause

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _expire_cached(self, post_id: int, attributes: list[str]) -> None:
        key = self.session.identity_key(Post, post_id)
        cached = self.session.identity_map.get(key)
        if cached is not None:
            self.session.expire(cached, attributes)

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier regardless of kind or status."""
        return self.session.get(Post, post_id)

    def get_interactable(self, post_id: int, *, for_update: bool = False) -> Post | None:
        """Return the post if it is published and not a repost.

        With ``for_update`` the row is locked until the surrounding transaction
        ends, serializing concurrent writers on the same post.
        """
        stmt = select(Post).where(Post.id == post_id, interactable_clause())
        if for_update:
            stmt = stmt.with_for_update(of=Post)
        return self.session.execute(stmt).unique().scalars().first()

    def create(
        self,
        *,
        author_id: int,
        kind: PostKind,
        status: PostStatus,
        body: str | None = None,
        media: list[dict[str, Any]] | None = None,
        parent_id: int | None = None,
    ) -> Post:
        """Insert a new post with zeroed counters and return the persisted instance."""
        post = Post(
            author_id=author_id,
            kind=kind,
            status=status,
            body=body,
            media=list(media or []),
            parent_id=parent_id,
            **{column: 0 for column in COUNTER_COLUMNS},
        )
        self.session.add(post)
        self.session.flush()
        return post

    def adjust_counters(self, post_id: int, **deltas: int) -> None:
        """Apply counter deltas as one atomic ``UPDATE ... SET c = c + delta``."""
        unknown = set(deltas) - set(COUNTER_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown counter column(s): {', '.join(sorted(unknown))}")
        values = {
            column: getattr(Post, column) + delta
            for column, delta in deltas.items()
            if delta
        }
        if not values:
            return
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(values)
            .execution_options(synchronize_session=False)
        )
        # Loaded instances must re-read counters from the row.
        self._expire_cached(post_id, list(values))

    def read_counters(self, post_id: int, *columns: str) -> dict[str, int]:
        """Return the current committed-or-pending values of counter columns."""
        wanted = columns or COUNTER_COLUMNS
        row = self.session.execute(
            select(*(getattr(Post, column) for column in wanted)).where(Post.id == post_id)
        ).one()
        return dict(zip(wanted, row, strict=True))

    def publish(self, post_id: int) -> bool:
        """Flip a draft to published; return False if it was no longer a draft."""
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id, Post.status == PostStatus.DRAFT)
            .values(status=PostStatus.PUBLISHED)
            .execution_options(synchronize_session=False)
        )
        published = result.rowcount == 1
        if published:
            self._expire_cached(post_id, ["status"])
        return published

    def list_by_author(
        self,
        author_id: int,
        *,
        status: PostStatus,
        kinds: Iterable[PostKind],
        offset: int,
        limit: int,
    ) -> list[Post]:
        """Return an author's posts, newest first."""
        stmt = (
            select(Post)
            .where(
                Post.author_id == author_id,
                Post.status == status,
                Post.kind.in_(list(kinds)),
            )
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).unique().scalars())

    def count_by_author(
        self,
        author_id: int,
        *,
        status: PostStatus,
        kinds: Iterable[PostKind],
    ) -> int:
        """Count an author's posts of the given status and kinds."""
        stmt = select(func.count(Post.id)).where(
            Post.author_id == author_id,
            Post.status == status,
            Post.kind.in_(list(kinds)),
        )
        return int(self.session.execute(stmt).scalar_one())

    def list_children(
        self,
        parent_id: int,
        *,
        kind: PostKind,
        offset: int,
        limit: int,
    ) -> list[Post]:
        """Return published children of one kind under a parent, newest first."""
        stmt = (
            select(Post)
            .where(
                Post.parent_id == parent_id,
                Post.kind == kind,
                Post.status == PostStatus.PUBLISHED,
            )
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).unique().scalars())

    def reposted_parent_ids(self, user_id: int, post_ids: Iterable[int]) -> set[int]:
        """Return which of ``post_ids`` the user has reposted."""
        ids = list(post_ids)
        if not ids:
            return set()
        stmt = select(Post.parent_id).where(
            Post.author_id == user_id,
            Post.kind == PostKind.REPOST,
            Post.parent_id.in_(ids),
        )
        return {parent_id for parent_id in self.session.execute(stmt).scalars() if parent_id}
