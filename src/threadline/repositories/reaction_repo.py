"""Data access helpers for reaction edges."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from threadline.models.reaction import PostReaction, ReactionKind

__all__ = ["ReactionRepository"]


class ReactionRepository:
    """Reads and writes ``post_reaction`` rows for one session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_kind(self, post_id: int, user_id: int) -> ReactionKind | None:
        """Return the reaction the user currently holds on the post, if any."""
        stmt = select(PostReaction.kind).where(
            PostReaction.post_id == post_id,
            PostReaction.user_id == user_id,
        )
        return self.session.execute(stmt).scalars().first()

    def remove(self, post_id: int, user_id: int, kind: ReactionKind) -> bool:
        """Delete the edge of ``kind``; return True only if a row was removed."""
        result = self.session.execute(
            delete(PostReaction)
            .where(
                PostReaction.post_id == post_id,
                PostReaction.user_id == user_id,
                PostReaction.kind == kind,
            )
        )
        return result.rowcount == 1

    def add(self, post_id: int, user_id: int, kind: ReactionKind) -> None:
        """Insert a new edge. A concurrent duplicate fails with IntegrityError."""
        self.session.execute(
            insert(PostReaction).values(post_id=post_id, user_id=user_id, kind=kind)
        )

    def kinds_for(self, user_id: int, post_ids: Iterable[int]) -> dict[int, ReactionKind]:
        """Map post id to the user's reaction for every reacted post in ``post_ids``."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = select(PostReaction.post_id, PostReaction.kind).where(
            PostReaction.user_id == user_id,
            PostReaction.post_id.in_(ids),
        )
        return {post_id: kind for post_id, kind in self.session.execute(stmt)}

    def count(self, post_id: int, kind: ReactionKind) -> int:
        """Count edges of ``kind`` on a post straight from the relation."""
        stmt = select(func.count()).select_from(PostReaction).where(
            PostReaction.post_id == post_id,
            PostReaction.kind == kind,
        )
        return int(self.session.execute(stmt).scalar_one())
