"""Reaction ledger: mutually exclusive likes and dislikes with exact counters.

Per (user, post) the state machine is::

    NONE     --like-->    LIKED      (likes +1)
    LIKED    --like-->    NONE       (likes -1)
    DISLIKED --like-->    LIKED      (dislikes -1, likes +1)

and the mirror image for dislikes. One toggle is one transaction: the post row
is locked, the edge is removed and/or inserted, and the counters move in a
single UPDATE. A decrement is only issued when the DELETE of that edge removed
a row in the same transaction, so counters cannot go below zero.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from threadline.core.errors import NotFound
from threadline.db.session import transaction
from threadline.models.reaction import ReactionKind
from threadline.repositories.post_repo import PostRepository
from threadline.repositories.reaction_repo import ReactionRepository

logger = logging.getLogger(__name__)

_COUNTER = {
    ReactionKind.LIKE: "likes_count",
    ReactionKind.DISLIKE: "dislikes_count",
}
_OPPOSITE = {
    ReactionKind.LIKE: ReactionKind.DISLIKE,
    ReactionKind.DISLIKE: ReactionKind.LIKE,
}
_STATE_NAMES = {
    None: "NONE",
    ReactionKind.LIKE: "LIKED",
    ReactionKind.DISLIKE: "DISLIKED",
}


@dataclass(frozen=True)
class ReactionCounts:
    """Post counters after a toggle and the caller's resulting state."""

    post_id: int
    likes_count: int
    dislikes_count: int
    state: str


class ReactionLedger:
    """Applies like/dislike toggles for users on interactable posts."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.reactions = ReactionRepository(db)

    def toggle_like(self, user_id: int, post_id: int) -> ReactionCounts:
        """Toggle a like; switches an existing dislike to a like."""
        return self._toggle(user_id, post_id, ReactionKind.LIKE)

    def toggle_dislike(self, user_id: int, post_id: int) -> ReactionCounts:
        """Toggle a dislike; switches an existing like to a dislike."""
        return self._toggle(user_id, post_id, ReactionKind.DISLIKE)

    def get_state(self, user_id: int, post_id: int) -> str:
        """Return ``NONE``, ``LIKED`` or ``DISLIKED`` for the pair."""
        return _STATE_NAMES[self.reactions.get_kind(post_id, user_id)]

    def _toggle(self, user_id: int, post_id: int, wanted: ReactionKind) -> ReactionCounts:
        opposite = _OPPOSITE[wanted]
        with transaction(self.db):
            # Reposts, drafts and missing posts all look the same to the caller.
            if self.posts.get_interactable(post_id, for_update=True) is None:
                raise NotFound("Post not found")

            current = self.reactions.get_kind(post_id, user_id)
            deltas: dict[str, int] = {}
            if current == wanted:
                if self.reactions.remove(post_id, user_id, wanted):
                    deltas[_COUNTER[wanted]] = -1
                resulting: ReactionKind | None = None
            else:
                if current == opposite and self.reactions.remove(post_id, user_id, opposite):
                    deltas[_COUNTER[opposite]] = -1
                self.reactions.add(post_id, user_id, wanted)
                deltas[_COUNTER[wanted]] = 1
                resulting = wanted

            self.posts.adjust_counters(post_id, **deltas)
            counters = self.posts.read_counters(post_id, "likes_count", "dislikes_count")

        logger.debug(
            "User %s %s on post %s: %s -> %s",
            user_id,
            wanted.value.lower(),
            post_id,
            _STATE_NAMES[current],
            _STATE_NAMES[resulting],
        )
        return ReactionCounts(
            post_id=post_id,
            likes_count=counters["likes_count"],
            dislikes_count=counters["dislikes_count"],
            state=_STATE_NAMES[resulting],
        )
