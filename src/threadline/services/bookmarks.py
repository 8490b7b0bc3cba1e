"""Bookmarks: per-user saved posts with an exact ``bookmarks_count``."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from threadline.core.errors import Conflict, NotFound
from threadline.db.session import transaction
from threadline.models.bookmark import Bookmark
from threadline.repositories.post_repo import PostRepository
from threadline.services.paging import page_window

logger = logging.getLogger(__name__)


class BookmarkService:
    """Add, list and remove bookmarks."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)

    def add(self, user_id: int, post_id: int) -> Bookmark:
        """Bookmark an interactable post.

        Raises:
            NotFound: If the post is missing, a draft, or a repost.
            Conflict: If the post is already bookmarked by the user.
        """
        with transaction(self.db):
            if self.posts.get_interactable(post_id) is None:
                raise NotFound("Post not found")
            existing = self.db.execute(
                select(Bookmark.id).where(
                    Bookmark.user_id == user_id,
                    Bookmark.post_id == post_id,
                )
            ).first()
            if existing is not None:
                raise Conflict("Post already bookmarked")
            bookmark = Bookmark(user_id=user_id, post_id=post_id)
            self.db.add(bookmark)
            self.db.flush()
            self.posts.adjust_counters(post_id, bookmarks_count=1)
        logger.info("User %s bookmarked post %s", user_id, post_id)
        return bookmark

    def remove(self, user_id: int, bookmark_id: int) -> None:
        """Delete one of the user's bookmarks."""
        with transaction(self.db):
            post_id = self.db.execute(
                select(Bookmark.post_id).where(
                    Bookmark.id == bookmark_id,
                    Bookmark.user_id == user_id,
                )
            ).scalar_one_or_none()
            if post_id is None:
                raise NotFound("Bookmark not found")
            result = self.db.execute(
                delete(Bookmark)
                .where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
            )
            if result.rowcount == 1:
                self.posts.adjust_counters(post_id, bookmarks_count=-1)
        logger.info("User %s removed bookmark %s", user_id, bookmark_id)

    def list_for_user(self, user_id: int, *, page: int = 1, page_size: int = 10) -> list[Bookmark]:
        """Return the user's bookmarks, newest first."""
        offset, limit = page_window(page, page_size)
        stmt = (
            select(Bookmark)
            .where(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).unique().scalars())
