"""Content graph: creation, publication and retrieval of posts.

Posts form a forest rooted at ORIGINAL posts. QUOTE, REPLY and REPOST children
always hang off a published, non-repost parent; creating a child bumps the
matching counter on the parent inside the same transaction with a single
``UPDATE ... SET c = c + 1``.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from threadline.core.errors import Forbidden, InvalidState, InvalidTarget, NotFound
from threadline.core.settings import settings
from threadline.db.session import transaction
from threadline.models.post import Post, PostKind, PostStatus
from threadline.repositories.post_repo import PostRepository
from threadline.schemas.post import PostContent
from threadline.services.eligibility import is_interactable
from threadline.services.paging import page_window

logger = logging.getLogger(__name__)

ALL_KINDS: tuple[PostKind, ...] = tuple(PostKind)
# Profile tabs as clients render them.
POSTS_TAB_KINDS = (PostKind.ORIGINAL, PostKind.QUOTE, PostKind.REPOST)
REPLIES_TAB_KINDS = (PostKind.REPLY, PostKind.REPOST)
# Kinds that count towards an author's public post count.
COUNTED_KINDS = (PostKind.ORIGINAL, PostKind.QUOTE)

_CHILD_COUNTERS = {
    PostKind.QUOTE: "quotes_count",
    PostKind.REPLY: "comments_count",
    PostKind.REPOST: "reposts_count",
}


class ContentGraphService:
    """Service enforcing kind/status/parent rules for posts."""

    def __init__(
        self,
        db: Session,
        *,
        max_body_length: int | None = None,
        max_media_per_type: int | None = None,
    ) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.max_body_length = max_body_length or settings.post_body_max_length
        self.max_media_per_type = max_media_per_type or settings.media_max_per_type

    def _checked(self, content: PostContent) -> PostContent:
        return content.validated(
            max_body_length=self.max_body_length,
            max_media_per_type=self.max_media_per_type,
        )

    # -- roots ---------------------------------------------------------------

    def create_original(self, author_id: int, content: PostContent) -> Post:
        """Publish a new original post with all counters at zero."""
        return self._create_root(author_id, content, PostStatus.PUBLISHED)

    def create_draft(self, author_id: int, content: PostContent) -> Post:
        """Store an unpublished original visible only to its author."""
        return self._create_root(author_id, content, PostStatus.DRAFT)

    def _create_root(self, author_id: int, content: PostContent, status: PostStatus) -> Post:
        checked = self._checked(content)
        with transaction(self.db):
            post = self.posts.create(
                author_id=author_id,
                kind=PostKind.ORIGINAL,
                status=status,
                body=checked.body,
                media=checked.media_payload(),
            )
        logger.info("User %s created %s original post %s", author_id, status.value, post.id)
        return post

    def publish_draft(self, requester_id: int, draft_id: int) -> Post:
        """Move a draft to PUBLISHED exactly once.

        Raises:
            NotFound: If the post does not exist, is not an original, or
                belongs to someone else.
            InvalidState: If the post is already published, including when a
                concurrent publish won the race.
        """
        with transaction(self.db):
            post = self.posts.get_by_id(draft_id)
            # Other users' drafts are indistinguishable from missing ones.
            if (
                post is None
                or post.kind != PostKind.ORIGINAL
                or post.author_id != requester_id
            ):
                raise NotFound("Draft not found")
            if post.status == PostStatus.PUBLISHED:
                raise InvalidState("Draft has already been published")
            if not self.posts.publish(post.id):
                raise InvalidState("Draft has already been published")
        logger.info("User %s published draft %s", requester_id, draft_id)
        return post

    # -- children ------------------------------------------------------------

    def _resolve_parent(self, parent_id: int) -> Post:
        parent = self.posts.get_by_id(parent_id)
        if is_interactable(parent):
            return parent
        if parent is not None and parent.status == PostStatus.PUBLISHED:
            raise InvalidTarget("Reposts cannot be quoted, replied to or reposted")
        raise NotFound("Post not found")

    def _create_child(
        self,
        author_id: int,
        parent_id: int,
        kind: PostKind,
        content: PostContent | None,
    ) -> Post:
        checked = self._checked(content) if content is not None else None
        with transaction(self.db):
            parent = self._resolve_parent(parent_id)
            child = self.posts.create(
                author_id=author_id,
                kind=kind,
                status=PostStatus.PUBLISHED,
                body=checked.body if checked else None,
                media=checked.media_payload() if checked else [],
                parent_id=parent.id,
            )
            self.posts.adjust_counters(parent.id, **{_CHILD_COUNTERS[kind]: 1})
        logger.info(
            "User %s created %s %s on post %s",
            author_id,
            kind.value.lower(),
            child.id,
            parent_id,
        )
        return child

    def create_quote(self, author_id: int, parent_id: int, content: PostContent) -> Post:
        """Quote a post; increments the parent's ``quotes_count``."""
        return self._create_child(author_id, parent_id, PostKind.QUOTE, content)

    def create_reply(self, author_id: int, parent_id: int, content: PostContent) -> Post:
        """Reply to a post; increments the parent's ``comments_count``."""
        return self._create_child(author_id, parent_id, PostKind.REPLY, content)

    def create_repost(self, author_id: int, parent_id: int) -> Post:
        """Repost a post without content; increments the parent's ``reposts_count``."""
        return self._create_child(author_id, parent_id, PostKind.REPOST, None)

    # -- reads ---------------------------------------------------------------

    def get_by_id(self, post_id: int, viewer_id: int | None = None) -> Post | None:
        """Return a published post, or the viewer's own draft; otherwise None.

        Absent and hidden posts are indistinguishable to the caller.
        """
        post = self.posts.get_by_id(post_id)
        if post is None:
            return None
        if post.status == PostStatus.PUBLISHED:
            return post
        if viewer_id is not None and post.author_id == viewer_id:
            return post
        return None

    def get_interactable(self, post_id: int) -> Post:
        """Return a post that can be reacted to, quoted, replied to or reposted."""
        post = self.posts.get_by_id(post_id)
        if not is_interactable(post):
            raise NotFound("Post not found")
        return post

    def list_by_author(
        self,
        requester_id: int | None,
        author_id: int,
        *,
        status: PostStatus = PostStatus.PUBLISHED,
        kinds: Iterable[PostKind] | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> list[Post]:
        """List an author's posts newest first; drafts only for the author."""
        offset, limit = page_window(page, page_size)
        if status == PostStatus.DRAFT:
            if requester_id != author_id:
                raise Forbidden("You are not authorized to view this user's drafts")
            kinds = (PostKind.ORIGINAL,)
        return self.posts.list_by_author(
            author_id,
            status=status,
            kinds=tuple(kinds) if kinds is not None else ALL_KINDS,
            offset=offset,
            limit=limit,
        )

    def count_by_author(
        self,
        requester_id: int | None,
        author_id: int,
        *,
        status: PostStatus = PostStatus.PUBLISHED,
    ) -> int:
        """Count published originals and quotes, or drafts when the author asks."""
        if status == PostStatus.DRAFT:
            if requester_id != author_id:
                raise Forbidden("You are not authorized to view this user's drafts")
            return self.posts.count_by_author(
                author_id, status=status, kinds=(PostKind.ORIGINAL,)
            )
        return self.posts.count_by_author(author_id, status=status, kinds=COUNTED_KINDS)

    def list_children(
        self,
        parent_id: int,
        kind: PostKind,
        *,
        page: int = 1,
        page_size: int = 10,
    ) -> list[Post]:
        """List quotes or replies of an interactable post, newest first."""
        if kind not in (PostKind.QUOTE, PostKind.REPLY):
            raise ValueError(f"Cannot list children of kind {kind.value}")
        offset, limit = page_window(page, page_size)
        self.get_interactable(parent_id)
        return self.posts.list_children(parent_id, kind=kind, offset=offset, limit=limit)
