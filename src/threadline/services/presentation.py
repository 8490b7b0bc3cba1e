"""Build API projections of posts.

A repost carries no engagement of its own: every counter shown on a repost is
read from its parent row at presentation time, so it is always live.
"""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from threadline.models import Bookmark, Post, PostKind, ReactionKind, User
from threadline.repositories.post_repo import PostRepository
from threadline.repositories.reaction_repo import ReactionRepository
from threadline.schemas.post import (
    AuthorSummary,
    EmbeddedPostResponse,
    MediaItem,
    PostResponse,
    ViewerMetrics,
)


def author_summary(user: User) -> AuthorSummary:
    """Project the public author fields."""
    return AuthorSummary(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        profile_pic=user.profile_pic_link,
    )


def engagement_target(post: Post) -> Post:
    """Return the post whose counters and reactions represent ``post``."""
    if post.kind == PostKind.REPOST and post.parent is not None:
        return post.parent
    return post


def _embedded(post: Post, counters: Post) -> dict[str, object]:
    return {
        "id": post.id,
        "body": post.body,
        "media": [MediaItem.model_validate(item) for item in post.media or []],
        "created_at": post.created_at,
        "kind": post.kind,
        "status": post.status,
        "likes_count": counters.likes_count,
        "dislikes_count": counters.dislikes_count,
        "quotes_count": counters.quotes_count,
        "comments_count": counters.comments_count,
        "reposts_count": counters.reposts_count,
        "bookmarks_count": counters.bookmarks_count,
        "author": author_summary(post.author),
    }


def to_post_response(post: Post, viewer: ViewerMetrics | None = None) -> PostResponse:
    """Convert a Post ORM instance to an API schema, embedding its parent one level deep."""
    parent = post.parent if post.parent_id is not None else None
    return PostResponse(
        **_embedded(post, engagement_target(post)),
        parent=EmbeddedPostResponse(**_embedded(parent, parent)) if parent is not None else None,
        viewer=viewer,
    )


def load_viewer_metrics(
    db: Session,
    viewer_id: int,
    posts: Sequence[Post],
) -> dict[int, ViewerMetrics]:
    """Compute viewer flags for ``posts`` in a fixed number of queries.

    Reposts report the viewer's relationship with the reposted post.
    """
    targets = {post.id: engagement_target(post).id for post in posts}
    target_ids = set(targets.values())

    reactions = ReactionRepository(db).kinds_for(viewer_id, target_ids)
    reposted = PostRepository(db).reposted_parent_ids(viewer_id, target_ids)
    bookmarked: set[int] = set()
    if target_ids:
        bookmarked = set(
            db.execute(
                select(Bookmark.post_id).where(
                    Bookmark.user_id == viewer_id,
                    Bookmark.post_id.in_(target_ids),
                )
            ).scalars()
        )

    metrics: dict[int, ViewerMetrics] = {}
    for post_id, target_id in targets.items():
        reaction = reactions.get(target_id)
        metrics[post_id] = ViewerMetrics(
            is_liked_by_user=reaction == ReactionKind.LIKE,
            is_disliked_by_user=reaction == ReactionKind.DISLIKE,
            is_reposted_by_user=target_id in reposted,
            is_bookmarked_by_user=target_id in bookmarked,
        )
    return metrics


def present_posts(
    db: Session,
    posts: Sequence[Post],
    viewer_id: int | None = None,
) -> list[PostResponse]:
    """Project a page of posts, attaching viewer flags when a viewer is known."""
    metrics = load_viewer_metrics(db, viewer_id, posts) if viewer_id is not None else {}
    return [to_post_response(post, metrics.get(post.id)) for post in posts]


def present_post(db: Session, post: Post, viewer_id: int | None = None) -> PostResponse:
    """Project a single post."""
    return present_posts(db, [post], viewer_id)[0]
