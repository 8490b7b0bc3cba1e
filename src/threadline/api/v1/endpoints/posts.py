# src/threadline/api/v1/endpoints/posts.py
"""Post-related endpoints for the Threadline API."""

from fastapi import APIRouter, Query, status

from threadline.core.errors import NotFound
from threadline.models import PostKind
from threadline.schemas.post import PostContent, PostResponse
from threadline.services.content_graph import POSTS_TAB_KINDS
from threadline.services.presentation import present_post, present_posts

from ..dependencies import (
    ContentGraphDep,
    CurrentUserDep,
    PageDep,
    SessionDep,
    get_user_by_username,
)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostContent,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Publish a new original post.

    Raises:
        ValidationFailure: If the body is too long or there is neither body nor media.
    """
    post = graph.create_original(current_user.id, post_data)
    return present_post(db, post, current_user.id)


@router.get("/", response_model=list[PostResponse])
def list_posts(
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
    paging: PageDep,
    username: str | None = Query(None, description="Author username; defaults to the caller"),
) -> list[PostResponse]:
    """List an author's originals, quotes and reposts, newest first."""
    author = get_user_by_username(db, username) if username else current_user
    posts = graph.list_by_author(
        current_user.id,
        author.id,
        kinds=POSTS_TAB_KINDS,
        page=paging.page,
        page_size=paging.count,
    )
    return present_posts(db, posts, current_user.id)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Get a published post, or one of the caller's own drafts."""
    post = graph.get_by_id(post_id, viewer_id=current_user.id)
    if post is None:
        raise NotFound("Post not found")
    return present_post(db, post, current_user.id)


@router.post(
    "/{post_id}/quotes",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_quote(
    post_id: int,
    post_data: PostContent,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Quote a post."""
    quote = graph.create_quote(current_user.id, post_id, post_data)
    return present_post(db, quote, current_user.id)


@router.get("/{post_id}/quotes", response_model=list[PostResponse])
def list_quotes(
    post_id: int,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
    paging: PageDep,
) -> list[PostResponse]:
    """List quotes of a post, newest first."""
    quotes = graph.list_children(
        post_id, PostKind.QUOTE, page=paging.page, page_size=paging.count
    )
    return present_posts(db, quotes, current_user.id)


@router.post(
    "/{post_id}/comments",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: int,
    post_data: PostContent,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Reply to a post."""
    reply = graph.create_reply(current_user.id, post_id, post_data)
    return present_post(db, reply, current_user.id)


@router.get("/{post_id}/comments", response_model=list[PostResponse])
def list_comments(
    post_id: int,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
    paging: PageDep,
) -> list[PostResponse]:
    """List replies to a post, newest first."""
    replies = graph.list_children(
        post_id, PostKind.REPLY, page=paging.page, page_size=paging.count
    )
    return present_posts(db, replies, current_user.id)


@router.post(
    "/{post_id}/reposts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_repost(
    post_id: int,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Repost a post. Engagement numbers on the result are the parent's."""
    repost = graph.create_repost(current_user.id, post_id)
    return present_post(db, repost, current_user.id)
