# src/threadline/api/v1/endpoints/users.py
"""User profile endpoints: timelines and post counts."""

from fastapi import APIRouter

from threadline.models import PostStatus
from threadline.schemas.post import CountResponse, PostResponse
from threadline.services.content_graph import POSTS_TAB_KINDS, REPLIES_TAB_KINDS
from threadline.services.presentation import present_posts

from ..dependencies import (
    ContentGraphDep,
    CurrentUserDep,
    PageDep,
    SessionDep,
    get_user_by_username,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}/posts", response_model=list[PostResponse])
def list_user_posts(
    username: str,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
    paging: PageDep,
) -> list[PostResponse]:
    """Posts tab: originals, quotes and reposts."""
    author = get_user_by_username(db, username)
    posts = graph.list_by_author(
        current_user.id,
        author.id,
        kinds=POSTS_TAB_KINDS,
        page=paging.page,
        page_size=paging.count,
    )
    return present_posts(db, posts, current_user.id)


@router.get("/{username}/replies", response_model=list[PostResponse])
def list_user_replies(
    username: str,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
    paging: PageDep,
) -> list[PostResponse]:
    """Replies tab: replies and reposts."""
    author = get_user_by_username(db, username)
    posts = graph.list_by_author(
        current_user.id,
        author.id,
        kinds=REPLIES_TAB_KINDS,
        page=paging.page,
        page_size=paging.count,
    )
    return present_posts(db, posts, current_user.id)


@router.get("/{username}/posts/count", response_model=CountResponse)
def count_user_posts(
    username: str,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> CountResponse:
    """Count a user's published originals and quotes."""
    author = get_user_by_username(db, username)
    return CountResponse(count=graph.count_by_author(current_user.id, author.id))


@router.get("/{username}/drafts/count", response_model=CountResponse)
def count_user_drafts(
    username: str,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> CountResponse:
    """Count the caller's own drafts."""
    author = get_user_by_username(db, username)
    return CountResponse(
        count=graph.count_by_author(current_user.id, author.id, status=PostStatus.DRAFT)
    )
