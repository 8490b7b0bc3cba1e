# src/threadline/api/v1/endpoints/drafts.py
"""Draft endpoints for the Threadline API."""

from fastapi import APIRouter, status

from threadline.core.errors import Forbidden
from threadline.models import PostStatus
from threadline.schemas.post import PostContent, PostResponse
from threadline.services.presentation import present_post, present_posts

from ..dependencies import (
    ContentGraphDep,
    CurrentUserDep,
    PageDep,
    SessionDep,
    get_user_by_username,
)

router = APIRouter(prefix="/drafts", tags=["drafts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_draft(
    post_data: PostContent,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Save an unpublished original post."""
    draft = graph.create_draft(current_user.id, post_data)
    return present_post(db, draft, current_user.id)


@router.get("/", response_model=list[PostResponse])
def list_drafts(
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
    paging: PageDep,
) -> list[PostResponse]:
    """List the caller's drafts, newest first."""
    drafts = graph.list_by_author(
        current_user.id,
        current_user.id,
        status=PostStatus.DRAFT,
        page=paging.page,
        page_size=paging.count,
    )
    return present_posts(db, drafts, current_user.id)


@router.post(
    "/{username}/{draft_id}/publish",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def publish_draft(
    username: str,
    draft_id: int,
    current_user: CurrentUserDep,
    graph: ContentGraphDep,
    db: SessionDep,
) -> PostResponse:
    """Publish one of the caller's drafts.

    Raises:
        NotFound: If the user or draft does not exist.
        Forbidden: If the drafts belong to someone else.
        InvalidState: If the draft was already published.
    """
    owner = get_user_by_username(db, username)
    if owner.id != current_user.id:
        raise Forbidden("You are not authorized to manage this user's drafts")
    post = graph.publish_draft(current_user.id, draft_id)
    return present_post(db, post, current_user.id)
