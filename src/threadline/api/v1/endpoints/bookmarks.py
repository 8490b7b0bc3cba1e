# src/threadline/api/v1/endpoints/bookmarks.py
"""Bookmark endpoints for the Threadline API."""

from fastapi import APIRouter, Response, status

from threadline.schemas.bookmark import BookmarkCreate, BookmarkResponse
from threadline.services.presentation import present_posts

from ..dependencies import BookmarkServiceDep, CurrentUserDep, PageDep, SessionDep

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("/", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
def create_bookmark(
    payload: BookmarkCreate,
    current_user: CurrentUserDep,
    bookmarks: BookmarkServiceDep,
    db: SessionDep,
) -> BookmarkResponse:
    """Bookmark a post.

    Raises:
        NotFound: If the post cannot be interacted with.
        Conflict: If the caller already bookmarked it.
    """
    bookmark = bookmarks.add(current_user.id, payload.post_id)
    [post] = present_posts(db, [bookmark.post], current_user.id)
    return BookmarkResponse(id=bookmark.id, created_at=bookmark.created_at, post=post)


@router.get("/", response_model=list[BookmarkResponse])
def list_bookmarks(
    current_user: CurrentUserDep,
    bookmarks: BookmarkServiceDep,
    db: SessionDep,
    paging: PageDep,
) -> list[BookmarkResponse]:
    """List the caller's bookmarks, newest first."""
    saved = bookmarks.list_for_user(current_user.id, page=paging.page, page_size=paging.count)
    posts = present_posts(db, [bookmark.post for bookmark in saved], current_user.id)
    return [
        BookmarkResponse(id=bookmark.id, created_at=bookmark.created_at, post=post)
        for bookmark, post in zip(saved, posts)
    ]


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bookmark(
    bookmark_id: int,
    current_user: CurrentUserDep,
    bookmarks: BookmarkServiceDep,
) -> Response:
    """Remove one of the caller's bookmarks."""
    bookmarks.remove(current_user.id, bookmark_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
