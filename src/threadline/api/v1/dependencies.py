"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from threadline.core.errors import NotFound
from threadline.core.security import decode_subject
from threadline.core.settings import settings
from threadline.db.session import get_db
from threadline.models import User
from threadline.schemas.common import PageParams
from threadline.services.bookmarks import BookmarkService
from threadline.services.content_graph import ContentGraphService
from threadline.services.reactions import ReactionLedger

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    user_id = decode_subject(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_page_params(
    page: int = Query(1, ge=1, description="1-based page number"),
    count: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
) -> PageParams:
    """Collect offset pagination query parameters."""
    return PageParams(page=page, count=count)


PageDep = Annotated[PageParams, Depends(get_page_params)]


def get_content_graph(db: SessionDep) -> ContentGraphService:
    """Return a content graph service bound to the request session."""
    return ContentGraphService(db)


def get_reaction_ledger(db: SessionDep) -> ReactionLedger:
    """Return a reaction ledger bound to the request session."""
    return ReactionLedger(db)


def get_bookmark_service(db: SessionDep) -> BookmarkService:
    """Return a bookmark service bound to the request session."""
    return BookmarkService(db)


ContentGraphDep = Annotated[ContentGraphService, Depends(get_content_graph)]
ReactionLedgerDep = Annotated[ReactionLedger, Depends(get_reaction_ledger)]
BookmarkServiceDep = Annotated[BookmarkService, Depends(get_bookmark_service)]


def get_user_by_username(db: Session, username: str) -> User:
    """Look up a user by username.

    Raises:
        NotFound: If no such user exists.
    """
    user = db.execute(select(User).where(User.username == username)).scalars().first()
    if user is None:
        raise NotFound("User not found")
    return user
