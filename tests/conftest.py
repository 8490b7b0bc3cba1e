# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from threadline.core.security import create_access_token
from threadline.db.session import Base, build_engine
from threadline.db.session import get_db as app_get_session
from threadline.main import app as fastapi_app
from threadline.models import Post, PostKind, PostStatus, User
from threadline.schemas.post import PostContent
from threadline.services.bookmarks import BookmarkService
from threadline.services.content_graph import ContentGraphService
from threadline.services.reactions import ReactionLedger

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique usernames."""

    def _make_user(username: str | None = None, display_name: str | None = None) -> User:
        user = User(
            username=username or f"user{next(_USERNAME_COUNTER)}",
            display_name=display_name,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice", "Alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob", "Bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol", "Carol")


def auth_header(user: User) -> dict[str, str]:
    """Build a bearer header for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return auth_header(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return auth_header(bob)


@pytest.fixture()
def carol_headers(carol: User) -> dict[str, str]:
    return auth_header(carol)


@pytest.fixture()
def graph(db_session: Session) -> ContentGraphService:
    return ContentGraphService(db_session)


@pytest.fixture()
def ledger(db_session: Session) -> ReactionLedger:
    return ReactionLedger(db_session)


@pytest.fixture()
def bookmarks(db_session: Session) -> BookmarkService:
    return BookmarkService(db_session)


@pytest.fixture()
def original(graph: ContentGraphService, alice: User) -> Post:
    """A published original post by alice."""
    post = graph.create_original(alice.id, PostContent(body="hello world"))
    assert post.kind == PostKind.ORIGINAL
    assert post.status == PostStatus.PUBLISHED
    return post


@pytest.fixture()
def draft(graph: ContentGraphService, alice: User) -> Post:
    """An unpublished draft by alice."""
    return graph.create_draft(alice.id, PostContent(body="work in progress"))


@pytest.fixture()
def repost(graph: ContentGraphService, original: Post, bob: User) -> Post:
    """Bob's repost of alice's original."""
    return graph.create_repost(bob.id, original.id)
