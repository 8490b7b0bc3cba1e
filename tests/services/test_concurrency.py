# mypy: ignore-errors
# tests/services/test_concurrency.py
"""Counters stay exact when many sessions write to the same post at once."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.orm import sessionmaker

from threadline.core.errors import Conflict
from threadline.db.session import Base, build_engine
from threadline.models import ReactionKind, User
from threadline.repositories.post_repo import PostRepository
from threadline.repositories.reaction_repo import ReactionRepository
from threadline.schemas.post import PostContent
from threadline.services.content_graph import ContentGraphService
from threadline.services.reactions import ReactionLedger

WORKERS = 8


@pytest.fixture()
def file_sessions(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'threadline.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()


@pytest.fixture()
def seeded(file_sessions):
    """Create WORKERS users and one published original; return their ids."""
    with file_sessions() as session:
        users = [User(username=f"writer{n}") for n in range(WORKERS)]
        session.add_all(users)
        session.commit()
        user_ids = [user.id for user in users]
        post = ContentGraphService(session).create_original(
            user_ids[0], PostContent(body="busy post")
        )
        return user_ids, post.id


def _run_in_own_session(file_sessions, work):
    with file_sessions() as session:
        return work(session)


def test_concurrent_replies_count_exactly(file_sessions, seeded) -> None:
    user_ids, post_id = seeded

    def reply(user_id):
        return _run_in_own_session(
            file_sessions,
            lambda session: ContentGraphService(session)
            .create_reply(user_id, post_id, PostContent(body="me too"))
            .id,
        )

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        reply_ids = list(pool.map(reply, user_ids))

    assert len(set(reply_ids)) == WORKERS
    with file_sessions() as session:
        counters = PostRepository(session).read_counters(post_id, "comments_count")
        assert counters["comments_count"] == WORKERS


def test_concurrent_likes_from_distinct_users(file_sessions, seeded) -> None:
    user_ids, post_id = seeded

    def like(user_id):
        return _run_in_own_session(
            file_sessions,
            lambda session: ReactionLedger(session).toggle_like(user_id, post_id).state,
        )

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        states = list(pool.map(like, user_ids))

    assert states == ["LIKED"] * WORKERS
    with file_sessions() as session:
        counters = PostRepository(session).read_counters(post_id, "likes_count", "dislikes_count")
        assert counters == {"likes_count": WORKERS, "dislikes_count": 0}
        assert ReactionRepository(session).count(post_id, ReactionKind.LIKE) == WORKERS


def test_concurrent_toggles_by_one_user_keep_invariants(file_sessions, seeded) -> None:
    user_ids, post_id = seeded
    actor = user_ids[1]

    def toggle(step):
        def work(session):
            ledger = ReactionLedger(session)
            try:
                if step % 2:
                    return ledger.toggle_dislike(actor, post_id).state
                return ledger.toggle_like(actor, post_id).state
            except Conflict:
                return "CONFLICT"

        return _run_in_own_session(file_sessions, work)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        outcomes = list(pool.map(toggle, range(WORKERS * 2)))

    assert set(outcomes) <= {"NONE", "LIKED", "DISLIKED", "CONFLICT"}
    with file_sessions() as session:
        counters = PostRepository(session).read_counters(post_id, "likes_count", "dislikes_count")
        reactions = ReactionRepository(session)
        likes = reactions.count(post_id, ReactionKind.LIKE)
        dislikes = reactions.count(post_id, ReactionKind.DISLIKE)
        assert counters == {"likes_count": likes, "dislikes_count": dislikes}
        assert likes + dislikes <= 1
