"""Database session configuration."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from threadline.core.errors import Conflict
from threadline.core.settings import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine, applying SQLite-specific connection settings when needed."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", 30)
        kwargs["connect_args"] = connect_args
    new_engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(new_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


# Ensure model modules are imported so that metadata is populated when create_all runs.
import threadline.models  # noqa: E402,F401

engine = build_engine(
    settings.effective_database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _is_lock_contention(exc: OperationalError) -> bool:
    message = str(exc.orig).lower()
    return any(
        marker in message
        for marker in ("database is locked", "deadlock", "could not serialize", "lock timeout")
    )


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a unit of work that either commits entirely or leaves no trace.

    Constraint violations and lock contention are reported as ``Conflict``;
    every other exception is re-raised after the rollback.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Rolled back on integrity error: %s", exc.orig)
        raise Conflict() from exc
    except OperationalError as exc:
        db.rollback()
        if _is_lock_contention(exc):
            logger.warning("Rolled back on lock contention: %s", exc.orig)
            raise Conflict() from exc
        raise
    except BaseException:
        db.rollback()
        raise


def dispose_engine() -> None:
    """Release pooled connections at shutdown."""
    engine.dispose()
