"""Sessions for request handlers and services.

Handlers receive a session through the get_db dependency. Services that write
wrap their statements in transaction() so a failure never leaves a half-applied
change behind.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from soloboss.db.engine import get_engine


def create_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    """Build a sessionmaker on engine, or on the shared engine when omitted.

    Loaded attributes survive commit so response models can be built from
    rows after the service has committed.
    """
    return sessionmaker(
        bind=engine if engine is not None else get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    """Shared sessionmaker bound to the settings-configured engine."""
    return create_session_factory()


def get_db() -> Iterator[Session]:
    """Yield one session per request and close it when the response is done."""
    with get_session_factory()() as db:
        yield db


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit db when the block exits cleanly; roll back and re-raise otherwise."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
