"""Engine and session plumbing for the payment record database."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config import get_settings
from app.models.base import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(url: str) -> dict[str, object]:
    if url.startswith("sqlite"):
        # Sessions are handed across the threadpool that serves sync routes.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def init_engine(url: str | None = None) -> Engine:
    """Bind the module to ``url`` (``DATABASE_URL`` by default).

    Calling it again while an engine is live returns that engine unchanged.
    """

    global _engine, _session_factory
    if _engine is not None:
        return _engine

    url = url or get_settings().database_url
    _engine = create_engine(url, **_engine_options(url))
    _session_factory = sessionmaker(bind=_engine, autoflush=False, expire_on_commit=False)
    logger.info("Database engine ready", extra={"dialect": _engine.dialect.name})
    return _engine


def get_engine() -> Engine:
    return _engine if _engine is not None else init_engine()


def new_session() -> Session:
    if _session_factory is None:
        init_engine()
    assert _session_factory is not None
    return _session_factory()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session closed on exit; committing stays with the caller."""

    session = new_session()
    try:
        yield session
    finally:
        session.close()


def create_all() -> None:
    """Create missing tables straight from the models, bypassing Alembic."""

    Base.metadata.create_all(bind=get_engine())


def close_engine() -> None:
    global _engine, _session_factory
    if _engine is None:
        return
    _engine.dispose()
    _engine = None
    _session_factory = None


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""

    with session_scope() as session:
        yield session


__all__ = [
    "close_engine",
    "create_all",
    "get_db",
    "get_engine",
    "init_engine",
    "new_session",
    "session_scope",
]
