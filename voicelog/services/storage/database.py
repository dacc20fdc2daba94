"""
Database plumbing for the transcript history.

One lazily created ``AsyncEngine`` per process backs every request. Callers
open a unit of work with ``async with get_session() as session``; the
transaction is committed when the block exits cleanly and rolled back if it
raises. ``init_db`` creates the ``transcripts`` table on startup.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from voicelog.core.config import get_settings

# Seconds a writer waits on a locked SQLite file before failing.
SQLITE_BUSY_TIMEOUT = 15


class Base(DeclarativeBase):
    """Metadata root for the history tables."""


# Swapped out by the test fixtures; see ``reset_engine``.
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(url: URL) -> dict:
    if url.get_backend_name() != "sqlite":
        return {}
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return {"connect_args": {"timeout": SQLITE_BUSY_TIMEOUT}}


def get_engine(url: str | None = None) -> AsyncEngine:
    """Engine for ``url`` (default ``settings.database_url``), built once.

    A file-backed SQLite database gets its parent directory created, so the
    default ``data/voicelog.db`` works on a fresh checkout.
    """
    global _engine
    if _engine is None:
        parsed = make_url(url or get_settings().database_url)
        _engine = create_async_engine(parsed, echo=False, **_engine_options(parsed))
    return _engine


def get_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        # Records stay readable after commit for building the response.
        _session_factory = async_sessionmaker(engine or get_engine(), expire_on_commit=False)
    return _session_factory


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """One transaction: commit on clean exit, roll back and re-raise otherwise."""
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create the history tables if they are missing. No migrations are run."""
    from voicelog.services.storage import models_db  # noqa: F401  (registers Transcript)

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the pooled connections on shutdown."""
    engine = _engine
    reset_engine()
    if engine is not None:
        await engine.dispose()


def reset_engine() -> None:
    """Forget the engine and session factory without disposing them."""
    global _engine, _session_factory
    _engine = None
    _session_factory = None
