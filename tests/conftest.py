"""Shared pytest fixtures for the VoiceLog test suite.

Provides a mock STT provider, an in-memory SQLite database, a temporary
blob store, and an async HTTP client wired to all of them.
"""

from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseSTT interface whose
        ``transcribe`` returns a fixed sentence.
    """
    from voicelog.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "This is a test transcription."
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def webm_bytes():
    """A few bytes starting with the EBML magic number used by webm files."""
    return b"\x1a\x45\xdf\xa3" + b"\x00" * 64


@pytest.fixture
def blob_store(tmp_path):
    """BlobStore rooted in a per-test temporary directory."""
    from voicelog.services.storage.blob_store import BlobStore

    return BlobStore(tmp_path / "uploads", max_bytes=1024 * 1024)


# ---------------------------------------------------------------------------
# Database Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine with tables, dispose after test."""
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from voicelog.services.storage.database import init_db

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Yield an AsyncSession bound to the test engine; rolls back after test."""
    from sqlalchemy.ext.asyncio import async_sessionmaker

    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def history_repository(db_session):
    """Return a HistoryRepository bound to the test session."""
    from voicelog.services.storage.repository import HistoryRepository

    return HistoryRepository(db_session)


@pytest.fixture
def use_test_db(db_engine):
    """Point ``database.get_session()`` at the in-memory test engine."""
    from voicelog.services.storage import database

    database._engine = db_engine
    database._session_factory = None  # force re-creation from new engine
    yield db_engine
    database.reset_engine()


# ---------------------------------------------------------------------------
# API Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app(mock_stt, blob_store):
    """FastAPI app with the STT provider and blob store overridden."""
    from voicelog.api.app import create_app
    from voicelog.api.dependencies import get_blob_store, get_stt

    application = create_app()
    application.dependency_overrides[get_stt] = lambda: mock_stt
    application.dependency_overrides[get_blob_store] = lambda: blob_store
    return application


@pytest.fixture
async def client(app, use_test_db):
    """AsyncClient backed by the in-memory test engine."""
    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
