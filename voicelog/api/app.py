"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, and the health endpoint. The module-level ``app`` instance
allows ``uvicorn voicelog.api.app:app --reload``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voicelog.api.middleware.error_handler import register_error_handlers
from voicelog.api.routes import history, transcribe
from voicelog.core.config import get_settings
from voicelog.core.exceptions import PersistenceError
from voicelog.core.logging import configure_logging
from voicelog.core.models import HealthResponse
from voicelog.services.storage.database import close_db, get_session, init_db
from voicelog.services.storage.repository import HistoryRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    Startup: configure logging and create the history table if needed.
    Shutdown: dispose the DB engine.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    await init_db()
    logger.info("VoiceLog API ready (stt=%s, db=%s)", settings.stt_provider, settings.database_url)
    yield
    await close_db()


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """

    app = FastAPI(
        title="VoiceLog",
        description="Record or upload audio, transcribe it with a hosted "
        "speech-to-text API, and browse the transcript history.",
        version="0.1.0",
        lifespan=lifespan,
    )

    # -- CORS --
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check (root-level, not under /api) --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        try:
            async with get_session() as session:
                total = await HistoryRepository(session).count()
        except PersistenceError as exc:
            logger.warning("Health check could not reach the history store: %s", exc.detail)
            return HealthResponse(status="degraded", timestamp=datetime.now(UTC))
        return HealthResponse(timestamp=datetime.now(UTC), transcripts=total)

    # -- REST routes --
    app.include_router(transcribe.router, prefix="/api")
    app.include_router(history.router, prefix="/api")

    return app


app = create_app()


def main() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "voicelog.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )
