"""FastAPI dependency providers shared by the route modules.

Tests replace these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from voicelog.core.config import get_settings
from voicelog.services.storage.blob_store import BlobStore
from voicelog.services.transcription import BaseSTT, create_stt


@lru_cache
def get_stt() -> BaseSTT:
    """Return the process-wide STT provider selected by ``stt_provider``."""
    settings = get_settings()
    return create_stt(provider=settings.stt_provider)


def get_blob_store() -> BlobStore:
    settings = get_settings()
    return BlobStore(settings.uploads_dir, max_bytes=settings.max_upload_bytes)
