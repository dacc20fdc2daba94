"""
Storage module - Database and transient file operations.
"""

from voicelog.services.storage.blob_store import BlobStore, StoredBlob
from voicelog.services.storage.database import (
    Base,
    close_db,
    get_engine,
    get_session,
    init_db,
    reset_engine,
)
from voicelog.services.storage.models_db import Transcript
from voicelog.services.storage.repository import HistoryRepository

__all__ = [
    "Base",
    "BlobStore",
    "HistoryRepository",
    "StoredBlob",
    "Transcript",
    "close_db",
    "get_engine",
    "get_session",
    "init_db",
    "reset_engine",
]
