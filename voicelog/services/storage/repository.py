"""
Data-access layer for the transcript history.

``HistoryRepository`` receives an ``AsyncSession`` and provides the
append/list operations.  It calls ``flush()`` rather than ``commit()`` so
that transaction boundaries are controlled by the caller (typically
:func:`get_session`).
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from voicelog.core.exceptions import PersistenceError
from voicelog.services.storage.models_db import Transcript

logger = logging.getLogger(__name__)


class HistoryRepository:
    """Append-only store of transcripts, read back newest first.

    Args:
        session: An active SQLAlchemy ``AsyncSession``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, text: str) -> Transcript:
        """Persist *text* and return the stored record with id and timestamp.

        Raises:
            PersistenceError: If the database rejects the write.
        """
        record = Transcript(text=text, created_at=datetime.now(UTC))
        try:
            self._session.add(record)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to save transcript: {exc}") from exc
        return record

    async def list_recent(self, limit: int | None = None) -> list[Transcript]:
        """Return transcripts ordered by ``created_at`` desc, then insertion order desc.

        Args:
            limit: Maximum number of rows; ``None`` returns everything.

        Raises:
            PersistenceError: If the query fails.
        """
        stmt = select(Transcript).order_by(Transcript.created_at.desc(), Transcript.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load history: {exc}") from exc
        return list(result.scalars().all())

    async def count(self) -> int:
        """Return the total number of stored transcripts."""
        try:
            result = await self._session.execute(select(func.count()).select_from(Transcript))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to count transcripts: {exc}") from exc
        return int(result.scalar_one())
