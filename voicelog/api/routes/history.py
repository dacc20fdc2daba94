"""
History endpoint.

``GET /api/history`` returns stored transcripts, newest first.
"""

from fastapi import APIRouter, Query

from voicelog.core.models import HistoryItem
from voicelog.services.storage.database import get_session
from voicelog.services.storage.repository import HistoryRepository

router = APIRouter(tags=["history"])


@router.get("/history", response_model=list[HistoryItem])
async def list_history(limit: int | None = Query(None, ge=1, le=1000)):
    """List transcripts ordered by creation time, newest first."""
    async with get_session() as session:
        repo = HistoryRepository(session)
        records = await repo.list_recent(limit=limit)
    return [HistoryItem(id=r.id, text=r.text, created_at=r.created_at) for r in records]
