"""
Pydantic v2 request / response models used across the API layer.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime
    transcripts: int | None = None  # None when the history store is unreachable


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscribeResponse(BaseModel):
    """POST /api/transcribe response. Only ``text`` is guaranteed."""

    text: str


class HistoryItem(BaseModel):
    """A stored transcript as exposed by GET /api/history."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    text: str
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite drops tzinfo on read; stored values are always UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error envelope returned by all error handlers."""

    error: str
    code: str
    timestamp: str
