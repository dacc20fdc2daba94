"""
SQLAlchemy ORM models for the VoiceLog schema.

Tables: ``transcripts``.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from voicelog.services.storage.database import Base


class Transcript(Base):
    """One transcription result. Rows are written once and never updated."""

    __tablename__ = "transcripts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Transcript id={self.id} chars={len(self.text or '')}>"
