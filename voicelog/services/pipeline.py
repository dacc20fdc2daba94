"""Upload → transcribe → persist pipeline.

One ``TranscribePipeline.run`` call handles one request end to end:

1. validate the upload and write it to the blob store,
2. stream the blob to the STT provider,
3. append the text to the history store,
4. delete the blob.

Only input rejection and upstream failures escape ``run``. A failed
history write is logged and the text is still returned, so a transcript
shown to the user may be missing from history. Blob cleanup runs on every
path once the blob exists and never raises.

Usage::

    pipeline = TranscribePipeline(stt, BlobStore("uploads"))
    result = await pipeline.run(AudioUpload(data, "clip.webm", "audio/webm"))
    result.text
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from voicelog.core.exceptions import InputRejectedError, PersistenceError, UpstreamError
from voicelog.services.storage.blob_store import BlobStore
from voicelog.services.storage.database import get_session
from voicelog.services.storage.repository import HistoryRepository
from voicelog.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

# MediaRecorder output is sometimes labelled video/webm even when audio-only.
_ACCEPTED_EXTRA_TYPES = frozenset({"video/webm"})

SessionProvider = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class PipelineState(StrEnum):
    """Per-request pipeline states; the last four are terminal."""

    received_upload = "received_upload"
    transcribing = "transcribing"
    persisting = "persisting"
    done = "done"
    rejected_input = "rejected_input"
    upstream_failed = "upstream_failed"
    persist_failed_but_done = "persist_failed_but_done"


@dataclass(frozen=True)
class AudioUpload:
    """An audio file received from the client."""

    data: bytes
    filename: str | None = None
    content_type: str | None = None


@dataclass
class PipelineResult:
    """Outcome of a completed run.

    ``record_id`` is None when the transcript could not be saved.
    """

    text: str
    state: PipelineState
    record_id: int | None = None


def is_audio_mime(content_type: str | None) -> bool:
    """Return True for ``audio/*`` types and browser-recorded ``video/webm``."""
    if not content_type:
        return False
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime.startswith("audio/") or mime in _ACCEPTED_EXTRA_TYPES


class TranscribePipeline:
    """Orchestrates one transcription request.

    Args:
        stt: Speech-to-text provider.
        blob_store: Transient storage for the uploaded audio.
        session_provider: Async context manager factory yielding DB sessions.
        model_id: Optional model override passed to the provider.
    """

    def __init__(
        self,
        stt: BaseSTT,
        blob_store: BlobStore,
        session_provider: SessionProvider = get_session,
        model_id: str | None = None,
    ) -> None:
        self._stt = stt
        self._blobs = blob_store
        self._session_provider = session_provider
        self._model_id = model_id
        self.state = PipelineState.received_upload

    def _validate(self, upload: AudioUpload | None) -> AudioUpload:
        if upload is None or not upload.data:
            raise InputRejectedError("No audio file uploaded")
        if not is_audio_mime(upload.content_type):
            raise InputRejectedError(
                f"Unsupported file type: {upload.content_type or 'unknown'}. Please upload audio."
            )
        return upload

    async def _persist(self, text: str) -> int | None:
        """Append *text* to history; return the new id or None on failure."""
        try:
            async with self._session_provider() as session:
                record = await HistoryRepository(session).append(text)
                record_id = record.id
        except (PersistenceError, SQLAlchemyError, OSError):
            logger.exception("Transcript could not be saved to history")
            return None
        return record_id

    async def run(self, upload: AudioUpload | None) -> PipelineResult:
        """Run the pipeline for one upload.

        Raises:
            InputRejectedError: No file, empty file, non-audio MIME, or oversize.
            UpstreamError: The STT provider call failed.
        """
        self.state = PipelineState.received_upload
        try:
            upload = self._validate(upload)
            blob = await run_in_threadpool(self._blobs.store, upload.data, upload.filename)
        except InputRejectedError as exc:
            self.state = PipelineState.rejected_input
            logger.info("Upload rejected: %s", exc.detail)
            raise

        logger.info("Processing upload %s (%d bytes)", blob.path.name, blob.size)
        try:
            self.state = PipelineState.transcribing
            try:
                with self._blobs.open_for_read(blob) as stream:
                    text = await self._stt.transcribe(
                        stream,
                        model_id=self._model_id,
                        filename=blob.path.name,
                    )
            except UpstreamError as exc:
                self.state = PipelineState.upstream_failed
                logger.warning(
                    "Transcription failed for %s (%s): %s",
                    blob.path.name,
                    exc.status_code,
                    exc.detail,
                )
                raise
            except Exception as exc:
                self.state = PipelineState.upstream_failed
                logger.exception("Transcription client crashed for %s", blob.path.name)
                raise UpstreamError(f"Transcription failed: {exc}") from exc

            self.state = PipelineState.persisting
            record_id = await self._persist(text)
            if record_id is None:
                self.state = PipelineState.persist_failed_but_done
            else:
                self.state = PipelineState.done
                logger.info("Saved transcript %s (%d chars)", record_id, len(text))

            return PipelineResult(text=text, state=self.state, record_id=record_id)
        finally:
            self._blobs.delete(blob)

