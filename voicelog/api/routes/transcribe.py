"""
Transcription endpoint.

``POST /api/transcribe`` accepts one multipart field ``audio`` and returns
``{"text": ...}``. All orchestration lives in ``TranscribePipeline``.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from voicelog.api.dependencies import get_blob_store, get_stt
from voicelog.core.models import ErrorResponse, TranscribeResponse
from voicelog.services.pipeline import AudioUpload, TranscribePipeline
from voicelog.services.storage.blob_store import BlobStore
from voicelog.services.transcription import BaseSTT

router = APIRouter(tags=["transcription"])


@router.post(
    "/transcribe",
    response_model=TranscribeResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def transcribe(
    audio: UploadFile | None = File(None),
    stt: BaseSTT = Depends(get_stt),
    blob_store: BlobStore = Depends(get_blob_store),
) -> TranscribeResponse:
    """Transcribe an uploaded audio file and append it to the history."""
    upload = None
    if audio is not None:
        try:
            # Reject by declared size before the body is read into memory
            if audio.size is not None:
                blob_store.check_size(audio.size)
            data = await audio.read()
        finally:
            await audio.close()
        upload = AudioUpload(data=data, filename=audio.filename, content_type=audio.content_type)

    result = await TranscribePipeline(stt, blob_store).run(upload)
    return TranscribeResponse(text=result.text)
