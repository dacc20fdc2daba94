"""
Hosted Whisper provider over an OpenAI-compatible transcription endpoint.

Groq serves ``whisper-large-v3`` behind the same ``/audio/transcriptions``
route as OpenAI, so the ``openai`` SDK drives both; only the base URL,
credential, and model differ. Exactly one request is made per call.
"""

import logging
from typing import BinaryIO

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
)

from voicelog.core.config import get_settings
from voicelog.core.exceptions import ExternalServiceError, UpstreamError
from voicelog.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


def _provider_message(exc: APIStatusError) -> str:
    """Extract the provider's error message from an error response."""
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return exc.message


class WhisperAPISTT(BaseSTT):
    """Speech-to-text via a hosted Whisper model.

    Args:
        api_key: Provider credential (defaults to ``settings.groq_api_key``).
        model: Default model identifier (defaults to ``settings.stt_model``).
        base_url: API root; ``None`` means the SDK default (api.openai.com).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.groq_api_key
        self._model = model or settings.stt_model
        self._base_url = base_url
        self._timeout = timeout if timeout is not None else settings.stt_timeout_seconds
        self._client = AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def transcribe(
        self,
        stream: BinaryIO,
        model_id: str | None = None,
        filename: str = "audio.webm",
    ) -> str:
        model = model_id or self._model
        try:
            response = await self._client.audio.transcriptions.create(
                model=model,
                file=(filename, stream),
            )
        except APIStatusError as exc:
            message = _provider_message(exc)
            logger.warning("STT provider returned %s: %s", exc.status_code, message)
            raise ExternalServiceError(exc.status_code, message) from exc
        except APITimeoutError as exc:
            logger.warning("STT provider timed out after %.0fs", self._timeout)
            raise UpstreamError("Transcription service timed out", status_code=504) from exc
        except APIConnectionError as exc:
            logger.warning("STT provider unreachable: %s", exc)
            raise UpstreamError(f"Failed to reach transcription service: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected STT provider error: %s", exc)
            raise UpstreamError(f"Transcription service error: {exc}") from exc

        return response.text or ""
