"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface so the transcribe
pipeline never depends on a specific provider SDK.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(
        self,
        stream: BinaryIO,
        model_id: str | None = None,
        filename: str = "audio.webm",
    ) -> str:
        """Transcribe a readable audio stream to text.

        Args:
            stream: Binary stream positioned at the start of the audio data.
            model_id: Provider model identifier; the provider default if None.
            filename: Name hint the provider uses to detect the container.

        Returns:
            The recognized text exactly as the provider returned it.
            An empty string is a valid result (silence).

        Raises:
            ExternalServiceError: The provider answered with an error status.
            UpstreamError: Any other failure reaching the provider.
        """
