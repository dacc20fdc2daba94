"""
Transcription module - Speech-to-text abstraction layer.

Factory function for creating STT instances based on provider configuration.
"""

from .base import BaseSTT

__all__ = ["BaseSTT", "create_stt"]

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


def create_stt(provider: str, **kwargs) -> BaseSTT:
    """
    Factory function to create STT instance based on provider.

    Args:
        provider: STT provider name ("groq" or "openai")
        **kwargs: Provider-specific configuration

    Returns:
        BaseSTT implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    from voicelog.core.config import get_settings

    from .whisper_api import WhisperAPISTT

    settings = get_settings()
    if provider == "groq":
        kwargs.setdefault("api_key", settings.groq_api_key)
        kwargs.setdefault("base_url", settings.stt_base_url or GROQ_BASE_URL)
        return WhisperAPISTT(**kwargs)
    elif provider == "openai":
        kwargs.setdefault("api_key", settings.openai_api_key)
        kwargs.setdefault("model", "whisper-1")
        return WhisperAPISTT(**kwargs)
    else:
        raise ValueError(f"Unknown STT provider: {provider}")
