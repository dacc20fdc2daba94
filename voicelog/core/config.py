"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VoiceLog application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        groq_api_key: Credential for the hosted speech-to-text API.
        stt_provider: STT backend ("groq" or "openai").
        database_url: Async SQLAlchemy connection string.
        uploads_dir: Directory holding in-flight audio uploads.
        app_port: Listen port; ``PORT`` (set by most PaaS hosts) also works.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Speech-to-text ---
    # Hosted Whisper behind an OpenAI-compatible endpoint
    stt_provider: str = "groq"
    groq_api_key: str = ""  # Required when stt_provider="groq"
    openai_api_key: str = ""  # Required when stt_provider="openai"
    stt_model: str = "whisper-large-v3"
    stt_base_url: str = "https://api.groq.com/openai/v1"
    stt_timeout_seconds: float = 120.0

    # --- Uploads ---
    uploads_dir: str = "uploads"
    max_upload_bytes: int = 25 * 1024 * 1024  # Provider's per-file limit

    # --- Storage ---
    database_url: str = "sqlite+aiosqlite:///data/voicelog.db"

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = Field(default=5000, validation_alias=AliasChoices("app_port", "port"))
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"  # Python logging level

    # --- UI ---
    api_base_url: str = "http://localhost:5000"  # Backend URL used by the Streamlit client


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
