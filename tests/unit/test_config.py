"""Tests for Settings defaults and environment overrides."""

import pytest

from voicelog.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Run each test from an empty directory so no .env file leaks in."""
    monkeypatch.chdir(tmp_path)
    for var in ("PORT", "APP_PORT", "GROQ_API_KEY", "DATABASE_URL", "STT_MODEL", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def test_local_defaults():
    settings = Settings()
    assert settings.stt_provider == "groq"
    assert settings.stt_model == "whisper-large-v3"
    assert settings.database_url == "sqlite+aiosqlite:///data/voicelog.db"
    assert settings.uploads_dir == "uploads"
    assert settings.app_port == 5000
    assert settings.groq_api_key == ""


def test_port_env_var_overrides_listen_port(monkeypatch):
    monkeypatch.setenv("PORT", "10000")
    assert Settings().app_port == 10000


def test_credential_and_database_from_env(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-live")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/voicelog")
    settings = Settings()
    assert settings.groq_api_key == "gsk-live"
    assert settings.database_url == "postgresql+asyncpg://db/voicelog"


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("STT_MODEL=whisper-large-v3-turbo\nLOG_LEVEL=DEBUG\n")
    settings = Settings()
    assert settings.stt_model == "whisper-large-v3-turbo"
    assert settings.log_level == "DEBUG"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
