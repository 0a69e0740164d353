"""Tests for configuration management."""

from pathlib import Path

import pytest

from app.config import Settings, get_settings


def test_settings_loads_from_env_file(tmp_path):
    """Settings can be loaded from a .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        """SERVICE_HOST=0.0.0.0
SERVICE_PORT=9001
GEMINI_BASE_URL=http://127.0.0.1:8080
GEMINI_MODEL=gemini-test
GEMINI_API_KEY=from-env-file
PREFERENCES_PATH=/tmp/meeting-digest-prefs.json
LOG_LEVEL=debug
""",
        encoding="utf-8",
    )

    settings = Settings(_env_file=env_file)

    assert settings.service_host == "0.0.0.0"
    assert settings.service_port == 9001
    assert settings.gemini_base_url == "http://127.0.0.1:8080"
    assert settings.gemini_model == "gemini-test"
    assert settings.gemini_api_key == "from-env-file"
    assert settings.preferences_path == Path("/tmp/meeting-digest-prefs.json")
    assert settings.log_level == "DEBUG"


def test_settings_defaults():
    settings = Settings(_env_file=None, gemini_api_key=None, api_key=None)

    assert settings.service_port == 8095
    assert settings.gemini_base_url == "https://generativelanguage.googleapis.com"
    assert settings.gemini_model == "gemini-2.5-flash"
    assert settings.gemini_temperature == 0.3
    assert settings.upstream_timeout_s == 300.0
    assert settings.max_upload_bytes == 200_000_000
    assert settings.preferences_path.name == "preferences.json"


def test_settings_validates_url_format():
    """URLs are validated for proper format."""
    with pytest.raises(ValueError, match="URL must use http or https scheme"):
        Settings(_env_file=None, gemini_base_url="ftp://example.com")

    with pytest.raises(ValueError, match="URL must have a valid host"):
        Settings(_env_file=None, gemini_base_url="http://")

    settings = Settings(_env_file=None, gemini_base_url="http://127.0.0.1:8080")
    assert settings.gemini_base_url == "http://127.0.0.1:8080"


def test_settings_validates_port_range():
    """Port numbers are validated."""
    with pytest.raises(ValueError, match="service_port must be between 1 and 65535"):
        Settings(_env_file=None, service_port=0)

    with pytest.raises(ValueError, match="service_port must be between 1 and 65535"):
        Settings(_env_file=None, service_port=65536)

    assert Settings(_env_file=None, service_port=8095).service_port == 8095


def test_settings_validates_timeouts():
    with pytest.raises(ValueError, match="Timeout must be positive"):
        Settings(_env_file=None, upstream_timeout_s=0)

    with pytest.raises(ValueError, match="Timeout must be positive"):
        Settings(_env_file=None, upstream_connect_timeout_s=-1)


def test_settings_validates_temperature():
    with pytest.raises(ValueError, match="gemini_temperature must be between 0 and 2"):
        Settings(_env_file=None, gemini_temperature=2.5)

    assert Settings(_env_file=None, gemini_temperature=0.0).gemini_temperature == 0.0


def test_settings_validates_max_upload():
    with pytest.raises(ValueError, match="max_upload_bytes must be positive"):
        Settings(_env_file=None, max_upload_bytes=0)


def test_settings_validates_log_level():
    """Log level is validated and normalized to upper case."""
    with pytest.raises(ValueError, match="log_level must be one of"):
        Settings(_env_file=None, log_level="INVALID")

    for level in ("debug", "INFO", "Warning", "ERROR", "CRITICAL"):
        settings = Settings(_env_file=None, log_level=level)
        assert settings.log_level == level.upper()


def test_settings_allow_origins_list():
    """CORS origins are parsed correctly."""
    settings = Settings(_env_file=None, allow_origins="http://localhost:3000, https://example.com,")
    assert settings.allow_origins_list == ["http://localhost:3000", "https://example.com"]

    settings = Settings(_env_file=None, allow_origins="")
    assert settings.allow_origins_list == []


def test_to_summarizer_config():
    settings = Settings(
        _env_file=None,
        gemini_base_url="http://127.0.0.1:8080",
        gemini_model="gemini-test",
        gemini_temperature=0.7,
        upstream_timeout_s=60,
        upstream_connect_timeout_s=3,
    )

    config = settings.to_summarizer_config()

    assert config.api_base_url == "http://127.0.0.1:8080"
    assert config.model == "gemini-test"
    assert config.temperature == 0.7
    assert config.timeout_s == 60
    assert config.connect_timeout_s == 3
    assert config.generate_content_url == "http://127.0.0.1:8080/v1beta/models/gemini-test:generateContent"


def test_get_settings_singleton():
    """get_settings returns a cached instance."""
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


def test_get_settings_wraps_invalid_config(monkeypatch):
    get_settings.cache_clear()
    monkeypatch.setenv("SERVICE_PORT", "70000")
    try:
        with pytest.raises(ValueError, match="Failed to load configuration"):
            get_settings()
    finally:
        get_settings.cache_clear()
