"""Tests for OSRM client configuration."""

import pytest


def test_settings_defaults(monkeypatch):
    """Test that settings have sensible defaults."""
    from osrm_client.config import Settings

    for name in ("OSRM_BASE_URL", "OSRM_API_VERSION", "OSRM_DEFAULT_PROFILE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.osrm_base_url == "http://router.project-osrm.org"
    assert settings.osrm_api_version == "v1"
    assert settings.osrm_default_profile == "driving"
    assert settings.osrm_timeout_seconds == 30.0


def test_settings_from_environment(monkeypatch):
    """Test that environment variables override defaults."""
    from osrm_client.config import Settings

    monkeypatch.setenv("OSRM_BASE_URL", "http://localhost:5000")
    monkeypatch.setenv("OSRM_TIMEOUT_SECONDS", "2.5")

    settings = Settings(_env_file=None)

    assert settings.osrm_base_url == "http://localhost:5000"
    assert settings.osrm_timeout_seconds == 2.5


def test_client_config_from_settings(monkeypatch):
    """Test that the client configuration is read from settings."""
    from osrm_client.config import Settings
    from osrm_client.services.client import ClientConfig

    monkeypatch.setenv("OSRM_BASE_URL", "http://osrm.internal:5000")
    config = ClientConfig.from_settings(Settings(_env_file=None))

    assert config.base_url == "http://osrm.internal:5000"
    assert config.version == "v1"


def test_client_config_requires_base_url():
    """Test that an empty base URL is rejected."""
    from osrm_client.errors import ValidationError
    from osrm_client.services.client import ClientConfig

    with pytest.raises(ValidationError):
        ClientConfig(base_url="")
