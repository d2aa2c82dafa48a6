"""Unit tests for client settings."""

import pytest
import structlog
from pydantic import ValidationError

from spay.core.config import PRODUCTION_BASE_URL, STAGING_BASE_URL, Settings
from spay.core.logging import setup_logging


class TestSettings:
    """Tests for Settings defaults, env overrides and validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.base_url == STAGING_BASE_URL
        assert settings.transfer_cost == 10.0
        assert settings.bank_code == "232"
        assert settings.default_location == "6.44,3.53"
        assert settings.encrypt_requests is True
        assert settings.decrypt_response is False
        assert "app_name" not in Settings.model_fields

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPAY_APP_ID", "1234")
        monkeypatch.setenv("SPAY_BASE_URL", PRODUCTION_BASE_URL + "/")
        monkeypatch.setenv("SPAY_DECRYPT_RESPONSE", "true")

        settings = Settings(_env_file=None)

        assert settings.app_id == 1234
        assert settings.base_url == PRODUCTION_BASE_URL
        assert settings.decrypt_response is True

    def test_base_url_is_required(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, base_url="  ")

    def test_shared_secret_not_in_repr(self):
        settings = Settings(_env_file=None, shared_key="1" * 192, shared_vector="0" * 64)

        assert "1" * 192 not in repr(settings)


class TestSetupLogging:
    """Tests for the structlog configuration."""

    @pytest.fixture
    def configured(self, monkeypatch: pytest.MonkeyPatch) -> dict:
        captured = {}
        monkeypatch.setattr(structlog, "configure", lambda **kwargs: captured.update(kwargs))
        return captured

    def test_json_renderer(self, configured: dict):
        setup_logging(Settings(_env_file=None, log_format="json"))

        assert isinstance(configured["processors"][-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self, configured: dict):
        setup_logging(Settings(_env_file=None, log_format="console", log_level="debug"))

        assert isinstance(configured["processors"][-1], structlog.dev.ConsoleRenderer)
