"""Tests for configuration management.

Tests verify defaults match the deployed chatbot, validation bounds,
caching, and environment variable loading.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mindcare.config import (
    APISettings,
    AssessmentSettings,
    HostedModelSettings,
    LoggingSettings,
    ResponderBackend,
    ResponderSettings,
    Settings,
    get_settings,
)

pytestmark = pytest.mark.unit


class TestAssessmentSettings:
    def test_default_delay(self) -> None:
        assert AssessmentSettings().escalation_delay_seconds == 2.0

    @pytest.mark.parametrize("delay", [-0.5, 61.0])
    def test_delay_bounds(self, delay: float) -> None:
        with pytest.raises(ValidationError):
            AssessmentSettings(escalation_delay_seconds=delay)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ASSESSMENT_ESCALATION_DELAY_SECONDS", "0.5")
        assert AssessmentSettings().escalation_delay_seconds == 0.5


class TestResponderSettings:
    def test_defaults(self) -> None:
        settings = ResponderSettings()
        assert settings.backend is ResponderBackend.HOSTED
        assert settings.proxy_url == "http://127.0.0.1:3001/api/chat"

    def test_backend_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESPONDER_BACKEND", "local")
        assert ResponderSettings().backend is ResponderBackend.LOCAL

    def test_invalid_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESPONDER_BACKEND", "carrier-pigeon")
        with pytest.raises(ValidationError):
            ResponderSettings()


class TestHostedModelSettings:
    """Tests for hosted model configuration."""

    def test_defaults(self) -> None:
        settings = HostedModelSettings()
        assert settings.max_tokens == 100
        assert settings.predict_url == (
            "https://phani50101-chatbot-mental-health.hf.space/run/respond"
        )

    def test_trailing_slash_stripped(self) -> None:
        settings = HostedModelSettings(base_url="https://model.test///")
        assert settings.base_url == "https://model.test"
        assert settings.predict_url == "https://model.test/run/respond"

    def test_endpoint_without_leading_slash(self) -> None:
        settings = HostedModelSettings(base_url="https://model.test", endpoint="api/predict")
        assert settings.predict_url == "https://model.test/api/predict"

    def test_max_tokens_validation(self) -> None:
        with pytest.raises(ValidationError):
            HostedModelSettings(max_tokens=0)


class TestLoggingSettings:
    def test_defaults(self) -> None:
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert settings.format == "json"

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="VERBOSE")  # type: ignore[arg-type]


class TestAPISettings:
    def test_defaults(self) -> None:
        settings = APISettings()
        assert settings.port == 3001
        assert settings.cors_origins == ["*"]

    def test_port_validation(self) -> None:
        with pytest.raises(ValidationError):
            APISettings(port=70000)


class TestSettings:
    """Tests for the root settings and accessors."""

    def test_groups_present(self) -> None:
        settings = Settings()
        assert isinstance(settings.assessment, AssessmentSettings)
        assert isinstance(settings.hosted_model, HostedModelSettings)
        assert isinstance(settings.api, APISettings)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOSTED_MODEL_MAX_TOKENS", "256")
        get_settings.cache_clear()
        assert get_settings().hosted_model.max_tokens == 256
