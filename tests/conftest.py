"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os

import pytest

# Set TESTING mode BEFORE any app imports to prevent .env file loading.
os.environ["TESTING"] = "1"

# Clear environment variables BEFORE any imports that might use Pydantic Settings
_ENV_VARS_TO_CLEAR = [
    "ASSESSMENT_ESCALATION_DELAY_SECONDS",
    "RESPONDER_BACKEND",
    "RESPONDER_PROXY_URL",
    "RESPONDER_TIMEOUT_SECONDS",
    "HOSTED_MODEL_BASE_URL",
    "HOSTED_MODEL_ENDPOINT",
    "HOSTED_MODEL_MAX_TOKENS",
    "HOSTED_MODEL_TIMEOUT_SECONDS",
    "API_HOST",
    "API_PORT",
    "API_RELOAD",
    "API_CORS_ORIGINS",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "LOG_INCLUDE_TIMESTAMP",
    "LOG_INCLUDE_CALLER",
]

for _var in _ENV_VARS_TO_CLEAR:
    os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables and the cached settings.

    Ensures tests use code defaults, not local developer overrides.
    """
    for var in _ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    from mindcare.config import get_settings  # noqa: PLC0415

    get_settings.cache_clear()


@pytest.fixture
def all_twos() -> list[str]:
    """Five answers of 2 (total 10, high tier)."""
    return ["2"] * 5


@pytest.fixture
def all_zeros() -> list[str]:
    """Five answers of 0 (total 0, low tier)."""
    return ["0"] * 5
