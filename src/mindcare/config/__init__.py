"""Centralized configuration using Pydantic Settings.

All settings can be overridden via environment variables (or a local ``.env``).

Defaults mirror the deployed chatbot: a 2 second escalation delay, the chat
proxy on port 3001, and a 100 token reply limit for the hosted model.
"""

from __future__ import annotations

import os
from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Skip reading .env file during testing to use code defaults
ENV_FILE = None if os.environ.get("TESTING") else ".env"
ENV_FILE_ENCODING = "utf-8"


class ResponderBackend(str, Enum):
    """Free-text chat responder implementations.

    ``hosted`` talks to the hosted chatbot model directly, ``proxy`` goes
    through a running MindCare ``/api/chat`` endpoint, and ``local`` answers
    from canned keyword-matched responses without any network access.
    """

    HOSTED = "hosted"
    PROXY = "proxy"
    LOCAL = "local"


class AssessmentSettings(BaseSettings):
    """Structured questionnaire configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ASSESSMENT_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    escalation_delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=60.0,
        description="Delay before a high/critical escalation notice is shown",
    )


class ResponderSettings(BaseSettings):
    """Chat responder selection and proxy endpoint."""

    model_config = SettingsConfigDict(
        env_prefix="RESPONDER_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    backend: ResponderBackend = Field(
        default=ResponderBackend.HOSTED,
        description="Responder implementation for free-text messages",
    )
    proxy_url: str = Field(
        default="http://127.0.0.1:3001/api/chat",
        description="Chat proxy endpoint (used when backend=proxy)",
    )
    timeout_seconds: float = Field(default=30.0, ge=1.0, le=300.0, description="Request timeout")


class HostedModelSettings(BaseSettings):
    """Hosted chatbot model (Gradio Space) configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOSTED_MODEL_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    base_url: str = Field(
        default="https://phani50101-chatbot-mental-health.hf.space",
        description="Base URL of the hosted chatbot Space",
    )
    endpoint: str = Field(default="/run/respond", description="Prediction endpoint path")
    max_tokens: int = Field(default=100, ge=1, le=2048, description="Reply token limit")
    timeout_seconds: float = Field(default=60.0, ge=1.0, le=600.0, description="Request timeout")

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so endpoint joining is predictable."""
        return v.rstrip("/")

    @property
    def predict_url(self) -> str:
        """Get prediction endpoint URL."""
        endpoint = self.endpoint if self.endpoint.startswith("/") else f"/{self.endpoint}"
        return f"{self.base_url}{endpoint}"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum log level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(default=True)
    include_caller: bool = Field(default=True)


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)
    reload: bool = Field(default=False, description="Enable hot reload (dev only)")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (restrict in production)",
    )


class Settings(BaseSettings):
    """Root settings combining all configuration groups."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        env_nested_delimiter="__",
        extra="ignore",
    )

    assessment: AssessmentSettings = Field(default_factory=AssessmentSettings)
    responder: ResponderSettings = Field(default_factory=ResponderSettings)
    hosted_model: HostedModelSettings = Field(default_factory=HostedModelSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
