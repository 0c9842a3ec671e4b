from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LLMApiStyle = Literal["chat", "responses"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "mood-app-backend"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=10000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="Port the HTTP server listens on.",
    )
    max_body_bytes: int = Field(
        default=1024 * 1024,
        ge=1,
        validation_alias=AliasChoices("MAX_BODY_BYTES", "max_body_bytes"),
        description="Maximum accepted size of a /chat request body (bytes).",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Origins allowed to call the API from a browser.",
    )

    # LLM provider
    # None of these are required at startup; a missing value degrades /chat to a
    # "not configured" reply instead of failing.
    llm_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_ENDPOINT", "llm_endpoint"),
        description="Full URL of the provider endpoint (e.g. .../v1/chat/completions).",
    )
    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_API_KEY", "llm_api_key"),
        description="Bearer credential for the provider. Never logged.",
    )
    llm_model: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LLM_MODEL", "llm_model"),
        description="Model identifier sent with every provider request.",
    )
    llm_api_style: LLMApiStyle = Field(
        default="chat",
        validation_alias=AliasChoices("LLM_API_STYLE", "llm_api_style"),
        description="Payload shape: `chat` (messages array) or `responses` (input array).",
    )
    llm_timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        validation_alias=AliasChoices("LLM_TIMEOUT_SECONDS", "llm_timeout_seconds"),
        description="Timeout for provider requests (seconds).",
    )
    llm_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("LLM_TEMPERATURE", "llm_temperature"),
    )
    llm_debug_body_max_chars: int = Field(
        default=800,
        ge=0,
        validation_alias=AliasChoices("LLM_DEBUG_BODY_MAX_CHARS", "llm_debug_body_max_chars"),
        description="Provider error bodies are truncated to this length in `debug`.",
    )

    @property
    def missing_llm_settings(self) -> list[str]:
        values = {
            "LLM_ENDPOINT": self.llm_endpoint,
            "LLM_API_KEY": self.llm_api_key,
            "LLM_MODEL": self.llm_model,
        }
        return [name for name, value in values.items() if not (value or "").strip()]

    @property
    def llm_configured(self) -> bool:
        return not self.missing_llm_settings

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
