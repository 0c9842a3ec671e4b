from __future__ import annotations

from fastapi import Depends

from mood_backend.core.llm.client import LLMClient, LLMConfig
from mood_backend.core.settings import Settings, get_settings


def build_llm_config(settings: Settings) -> LLMConfig | None:
    """Snapshot provider settings into an immutable config, or None if incomplete."""

    if not settings.llm_configured:
        return None
    return LLMConfig(
        endpoint=str(settings.llm_endpoint).strip(),
        api_key=str(settings.llm_api_key).strip(),
        model=str(settings.llm_model).strip(),
        api_style=settings.llm_api_style,
        timeout_seconds=float(settings.llm_timeout_seconds),
        temperature=float(settings.llm_temperature),
    )


def get_llm_client(settings: Settings = Depends(get_settings)) -> LLMClient | None:
    """
    Dependency provider for LLMClient.

    Returns None when not configured so /chat can answer with a "not configured"
    reply instead of raising during dependency resolution.
    """

    config = build_llm_config(settings)
    if config is None:
        return None
    return LLMClient(config=config)
