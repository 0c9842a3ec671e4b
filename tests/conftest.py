from __future__ import annotations

import pytest

_SETTINGS_ENV_VARS = (
    "LLM_ENDPOINT",
    "LLM_API_KEY",
    "LLM_MODEL",
    "LLM_API_STYLE",
    "LLM_TIMEOUT_SECONDS",
    "LLM_TEMPERATURE",
    "LLM_DEBUG_BODY_MAX_CHARS",
    "MAX_BODY_BYTES",
    "PORT",
    "HOST",
    "APP_ENV",
    "CORS_ALLOW_ORIGINS",
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    # Empty values win over a developer's .env file and count as "missing".
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LLM_ENDPOINT", "")
    monkeypatch.setenv("LLM_API_KEY", "")
    monkeypatch.setenv("LLM_MODEL", "")

    # Settings are cached via @lru_cache; clear so each test sees its own env.
    from mood_backend.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from mood_backend.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
