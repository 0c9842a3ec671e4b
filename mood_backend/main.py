from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mood_backend.api.exception_handlers import register_exception_handlers
from mood_backend.api.schemas import HealthOut
from mood_backend.chat.router import router as chat_router
from mood_backend.core.logging import setup_logging
from mood_backend.core.metrics import PrometheusMetricsMiddleware, metrics_router
from mood_backend.core.middleware.http_logging import HttpLoggingMiddleware
from mood_backend.core.settings import get_settings

setup_logging()
logger = logging.getLogger("mood_backend.startup")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Report provider configuration once; a missing value is not fatal.
        settings = get_settings()
        if settings.llm_configured:
            logger.info(
                "LLM provider configured (endpoint=%s, model=%s, style=%s)",
                settings.llm_endpoint,
                settings.llm_model,
                settings.llm_api_style,
            )
        else:
            logger.warning(
                "LLM provider not configured; /chat will return a setup reply (missing: %s)",
                ", ".join(settings.missing_llm_settings),
            )
        yield

    settings = get_settings()
    app = FastAPI(
        title="Mood App Backend",
        description=(
            "Supportive-reply API for a mood journaling app.\n\n"
            "Design principles:\n"
            "- Crisis language always gets a fixed safety reply without calling the LLM.\n"
            "- Provider problems degrade to a complete, gentle reply; raw errors are never "
            "shown to users.\n"
            "- Logs and metrics carry metadata only, never what the user wrote."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Liveness check for the hosting platform.",
            },
            {
                "name": "chat",
                "description": "Supportive replies for a message plus self-reported mood.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    async def health() -> HealthOut:
        return HealthOut(ok=True, service=get_settings().app_name)

    for path in ("/", "/health"):
        app.add_api_route(
            path,
            health,
            methods=["GET"],
            response_model=HealthOut,
            tags=["health"],
            summary="Health check",
            description=(
                "Lightweight endpoint to verify the API process is running. It does not "
                "contact the LLM provider."
            ),
            include_in_schema=path == "/health",
        )

    app.include_router(metrics_router)
    app.include_router(chat_router)
    return app


app = create_app()
