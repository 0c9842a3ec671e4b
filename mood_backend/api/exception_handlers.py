from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mood_backend.core.middleware.http_logging import request_id_of
from mood_backend.domain.exceptions import ValidationError

logger = logging.getLogger("mood_backend.validation")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        # Do not log request bodies; the message is one of a few fixed strings.
        logger.info(
            "Request validation failed",
            extra={
                "request_id": request_id_of(request),
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "outcome": "invalid_input",
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
