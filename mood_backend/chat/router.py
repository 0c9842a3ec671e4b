from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from mood_backend.chat.deps import get_chat_gateway
from mood_backend.chat.gateway import ChatGateway
from mood_backend.chat.responses import INTERNAL_ERROR_REPLY, crisis_response
from mood_backend.chat.risk import is_high_risk
from mood_backend.chat.schemas import ChatOutcome, ChatResponse, ErrorOut, InternalErrorOut
from mood_backend.chat.validation import validate_chat_payload
from mood_backend.core.metrics import record_chat_outcome
from mood_backend.core.middleware.http_logging import request_id_of
from mood_backend.core.settings import Settings, get_settings
from mood_backend.domain.exceptions import PayloadTooLargeError, ValidationError

router = APIRouter(tags=["chat"])
logger = logging.getLogger("mood_backend.chat")


def _declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


async def _read_json_body(request: Request, *, max_bytes: int) -> Any:
    declared = _declared_length(request)
    if declared is not None and declared > max_bytes:
        raise PayloadTooLargeError("Payload too large")

    body = await request.body()
    if len(body) > max_bytes:
        raise PayloadTooLargeError("Payload too large")
    if not body.strip():
        return None

    try:
        return json.loads(body)
    except ValueError as exc:
        raise ValidationError("Invalid JSON body") from exc


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    summary="Get a supportive reply",
    description=(
        "Returns a supportive reply for the user's message and self-reported mood.\n\n"
        "- Messages containing crisis language always get a fixed safety reply; the "
        "LLM is not called.\n"
        "- Provider failures (not configured, error status, timeout, unusable output) "
        "still return 200 with a complete reply and a `debug` field."
    ),
    responses={
        400: {"model": ErrorOut, "description": "Missing or empty `text`, or invalid JSON."},
        413: {"model": ErrorOut, "description": "Request body too large."},
        500: {"model": InternalErrorOut, "description": "Unexpected internal failure."},
    },
)
async def chat(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> ChatResponse | JSONResponse:
    """
    Validate, apply the crisis override, then delegate to the LLM gateway.

    IMPORTANT: the user's text is never logged; log records carry the outcome
    label and request id only.
    """

    request_id = request_id_of(request)

    try:
        payload = await _read_json_body(request, max_bytes=int(settings.max_body_bytes))
        chat_request = validate_chat_payload(payload)
    except ValidationError:
        record_chat_outcome("invalid_input")
        raise

    outcome: ChatOutcome
    try:
        if is_high_risk(chat_request.text):
            # Safety override: answered locally, never waits on the provider.
            response = crisis_response()
            outcome = "crisis"
        else:
            result = await gateway.respond(
                text=chat_request.text,
                emotion=chat_request.emotion,
                intensity=chat_request.intensity,
            )
            response, outcome = result.response, result.outcome
    except Exception:  # noqa: BLE001 - callers must always get parseable JSON
        logger.exception(
            "Chat request failed",
            extra={"request_id": request_id, "outcome": "internal_error"},
        )
        record_chat_outcome("internal_error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal error", "reply": INTERNAL_ERROR_REPLY},
        )

    record_chat_outcome(outcome)
    logger.info(
        "Chat reply sent",
        extra={"request_id": request_id, "outcome": outcome},
    )
    return response
