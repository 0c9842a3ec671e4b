from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from mood_backend.domain.intensity import DEFAULT_INTENSITY, MAX_INTENSITY, MIN_INTENSITY

ChatOutcome = Literal[
    "crisis",
    "llm",
    "not_configured",
    "provider_http_error",
    "provider_parse_error",
    "transport_error",
]


class ChatRequest(BaseModel):
    """Validated /chat input (see `validate_chat_payload` for coercion rules)."""

    text: str = Field(min_length=1, description="What the user wrote, trimmed.")
    emotion: str = Field(
        default="neutral",
        min_length=1,
        description="Self-reported emotion label chosen in the app.",
        examples=["anxious"],
    )
    intensity: int = Field(
        default=DEFAULT_INTENSITY,
        ge=MIN_INTENSITY,
        le=MAX_INTENSITY,
        description="Self-reported intensity on a 1-5 scale.",
    )


class ChatResponse(BaseModel):
    """
    Reply contract the frontend relies on.

    Every field except `debug` is always present and non-empty, including on
    degraded paths. `debug` explains why a degraded reply was used and is
    omitted from successful replies.
    """

    model_config = ConfigDict(populate_by_name=True)

    reply: str = Field(min_length=1, description="Supportive reply shown to the user.")
    suggested_emotion: str = Field(
        min_length=1,
        alias="suggestedEmotion",
        description="Emotion label suggested for the mood log.",
        examples=["calm"],
    )
    suggested_intensity: int = Field(
        ge=MIN_INTENSITY,
        le=MAX_INTENSITY,
        alias="suggestedIntensity",
        description="Suggested intensity on a 1-5 scale.",
    )
    micro_action: str = Field(
        min_length=1,
        alias="microAction",
        description="A 30-90 second coping action.",
    )
    debug: str | None = Field(
        default=None,
        description="Operator-facing reason for a degraded reply. Not shown to users.",
    )


class ErrorOut(BaseModel):
    error: str = Field(examples=["Missing text"])


class InternalErrorOut(BaseModel):
    error: str = Field(examples=["Internal error"])
    reply: str
