from __future__ import annotations

from typing import Any

from mood_backend.chat.schemas import ChatRequest
from mood_backend.domain.exceptions import ValidationError
from mood_backend.domain.intensity import coerce_intensity

DEFAULT_EMOTION = "neutral"


def validate_chat_payload(payload: Any) -> ChatRequest:
    """
    Build a ChatRequest from a decoded JSON body.

    - `text` must be a string that is non-empty after trimming.
    - `emotion` falls back to "neutral" when absent, not a string, or blank.
    - `intensity` is rounded and clamped to 1..5; non-numeric values become 3.
    Non-object bodies are treated as having no text.
    """

    data = payload if isinstance(payload, dict) else {}

    raw_text = data.get("text")
    text = raw_text.strip() if isinstance(raw_text, str) else ""
    if not text:
        raise ValidationError("Missing text")

    raw_emotion = data.get("emotion")
    emotion = raw_emotion.strip() if isinstance(raw_emotion, str) else ""

    return ChatRequest(
        text=text,
        emotion=emotion or DEFAULT_EMOTION,
        intensity=coerce_intensity(data.get("intensity")),
    )
