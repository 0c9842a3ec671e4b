"""Turn whatever the provider sent back into text, then into a structured reply.

Providers disagree on response shape (chat-completions, responses-style output
arrays, bare `text` fields, or plain strings). Each recognised shape has its own
extractor; the first that yields non-empty text wins, and a stringified payload
is the last resort. Nothing in this module raises on malformed input.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from mood_backend.domain.intensity import coerce_intensity

ProviderTextKind = Literal[
    "output_text",
    "text",
    "chat_completion",
    "responses_output",
    "raw",
    "stringified",
]


@dataclass(frozen=True)
class ProviderText:
    """Text extracted from a provider payload, tagged with the shape it came from."""

    kind: ProviderTextKind
    text: str


class StructuredReply(BaseModel):
    """
    JSON object the model is asked to emit.

    Only `reply` is required. Optional fields that are missing or of the wrong
    type are dropped (set to None) so the caller can backfill them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    reply: str = Field(min_length=1)
    suggested_emotion: str | None = Field(default=None, alias="suggestedEmotion")
    suggested_intensity: int | None = Field(default=None, alias="suggestedIntensity")
    micro_action: str | None = Field(default=None, alias="microAction")

    @field_validator("reply", mode="before")
    @classmethod
    def _reply_must_be_text(cls, value: Any) -> Any:
        # Leave non-strings untouched so strict str validation rejects them.
        return value.strip() if isinstance(value, str) else value

    @field_validator("suggested_emotion", "micro_action", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @field_validator("suggested_intensity", mode="before")
    @classmethod
    def _optional_intensity(cls, value: Any) -> int | None:
        return coerce_intensity(value, default=None)


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _output_text(payload: Any) -> str | None:
    if isinstance(payload, dict):
        return _non_empty_str(payload.get("output_text"))
    return None


def _plain_text(payload: Any) -> str | None:
    if isinstance(payload, dict):
        return _non_empty_str(payload.get("text"))
    return None


def _chat_completion_text(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    first = choices[0]
    message = first.get("message")
    if isinstance(message, dict):
        content = _non_empty_str(message.get("content"))
        if content is not None:
            return content
    return _non_empty_str(first.get("text"))


def _responses_output_text(payload: Any) -> str | None:
    if not isinstance(payload, dict) or not isinstance(payload.get("output"), list):
        return None
    parts: list[str] = []
    for item in payload["output"]:
        content = item.get("content") if isinstance(item, dict) else None
        if not isinstance(content, list):
            continue
        for block in content:
            if isinstance(block, dict):
                text = _non_empty_str(block.get("text"))
                if text is not None:
                    parts.append(text)
    return "\n".join(parts) or None


_EXTRACTORS: tuple[tuple[ProviderTextKind, Callable[[Any], str | None]], ...] = (
    ("output_text", _output_text),
    ("text", _plain_text),
    ("chat_completion", _chat_completion_text),
    ("responses_output", _responses_output_text),
)


def extract_provider_text(payload: Any) -> ProviderText:
    """Return the most specific text found in `payload` (never raises)."""

    for kind, extractor in _EXTRACTORS:
        text = extractor(payload)
        if text is not None:
            return ProviderText(kind=kind, text=text)

    if isinstance(payload, str):
        return ProviderText(kind="raw", text=payload)

    try:
        stringified = json.dumps(payload, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        stringified = str(payload)
    return ProviderText(kind="stringified", text=stringified)


_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_DECODER = json.JSONDecoder()
# Upper bound on per-`{` decode attempts after the greedy span fails.
_MAX_DECODE_CANDIDATES = 64


def _to_structured_reply(candidate: Any) -> StructuredReply | None:
    if not isinstance(candidate, dict):
        return None
    try:
        return StructuredReply.model_validate(candidate)
    except PydanticValidationError:
        return None


def extract_embedded_json(text: str) -> StructuredReply | None:
    """
    Find a `{"reply": ...}` object inside free text.

    The greedy first-`{`-to-last-`}` span is tried first (the common case of one
    object wrapped in prose or code fences). When that span is not a usable
    object, e.g. two objects in one answer, each `{` is decoded on its own and
    the first object carrying a non-blank string `reply` is returned. Only the
    first `_MAX_DECODE_CANDIDATES` opening braces are tried; deeply nested or
    brace-heavy text yields None rather than an exception.
    """

    if not isinstance(text, str):
        return None
    match = _JSON_OBJECT_RE.search(text)
    if match is None:
        return None

    try:
        reply = _to_structured_reply(json.loads(match.group(0)))
    except (ValueError, RecursionError):
        reply = None
    if reply is not None:
        return reply

    idx = match.start()
    for _attempt in range(_MAX_DECODE_CANDIDATES):
        if idx < 0 or idx >= match.end():
            break
        start, idx = idx, text.find("{", idx + 1, match.end())
        try:
            candidate, _end = _DECODER.raw_decode(text, start)
        except (ValueError, RecursionError):
            continue
        reply = _to_structured_reply(candidate)
        if reply is not None:
            return reply
    return None
