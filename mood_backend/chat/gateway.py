from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from mood_backend.chat.prompt import build_chat_prompts
from mood_backend.chat.responses import (
    DEFAULT_MICRO_ACTION,
    not_configured_response,
    parse_fallback_response,
    unavailable_response,
)
from mood_backend.chat.schemas import ChatOutcome, ChatResponse
from mood_backend.core.llm.client import (
    ProviderHTTPError,
    ProviderParseError,
    TransportError,
)
from mood_backend.core.llm.extraction import ProviderText, extract_embedded_json

logger = logging.getLogger("mood_backend.chat.gateway")


class CompletionClient(Protocol):
    async def complete(self, *, system_prompt: str, user_prompt: str) -> ProviderText: ...


@dataclass(frozen=True)
class GatewayResult:
    response: ChatResponse
    outcome: ChatOutcome


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


class ChatGateway:
    """
    Ask the provider for a supportive reply and normalise whatever comes back.

    Provider failures never escape `respond`: a missing configuration, an error
    status, an unreachable endpoint or an unusable body each map to a complete
    degraded ChatResponse whose `debug` names the cause.
    """

    def __init__(
        self,
        *,
        client: CompletionClient | None,
        missing_settings: Sequence[str] = (),
        debug_body_max_chars: int = 800,
    ):
        self._client = client
        self._missing_settings = tuple(missing_settings)
        self._debug_body_max_chars = debug_body_max_chars

    async def respond(self, *, text: str, emotion: str, intensity: int) -> GatewayResult:
        if self._client is None:
            missing = ", ".join(self._missing_settings) or "LLM_ENDPOINT, LLM_API_KEY, LLM_MODEL"
            return GatewayResult(
                response=not_configured_response(
                    emotion=emotion, intensity=intensity, debug=f"Missing {missing}"
                ),
                outcome="not_configured",
            )

        system_prompt, user_prompt = build_chat_prompts(
            text=text, emotion=emotion, intensity=intensity
        )

        try:
            provider_text = await self._client.complete(
                system_prompt=system_prompt, user_prompt=user_prompt
            )
        except ProviderHTTPError as exc:
            body = _truncate(exc.body, self._debug_body_max_chars)
            return GatewayResult(
                response=unavailable_response(
                    emotion=emotion,
                    intensity=intensity,
                    debug=f"LLM HTTP {exc.status_code}: {body}",
                ),
                outcome="provider_http_error",
            )
        except TransportError as exc:
            return GatewayResult(
                response=unavailable_response(emotion=emotion, intensity=intensity, debug=str(exc)),
                outcome="transport_error",
            )
        except ProviderParseError as exc:
            return GatewayResult(
                response=parse_fallback_response(
                    emotion=emotion, intensity=intensity, debug=f"LLM parse error: {exc}"
                ),
                outcome="provider_parse_error",
            )
        except Exception as exc:  # noqa: BLE001 - provider failures never escape respond()
            # e.g. a non-ASCII credential rejected while encoding the auth header
            logger.warning(
                "Unexpected LLM client failure",
                exc_info=True,
                extra={"outcome": "transport_error"},
            )
            return GatewayResult(
                response=unavailable_response(
                    emotion=emotion,
                    intensity=intensity,
                    debug=f"LLM transport error: {type(exc).__name__}",
                ),
                outcome="transport_error",
            )

        structured = extract_embedded_json(provider_text.text)
        if structured is None:
            return GatewayResult(
                response=parse_fallback_response(
                    emotion=emotion,
                    intensity=intensity,
                    debug=(
                        "LLM parse error: no JSON object with a string reply "
                        f"in {provider_text.kind} text"
                    ),
                ),
                outcome="provider_parse_error",
            )

        return GatewayResult(
            response=ChatResponse(
                reply=structured.reply,
                suggested_emotion=structured.suggested_emotion or emotion,
                suggested_intensity=structured.suggested_intensity or intensity,
                micro_action=structured.micro_action or DEFAULT_MICRO_ACTION,
            ),
            outcome="llm",
        )
