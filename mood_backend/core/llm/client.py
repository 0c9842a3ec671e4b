from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from mood_backend.core.llm.extraction import ProviderText, extract_provider_text
from mood_backend.core.settings import LLMApiStyle


class ProviderError(Exception):
    """Base error for provider failures (always degraded, never surfaced raw)."""


class ProviderHTTPError(ProviderError):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"LLM HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ProviderParseError(ProviderError):
    """Raised when a successful provider response holds no usable reply."""


class TransportError(ProviderError):
    """Raised when the provider cannot be reached (DNS, connect, reset, timeout)."""

    def __init__(self, message: str, *, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


@dataclass(frozen=True)
class LLMConfig:
    endpoint: str
    api_key: str
    model: str
    api_style: LLMApiStyle = "chat"
    timeout_seconds: float = 15.0
    temperature: float = 0.7


class LLMClient:
    """
    Minimal client for an OpenAI-compatible (or look-alike) completion endpoint.

    Design notes:
    - No logging in this module (prompts and outputs contain the user's words).
    - One short-lived `httpx.AsyncClient` per call; requests are stateless.
    - Returns extracted text only; interpreting it is the caller's job.
    """

    def __init__(self, *, config: LLMConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    def build_payload(self, *, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        payload: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
        }
        if self._config.api_style == "responses":
            payload["input"] = messages
        else:
            payload["messages"] = messages
        return payload

    async def complete(self, *, system_prompt: str, user_prompt: str) -> ProviderText:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(system_prompt=system_prompt, user_prompt=user_prompt)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(self._config.endpoint, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"LLM timeout after {self._config.timeout_seconds:g}s", timed_out=True
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"LLM transport error: {type(exc).__name__}") from exc

        if not resp.is_success:
            raise ProviderHTTPError(resp.status_code, resp.text)

        try:
            data: Any = resp.json()
        except ValueError:
            # Some gateways answer 200 with plain text; treat it as the raw reply.
            data = resp.text

        if data is None or data == "":
            raise ProviderParseError("LLM returned an empty body")
        return extract_provider_text(data)
