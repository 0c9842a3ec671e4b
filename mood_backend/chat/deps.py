from __future__ import annotations

from fastapi import Depends

from mood_backend.chat.gateway import ChatGateway
from mood_backend.core.llm.client import LLMClient
from mood_backend.core.llm.deps import get_llm_client
from mood_backend.core.settings import Settings, get_settings


def get_chat_gateway(
    settings: Settings = Depends(get_settings),
    client: LLMClient | None = Depends(get_llm_client),
) -> ChatGateway:
    return ChatGateway(
        client=client,
        missing_settings=settings.missing_llm_settings,
        debug_body_max_chars=int(settings.llm_debug_body_max_chars),
    )
