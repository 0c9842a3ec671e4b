"""Fixed replies: the crisis override and every degraded path.

All builders return a fully populated ChatResponse so no path can leak an empty
field or a raw provider error to the user.
"""

from __future__ import annotations

from mood_backend.chat.schemas import ChatResponse

CRISIS_EMOTION = "crisis"
CRISIS_INTENSITY = 5
CRISIS_REPLY = (
    "我很在意你現在的安全。如果你有傷害自己的念頭，請現在就聯絡一位你信任的人，"
    "或撥打當地的緊急電話、自殺防治專線。你不需要一個人撐著。"
    "如果你願意告訴我你在哪個國家或地區，我可以幫你找當地可以求助的資源。"
)
CRISIS_MICRO_ACTION = (
    "先把身邊可能用來傷害自己的東西移開、放遠一點，"
    "然後打電話或傳訊息給一位你信任的人，告訴對方你現在的狀況。"
)

DEFAULT_MICRO_ACTION = "先做 60 秒：把肩膀抬起，停 2 秒，再放下，重複 5 次。"
GROUNDING_MICRO_ACTION = (
    "花 60 秒做 5-4-3-2-1：說出 5 樣看到的、4 樣摸得到的、3 種聽到的聲音、"
    "2 種聞到的味道、1 種嚐到的味道。"
)

NOT_CONFIGURED_REPLY = (
    "我有收到你的訊息，但 AI 回覆服務還沒有設定完成。"
    "請服務管理者設定 LLM_ENDPOINT、LLM_API_KEY、LLM_MODEL 這三個環境變數。"
)
UNAVAILABLE_REPLY = (
    "我有收到你的訊息，但 AI 回覆服務暫時無法使用。"
    "我還是在這裡，等一下再試一次好嗎？在那之前，先照顧好自己。"
)
INTERNAL_ERROR_REPLY = "抱歉，系統剛剛出了一點狀況。我還在這裡，請稍後再傳一次訊息給我。"


def crisis_response() -> ChatResponse:
    return ChatResponse(
        reply=CRISIS_REPLY,
        suggested_emotion=CRISIS_EMOTION,
        suggested_intensity=CRISIS_INTENSITY,
        micro_action=CRISIS_MICRO_ACTION,
    )


def not_configured_response(*, emotion: str, intensity: int, debug: str) -> ChatResponse:
    return ChatResponse(
        reply=NOT_CONFIGURED_REPLY,
        suggested_emotion=emotion,
        suggested_intensity=intensity,
        micro_action=DEFAULT_MICRO_ACTION,
        debug=debug,
    )


def unavailable_response(*, emotion: str, intensity: int, debug: str) -> ChatResponse:
    return ChatResponse(
        reply=UNAVAILABLE_REPLY,
        suggested_emotion=emotion,
        suggested_intensity=intensity,
        micro_action=DEFAULT_MICRO_ACTION,
        debug=debug,
    )


def empathetic_fallback_reply(*, emotion: str, intensity: int) -> str:
    return (
        f"謝謝你願意說出來。你現在的感受是「{emotion}」，強度大約 {intensity}/5，"
        "這些感受都值得被好好對待。想多說一點是什麼讓你有這樣的感覺嗎？"
    )


def parse_fallback_response(*, emotion: str, intensity: int, debug: str) -> ChatResponse:
    return ChatResponse(
        reply=empathetic_fallback_reply(emotion=emotion, intensity=intensity),
        suggested_emotion=emotion,
        suggested_intensity=intensity,
        micro_action=GROUNDING_MICRO_ACTION,
        debug=debug,
    )
