from __future__ import annotations

import json

import pytest

from mood_backend.core.llm.extraction import extract_embedded_json, extract_provider_text


# --- extract_provider_text -------------------------------------------------


def test_output_text_field_wins_over_text() -> None:
    result = extract_provider_text({"output_text": "first", "text": "second"})
    assert result.kind == "output_text"
    assert result.text == "first"


def test_text_field_used_when_output_text_missing_or_blank() -> None:
    result = extract_provider_text({"output_text": "  ", "text": "hello"})
    assert result.kind == "text"
    assert result.text == "hello"


def test_chat_completion_message_content() -> None:
    payload = {"choices": [{"message": {"role": "assistant", "content": '{"reply":"hi"}'}}]}
    result = extract_provider_text(payload)
    assert result.kind == "chat_completion"
    assert result.text == '{"reply":"hi"}'


def test_legacy_completion_choice_text() -> None:
    result = extract_provider_text({"choices": [{"text": "legacy"}]})
    assert result.kind == "chat_completion"
    assert result.text == "legacy"


def test_responses_style_output_blocks_are_joined() -> None:
    payload = {
        "output": [
            {"type": "reasoning", "summary": []},
            {
                "type": "message",
                "content": [
                    {"type": "output_text", "text": "part one"},
                    {"type": "output_text", "text": "part two"},
                ],
            },
        ]
    }
    result = extract_provider_text(payload)
    assert result.kind == "responses_output"
    assert result.text == "part one\npart two"


def test_raw_string_payload() -> None:
    result = extract_provider_text("just words")
    assert result.kind == "raw"
    assert result.text == "just words"


def test_unknown_shape_is_stringified() -> None:
    payload = {"data": {"reply": "nested"}, "id": 7}
    result = extract_provider_text(payload)
    assert result.kind == "stringified"
    assert json.loads(result.text) == payload


@pytest.mark.parametrize("payload", [None, 42, [], {"choices": []}, {"choices": ["x"]}])
def test_odd_payloads_never_raise(payload) -> None:
    result = extract_provider_text(payload)
    assert isinstance(result.text, str)


# --- extract_embedded_json -------------------------------------------------


def test_extracts_object_embedded_in_prose() -> None:
    text = (
        'Here is JSON: {"reply":"hello","suggestedEmotion":"calm",'
        '"suggestedIntensity":2,"microAction":"breathe"}'
    )
    reply = extract_embedded_json(text)
    assert reply is not None
    assert reply.reply == "hello"
    assert reply.suggested_emotion == "calm"
    assert reply.suggested_intensity == 2
    assert reply.micro_action == "breathe"


def test_extracts_object_inside_code_fence() -> None:
    text = '```json\n{"reply": "你好", "microAction": "喝口水"}\n```'
    reply = extract_embedded_json(text)
    assert reply is not None
    assert reply.reply == "你好"
    assert reply.micro_action == "喝口水"
    assert reply.suggested_emotion is None


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no braces here",
        "{not json at all}",
        '{"reply": "unterminated"',
        '{"message": "no reply key"}',
        '{"reply": 123}',
        '{"reply": "   "}',
        '["reply", "in a list"]',
    ],
)
def test_returns_none_for_unusable_text(text: str) -> None:
    assert extract_embedded_json(text) is None


def test_multiple_objects_first_usable_reply_wins() -> None:
    text = 'meta {"id": 1} then answer {"reply": "second object"} and {"reply": "third"}'
    reply = extract_embedded_json(text)
    assert reply is not None
    assert reply.reply == "second object"


def test_braces_inside_strings_do_not_confuse_decoding() -> None:
    text = 'x {"reply": "use {curly} braces", "suggestedEmotion": "ok"} y {'
    reply = extract_embedded_json(text)
    assert reply is not None
    assert reply.reply == "use {curly} braces"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(2, 2), ("4", 4), (4.6, 5), (0, 1), (99, 5), (-3, 1), ("abc", None), (None, None)],
)
def test_suggested_intensity_is_coerced_and_clamped(raw, expected) -> None:
    reply = extract_embedded_json(json.dumps({"reply": "ok", "suggestedIntensity": raw}))
    assert reply is not None
    assert reply.suggested_intensity == expected


def test_wrongly_typed_optional_fields_are_dropped() -> None:
    reply = extract_embedded_json('{"reply": "ok", "suggestedEmotion": 5, "microAction": ["a"]}')
    assert reply is not None
    assert reply.suggested_emotion is None
    assert reply.micro_action is None


def test_deeply_nested_json_returns_none() -> None:
    text = 'answer: {"reply":"x","a":' + "[" * 100_000 + "]" * 100_000 + "}"
    assert extract_embedded_json(text) is None


def test_brace_heavy_text_returns_none() -> None:
    assert extract_embedded_json("{" * 50_000 + "}") is None


def test_decode_attempts_are_capped() -> None:
    decoys = '{"note": 1} ' * 100
    assert extract_embedded_json(decoys + '{"reply": "too late"}') is None
    assert extract_embedded_json('{"note": 1} ' * 3 + '{"reply": "found"}').reply == "found"
