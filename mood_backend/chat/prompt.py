from __future__ import annotations

import json


def build_chat_prompts(*, text: str, emotion: str, intensity: int) -> tuple[str, str]:
    """
    Create (system_prompt, user_prompt) for one supportive reply.

    - System prompt fixes the persona, the three-part answer, and the JSON shape.
    - User prompt carries only the validated message and the self-reported mood,
      JSON-encoded so quotes or newlines in the text stay inside the data block.
    """

    system_prompt = "\n".join(
        [
            "You are a gentle, reliable emotional companion.",
            "You are NOT a therapist and you do NOT give medical or diagnostic advice.",
            "Be warm and brief. Do not lecture or moralise.",
            "",
            "For every message:",
            "1. Reflect the user's feeling back in ONE empathetic sentence.",
            "2. Ask 1-2 gentle, open guiding questions.",
            "3. Suggest ONE concrete micro-action the user can do in 30-90 seconds.",
            "",
            "Language: reply in Traditional Chinese unless the user clearly writes in "
            "another language, in which case reply in that language.",
            "",
            "Output requirements:",
            "- Output MUST be a single valid JSON object (and nothing else).",
            '- Shape: {"reply": string, "suggestedEmotion": string, '
            '"suggestedIntensity": integer 1-5, "microAction": string}',
            "- 'reply' contains steps 1 and 2; 'microAction' contains step 3.",
            "- 'suggestedEmotion' is a short emotion label; 'suggestedIntensity' is 1 (mild) to 5 (very strong).",
        ]
    )

    user_prompt = "\n".join(
        [
            "The user's message and self-reported mood (JSON):",
            json.dumps(
                {"text": text, "emotion": emotion, "intensity": intensity},
                ensure_ascii=False,
            ),
        ]
    )
    return system_prompt, user_prompt
