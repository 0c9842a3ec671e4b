"""LLM integration layer.

This package is intentionally small and conservative:
- No prompt/output logging (user text is sensitive).
- Configured from an explicit `LLMConfig`, never from the environment directly.
- Provider payloads are treated as untrusted and schema-less.
"""
