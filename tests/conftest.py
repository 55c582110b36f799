"""
conftest.py

Shared pytest fixtures for codestral_mcp tests.
"""

from typing import Any

import pytest

from codestral_mcp.llm.models import CompletionResponse

MISTRAL_BASE_URL = "https://api.mistral.ai/v1"


def make_completion_body(*contents: str, model: str = "codestral-latest") -> dict[str, Any]:
    """Build a completion body as the Mistral API returns it, one choice per content."""
    return {
        "id": "cmpl-e5cc70bb28c444948073e77776eb30ef",
        "object": "chat.completion",
        "created": 1702256327,
        "model": model,
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content, "tool_calls": None},
                "finish_reason": "stop",
            }
            for i, content in enumerate(contents)
        ],
        "usage": {"prompt_tokens": 16, "completion_tokens": 34, "total_tokens": 50},
    }


@pytest.fixture
def completion_body() -> dict[str, Any]:
    """A completion answering with prose around one python block."""
    return make_completion_body(
        "Here is the fix:\n\n```python\ndef f(x):\n    return x + 1\n```\n\nThe expression was incomplete."
    )


@pytest.fixture
def completion(completion_body: dict[str, Any]) -> CompletionResponse:
    """Validated version of completion_body."""
    return CompletionResponse.model_validate(completion_body)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Clear configuration variables and run from an empty directory (no .env)."""
    for name in (
        "MISTRAL_API_KEY",
        "CODESTRAL_API_KEY",
        "CODESTRAL_BASE_URL",
        "CODESTRAL_MODEL",
        "CODESTRAL_TIMEOUT",
        "CODESTRAL_MIN_REQUEST_INTERVAL",
        "CODESTRAL_LOG_LEVEL",
        "CODESTRAL_DEBUG",
        "CODESTRAL_OTEL_ENABLED",
        "CODESTRAL_OTEL_ENDPOINT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def make_body():
    """Factory for completion bodies: make_body("answer one", "answer two")."""
    return make_completion_body
