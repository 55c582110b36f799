"""
TEST DOC: Request/Response Models

WHAT: Tests for the pydantic request, option and response models
WHY: Payloads must carry the right defaults; responses must be validated strictly
HOW: Build models directly and validate raw JSON bodies

CASES:
- Chat and FIM option defaults
- Request payloads built from options
- Valid response body

EDGE CASES:
- FIM always uses the primary model
- Missing usage / wrong types / invalid JSON rejected
- Requests are immutable
"""

import json

import pytest
from pydantic import ValidationError

from codestral_mcp.llm.models import (
    PRIMARY_MODEL,
    ChatOptions,
    CodestralModel,
    CompletionRequest,
    CompletionResponse,
    FimOptions,
    FimRequest,
    Message,
    Role,
)


class TestOptions:
    """Defaults and bounds of the option models."""

    def test_chat_defaults(self):
        options = ChatOptions()
        assert options.model == CodestralModel.CODESTRAL
        assert options.temperature == 0.7
        assert options.top_p == 1.0
        assert options.max_tokens == 1000
        assert options.stop is None

    def test_fim_defaults(self):
        """FIM favours deterministic output."""
        options = FimOptions()
        assert options.temperature == 0.0
        assert options.top_p == 1.0
        assert options.max_tokens == 1000
        assert options.suffix is None

    @pytest.mark.parametrize(
        "kwargs",
        [{"temperature": 2.5}, {"temperature": -0.1}, {"top_p": 0}, {"top_p": 1.5}, {"max_tokens": 0}],
    )
    def test_bounds(self, kwargs):
        with pytest.raises(ValidationError):
            ChatOptions(**kwargs)


class TestRequests:
    """Request payload construction."""

    def test_chat_payload(self):
        messages = [Message(role=Role.SYSTEM, content="s"), Message(role=Role.USER, content="u")]
        request = CompletionRequest.from_options(messages, ChatOptions(stop=["\n\n"]))

        payload = request.model_dump(mode="json", exclude_none=True)

        assert payload == {
            "model": "codestral-latest",
            "messages": [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}],
            "temperature": 0.7,
            "top_p": 1.0,
            "max_tokens": 1000,
            "stop": ["\n\n"],
        }

    def test_chat_payload_omits_unset_stop(self):
        request = CompletionRequest.from_options([Message(role=Role.USER, content="u")], ChatOptions())
        assert "stop" not in request.model_dump(mode="json", exclude_none=True)

    def test_chat_requires_messages(self):
        with pytest.raises(ValidationError):
            CompletionRequest.from_options([], ChatOptions())

    def test_fim_forces_primary_model(self):
        """A mamba model in the options is overridden."""
        options = FimOptions(model=CodestralModel.CODESTRAL_MAMBA, suffix="return x")
        request = FimRequest.from_options("def f(x):", options)

        assert request.model == PRIMARY_MODEL
        assert request.model_dump(mode="json", exclude_none=True) == {
            "model": "codestral-latest",
            "prompt": "def f(x):",
            "suffix": "return x",
            "temperature": 0.0,
            "top_p": 1.0,
            "max_tokens": 1000,
        }

    def test_requests_are_frozen(self):
        request = FimRequest.from_options("p", FimOptions())
        with pytest.raises(ValidationError):
            request.prompt = "changed"


class TestCompletionResponse:
    """Strict validation of response bodies."""

    def test_valid_body(self, completion_body):
        response = CompletionResponse.model_validate_json(json.dumps(completion_body), strict=True)

        assert response.id == completion_body["id"]
        assert response.choices[0].message.role == Role.ASSISTANT
        assert response.choices[0].finish_reason == "stop"
        assert response.usage.total_tokens == 50
        assert response.content.startswith("Here is the fix")

    def test_object_optional(self, completion_body):
        del completion_body["object"]
        response = CompletionResponse.model_validate_json(json.dumps(completion_body), strict=True)
        assert response.object is None

    def test_missing_usage(self, completion_body):
        del completion_body["usage"]
        with pytest.raises(ValidationError):
            CompletionResponse.model_validate_json(json.dumps(completion_body), strict=True)

    def test_wrong_type(self, completion_body):
        """Strings are not coerced into numbers."""
        completion_body["created"] = "1702256327"
        with pytest.raises(ValidationError):
            CompletionResponse.model_validate_json(json.dumps(completion_body), strict=True)

    def test_unknown_role(self, completion_body):
        completion_body["choices"][0]["message"]["role"] = "narrator"
        with pytest.raises(ValidationError):
            CompletionResponse.model_validate_json(json.dumps(completion_body), strict=True)

    def test_empty_choices_allowed(self, make_body):
        """Zero choices is valid here; extraction rejects it later."""
        response = CompletionResponse.model_validate(make_body())
        assert response.choices == []
        assert response.content is None

    def test_invalid_json(self):
        with pytest.raises(ValidationError):
            CompletionResponse.model_validate_json("not json", strict=True)
