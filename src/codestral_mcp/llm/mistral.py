"""
mistral.py

PURPOSE: Mistral Codestral completion client.
DEPENDENCIES: httpx, pydantic

ARCHITECTURE NOTES:
One client value is built per process and passed to whatever needs it.
It owns the httpx connection pool and the request pacer. Each call:
1. waits on the pacer,
2. sends the request (bearer auth, JSON, fixed timeout),
3. classifies HTTP errors into the domain taxonomy,
4. validates the body strictly against CompletionResponse.
Includes OpenTelemetry tracing for observability.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from codestral_mcp.llm.client import CompletionClient
from codestral_mcp.llm.errors import (
    AuthError,
    ConfigError,
    SchemaError,
    TransportError,
    classify_http_error,
    extract_remote_message,
)
from codestral_mcp.llm.models import (
    PRIMARY_MODEL,
    ChatOptions,
    CompletionRequest,
    CompletionResponse,
    FimOptions,
    FimRequest,
    Message,
)
from codestral_mcp.llm.pacing import RequestPacer
from codestral_mcp.observability import get_tracer

if TYPE_CHECKING:
    from codestral_mcp.config import MistralSettings

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

MISTRAL_API_BASE = "https://api.mistral.ai/v1"


def _decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to its text."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class CodestralClient(CompletionClient):
    """
    Completion client for Mistral's Codestral endpoints.

    Supports chat completions, fill-in-the-middle completions and an API
    key probe against the model listing.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = MISTRAL_API_BASE,
        timeout: float = 30.0,
        min_request_interval: float = 0.1,
    ):
        """
        Initialize the client.

        Args:
            api_key: Mistral API key. Surrounding whitespace is stripped.
            base_url: Base URL of the Mistral API.
            timeout: Per-request timeout in seconds.
            min_request_interval: Minimum seconds between request starts.

        Raises:
            ConfigError: If the API key is empty or whitespace.
        """
        if not api_key or not api_key.strip():
            raise ConfigError("API key cannot be empty")

        self._api_key = api_key.strip()
        self._base_url = base_url
        self._pacer = RequestPacer(min_interval=min_request_interval)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=timeout,
        )

    @property
    def base_url(self) -> str:
        """Return the API base URL."""
        return self._base_url

    @property
    def last_request_time(self) -> float | None:
        """Monotonic start time of the most recent request."""
        return self._pacer.last_request_time

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> CodestralClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def validate_credential(self) -> None:
        """
        Check the API key by listing models.

        Raises:
            AuthError: If the service answers 401.
            TransportError: On any other failure.
        """
        with tracer.start_as_current_span("codestral.validate_credential") as span:
            await self._pacer.wait()
            try:
                response = await self._client.get("/models")
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                body = _decode_body(e.response)
                span.set_attribute("http.status_code", status)
                logger.warning(f"API key probe failed: status={status} body={body}")
                if status == 401:
                    error: Exception = AuthError(
                        "Invalid API key. Please check your Mistral API key.",
                        status,
                        extract_remote_message(body),
                    )
                else:
                    error = TransportError(f"API validation failed: {e}")
                span.record_exception(error)
                raise error from e
            except httpx.HTTPError as e:
                span.record_exception(e)
                raise TransportError(f"API validation failed: {e}") from e

            span.set_attribute("http.status_code", response.status_code)
            logger.debug(f"Models response: {_decode_body(response)}")

    async def chat_completion(
        self,
        messages: list[Message],
        options: ChatOptions | None = None,
    ) -> CompletionResponse:
        """
        Send a chat completion request.

        Args:
            messages: Ordered conversation, system message first.
            options: Sampling options; defaults apply when None.

        Returns:
            The validated CompletionResponse.

        Raises:
            AuthError, RateLimitError, ServerError, UnclassifiedApiError:
                On HTTP error statuses.
            TransportError: On network failure or timeout.
            SchemaError: If the body does not match the response schema.
        """
        options = options or ChatOptions()
        request = CompletionRequest.from_options(messages, options)

        with tracer.start_as_current_span("codestral.chat_completion") as span:
            span.set_attribute("llm.model", request.model.value)
            span.set_attribute("llm.temperature", request.temperature)
            span.set_attribute("llm.max_tokens", request.max_tokens)
            span.set_attribute("llm.message_count", len(request.messages))

            logger.debug(f"Sending chat request to {request.model.value} with {len(messages)} messages")
            return await self._post("/chat/completions", request.model_dump(mode="json", exclude_none=True), span)

    async def fim_completion(
        self,
        prompt: str,
        options: FimOptions | None = None,
    ) -> CompletionResponse:
        """
        Send a fill-in-the-middle completion request.

        The primary model is always used: the FIM endpoint is only served
        by it.

        Args:
            prompt: Code before the gap.
            options: FIM options, including the optional suffix.

        Returns:
            The validated CompletionResponse.

        Raises:
            Same as chat_completion().
        """
        options = options or FimOptions()
        if options.model != PRIMARY_MODEL:
            logger.debug(f"FIM ignores model {options.model.value}, using {PRIMARY_MODEL.value}")
        request = FimRequest.from_options(prompt, options)

        with tracer.start_as_current_span("codestral.fim_completion") as span:
            span.set_attribute("llm.model", request.model.value)
            span.set_attribute("llm.temperature", request.temperature)
            span.set_attribute("llm.max_tokens", request.max_tokens)
            span.set_attribute("llm.has_suffix", request.suffix is not None)

            logger.debug(f"Sending FIM request: prompt={len(prompt)} chars, suffix={request.suffix is not None}")
            return await self._post("/fim/completions", request.model_dump(mode="json", exclude_none=True), span)

    async def _post(self, path: str, payload: dict[str, Any], span: Any) -> CompletionResponse:
        """Pace, send, classify and validate one completion call."""
        await self._pacer.wait()
        start_time = time.perf_counter()

        try:
            response = await self._client.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = _decode_body(e.response)
            span.set_attribute("http.status_code", status)
            logger.warning(f"Mistral API error on {path}: status={status} body={body}")
            error = classify_http_error(status, body, str(e))
            span.record_exception(error)
            raise error from e
        except httpx.HTTPError as e:
            span.record_exception(e)
            logger.warning(f"Request to {path} failed: {e!r}")
            raise TransportError(f"Request to Mistral API failed: {str(e) or type(e).__name__}") from e

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        span.set_attribute("http.status_code", response.status_code)
        span.set_attribute("llm.latency_ms", elapsed_ms)

        try:
            completion = CompletionResponse.model_validate_json(response.content, strict=True)
        except ValidationError as e:
            span.record_exception(e)
            raise SchemaError(f"Invalid completion response from Mistral API: {e}") from e

        span.set_attribute("llm.input_tokens", completion.usage.prompt_tokens)
        span.set_attribute("llm.output_tokens", completion.usage.completion_tokens)
        span.set_attribute("llm.choice_count", len(completion.choices))

        logger.debug(
            f"Response: {completion.usage.prompt_tokens} in, "
            f"{completion.usage.completion_tokens} out ({elapsed_ms:.0f}ms)"
        )
        return completion


def create_codestral_client(settings: MistralSettings) -> CodestralClient:
    """
    Factory function to create a Codestral client from settings.

    Args:
        settings: Mistral settings (API key, base URL, timeout, pacing).

    Returns:
        Configured CodestralClient

    Raises:
        ConfigError: If no API key is configured.
    """
    return CodestralClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
        min_request_interval=settings.min_request_interval,
    )
