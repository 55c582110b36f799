"""
errors.py

PURPOSE: Error taxonomy for the completion client.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Every failure reaches the caller as one of these types with a readable
message. classify_http_error() maps an HTTP status and response body to an
ApiError subclass; it is independent of the transport so it can be tested
with plain status/body fixtures.
"""

from typing import Any


class CodestralError(Exception):
    """Base class for all completion client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(CodestralError):
    """Missing or unusable configuration (e.g. an empty API key)."""


class TransportError(CodestralError):
    """Network-level failure: connection errors, timeouts, failed probes."""


class SchemaError(CodestralError):
    """Response body does not match the completion response schema."""


class EmptyCompletionError(CodestralError):
    """Response was valid but carried no choices."""

    def __init__(self, message: str = "Invalid completion response: no choices returned"):
        super().__init__(message)


class ApiError(CodestralError):
    """Non-2xx response from the remote service."""

    def __init__(self, message: str, status_code: int, remote_message: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.remote_message = remote_message


class AuthError(ApiError):
    """HTTP 401: the API key was rejected."""


class RateLimitError(ApiError):
    """HTTP 429: too many requests."""


class ServerError(ApiError):
    """HTTP 5xx: the remote service failed."""


class UnclassifiedApiError(ApiError):
    """Any other non-2xx status."""


def extract_remote_message(body: Any) -> str | None:
    """
    Pull the service-supplied error message out of a response body.

    Mistral reports errors as {"error": {"message": ...}} on some endpoints
    and {"message": ...} on others.
    """
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    return None


def classify_http_error(status: int, body: Any, fallback_message: str) -> ApiError:
    """
    Map an HTTP error status to a domain error.

    Args:
        status: HTTP status code of the failed response.
        body: Decoded JSON body, raw text, or None.
        fallback_message: Transport's own description, used when the body
            carries no message.

    Returns:
        The ApiError subclass for the status.
    """
    remote_message = extract_remote_message(body)

    if status == 401:
        return AuthError(
            "Authentication failed. Please check your API key.",
            status,
            remote_message,
        )
    if status == 429:
        return RateLimitError(
            "Rate limit exceeded. Please try again later.",
            status,
            remote_message,
        )
    if 500 <= status < 600:
        return ServerError(
            "Mistral API server error. Please try again later.",
            status,
            remote_message,
        )

    message = remote_message or fallback_message
    return UnclassifiedApiError(f"Mistral API error ({status}): {message}", status, remote_message)
