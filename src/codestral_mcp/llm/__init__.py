"""Completion client module."""

from codestral_mcp.llm.client import CompletionClient
from codestral_mcp.llm.errors import (
    ApiError,
    AuthError,
    CodestralError,
    ConfigError,
    EmptyCompletionError,
    RateLimitError,
    SchemaError,
    ServerError,
    TransportError,
    UnclassifiedApiError,
    classify_http_error,
)
from codestral_mcp.llm.mistral import MISTRAL_API_BASE, CodestralClient, create_codestral_client
from codestral_mcp.llm.models import (
    PRIMARY_MODEL,
    ChatOptions,
    Choice,
    CodestralModel,
    CompletionRequest,
    CompletionResponse,
    FimOptions,
    FimRequest,
    Message,
    Role,
    TaskKind,
    Usage,
)
from codestral_mcp.llm.pacing import RequestPacer

__all__ = [
    "ApiError",
    "AuthError",
    "ChatOptions",
    "Choice",
    "CodestralClient",
    "CodestralError",
    "CodestralModel",
    "CompletionClient",
    "CompletionRequest",
    "CompletionResponse",
    "ConfigError",
    "EmptyCompletionError",
    "FimOptions",
    "FimRequest",
    "MISTRAL_API_BASE",
    "Message",
    "PRIMARY_MODEL",
    "RateLimitError",
    "RequestPacer",
    "Role",
    "SchemaError",
    "ServerError",
    "TaskKind",
    "TransportError",
    "UnclassifiedApiError",
    "Usage",
    "classify_http_error",
    "create_codestral_client",
]
