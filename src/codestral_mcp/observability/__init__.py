"""
observability/__init__.py

PURPOSE: OpenTelemetry tracing for outbound completion calls.
DEPENDENCIES: opentelemetry-api, opentelemetry-sdk

ARCHITECTURE NOTES:
Tracing is opt-in:
- Spans go to the API's no-op provider until init_telemetry() runs
- Console output by default when enabled
- OTLP/HTTP export when an endpoint is configured
"""

from codestral_mcp.observability.telemetry import get_tracer, init_telemetry, shutdown_telemetry

__all__ = ["get_tracer", "init_telemetry", "shutdown_telemetry"]
