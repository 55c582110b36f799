"""
telemetry.py

PURPOSE: OpenTelemetry initialization and tracer management.
DEPENDENCIES: opentelemetry-api, opentelemetry-sdk, opentelemetry-exporter-otlp-proto-http

ARCHITECTURE NOTES:
Modules call get_tracer(__name__) at import time. The API hands out proxy
tracers that resolve against whatever provider is installed when a span is
started, so init_telemetry() can run later from the CLI.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

if TYPE_CHECKING:
    from codestral_mcp.config import OpenTelemetrySettings

logger = logging.getLogger(__name__)

# Global state for the tracer provider
_initialized = False
_tracer_provider: TracerProvider | None = None


def init_telemetry(settings: OpenTelemetrySettings) -> None:
    """
    Initialize OpenTelemetry tracing.

    Should be called once at application startup; later calls are ignored.

    Args:
        settings: OpenTelemetry configuration settings.
    """
    global _initialized, _tracer_provider

    if _initialized:
        logger.debug("Telemetry already initialized")
        return

    if not settings.enabled:
        logger.debug("Telemetry disabled")
        _initialized = True
        return

    resource = Resource.create({"service.name": settings.service_name})
    provider = TracerProvider(resource=resource)

    if settings.endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint)))
        logger.info(f"OTLP exporter configured: {settings.endpoint}")
    else:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer_provider = provider
    _initialized = True

    logger.info(f"Telemetry initialized: service={settings.service_name}")


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer for the given module name.

    Args:
        name: Module name (typically __name__).

    Returns:
        A tracer bound to the global provider.
    """
    return trace.get_tracer(name)


def shutdown_telemetry() -> None:
    """
    Shutdown the tracer provider, flushing any pending spans.

    Safe to call even if telemetry was never initialized.
    """
    global _initialized, _tracer_provider

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        logger.debug("Telemetry shutdown complete")

    _tracer_provider = None
    _initialized = False
