"""OpenTelemetry tracing helpers for mcpcore.

The dispatcher and the bridge registries take their tracer from
:func:`get_tracer`. Until :func:`configure_telemetry` installs an SDK tracer
provider, the OpenTelemetry API hands back no-op tracers, so spans cost
nothing when tracing is off.

Usage::

    from mcpcore.utils.telemetry import TelemetrySettings, configure_telemetry

    configure_telemetry(TelemetrySettings(otlp_endpoint="http://localhost:4317"))

Exporting requires the ``otel`` extra (``pip install 'mcpcore[otel]'``).
"""

from __future__ import annotations

import logging
from typing import Any

from opentelemetry import trace
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_METHOD = "mcp.method"
ATTR_REQUEST_ID = "mcp.request.id"
ATTR_ERROR_CODE = "mcp.error.code"
ATTR_OUTCOME = "mcp.outcome"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_BRIDGE = "mcp.bridge"
ATTR_TOOL_CALLS = "mcp.tool_calls"

_INSTRUMENTATION_NAME = "mcpcore"

_MISSING_EXTRA = (
    "{package} is required to export spans. Install it with: pip install 'mcpcore[otel]'"
)


class TelemetrySettings(BaseModel):
    """Where dispatch spans are exported."""

    enabled: bool = False
    service_name: str = "mcpcore"
    export_to_console: bool = True
    otlp_endpoint: str | None = None


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a tracer for *name*; a no-op tracer until telemetry is configured."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(settings: TelemetrySettings | None = None) -> None:
    """Install a global SDK tracer provider exporting spans per *settings*.

    ``settings.enabled`` is not consulted here; callers decide whether to
    configure at all.

    Raises:
        ImportError: If ``opentelemetry-sdk``, or ``opentelemetry-exporter-otlp``
            when an OTLP endpoint is set, is not installed.
    """
    settings = settings or TelemetrySettings()
    try:
        from opentelemetry.sdk.resources import SERVICE_NAME, Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        raise ImportError(_MISSING_EXTRA.format(package="opentelemetry-sdk")) from exc

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: settings.service_name}))
    processors = _span_processors(settings)
    for processor in processors:
        provider.add_span_processor(processor)

    trace.set_tracer_provider(provider)
    logger.debug("Tracing %s with %d span processor(s)", settings.service_name, len(processors))


def _span_processors(settings: TelemetrySettings) -> list[Any]:
    from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if settings.export_to_console:
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter()))

    if settings.otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            raise ImportError(_MISSING_EXTRA.format(package="opentelemetry-exporter-otlp")) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint)))

    return processors
