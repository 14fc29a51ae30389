"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from opentelemetry import trace

from mcpcore.utils.telemetry import (
    ATTR_BRIDGE,
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_OUTCOME,
    _INSTRUMENTATION_NAME,
    TelemetrySettings,
    _span_processors,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        tracer = get_tracer("test.module")
        assert isinstance(tracer, trace.Tracer)

    def test_default_name(self) -> None:
        tracer = get_tracer()
        assert isinstance(tracer, trace.Tracer)

    def test_noop_span(self) -> None:
        """Without the SDK configured, spans accept attributes silently."""
        tracer = get_tracer("test.noop")
        with tracer.start_as_current_span("test") as span:
            span.set_attribute("key", "value")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")

        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match=r"opentelemetry-exporter-otlp.*mcpcore\[otel\]"):
                configure_telemetry(
                    TelemetrySettings(export_to_console=False, otlp_endpoint="http://localhost:4317")
                )


class TestSpanProcessors:
    def test_console_only(self) -> None:
        export = pytest.importorskip("opentelemetry.sdk.trace.export")

        [processor] = _span_processors(TelemetrySettings())
        assert isinstance(processor, export.SimpleSpanProcessor)

    def test_nothing_to_export(self) -> None:
        pytest.importorskip("opentelemetry.sdk.trace")

        assert _span_processors(TelemetrySettings(export_to_console=False)) == []


class TestDispatchSpans:
    @pytest.fixture
    def exporter(self):  # type: ignore[no-untyped-def]
        sdk_trace = pytest.importorskip("opentelemetry.sdk.trace")
        export = pytest.importorskip("opentelemetry.sdk.trace.export")
        in_memory = pytest.importorskip("opentelemetry.sdk.trace.export.in_memory_span_exporter")

        exporter = in_memory.InMemorySpanExporter()
        provider = sdk_trace.TracerProvider()
        provider.add_span_processor(export.SimpleSpanProcessor(exporter))
        tracer = provider.get_tracer("test")
        with (
            patch("mcpcore.protocol.client._tracer", tracer),
            patch("mcpcore.bridges.registry._tracer", tracer),
        ):
            yield exporter

    async def test_success_span(self, exporter) -> None:  # type: ignore[no-untyped-def]
        from mcpcore.protocol.client import MCPClient
        from mcpcore.protocol.registry import ToolRegistry
        from mcpcore.tools.builtin import PingTool

        registry = ToolRegistry()
        registry.register(PingTool())
        request = json.dumps({"jsonrpc": "2.0", "method": "ping", "id": "1"})
        await MCPClient(registry, lambda _: None).handle_incoming_message(request)

        [span] = exporter.get_finished_spans()
        assert span.name == "mcp.dispatch"
        assert span.attributes[ATTR_METHOD] == "ping"
        assert span.attributes[ATTR_OUTCOME] == "success"

    async def test_error_span(self, exporter) -> None:  # type: ignore[no-untyped-def]
        from mcpcore.protocol.client import MCPClient
        from mcpcore.protocol.registry import ToolRegistry

        await MCPClient(ToolRegistry(), lambda _: None).handle_incoming_message(b"{")

        [span] = exporter.get_finished_spans()
        assert span.attributes[ATTR_OUTCOME] == "error"
        assert span.attributes[ATTR_ERROR_CODE] == -32600

    async def test_bridge_span(self, exporter) -> None:  # type: ignore[no-untyped-def]
        from mcpcore.bridges.registry import LocalToolRegistry
        from mcpcore.tools.builtin import PingTool

        registry = LocalToolRegistry()
        registry.register(PingTool())
        await registry.process_tool_calls('<tool_call>{"name": "ping", "arguments": {}}</tool_call>')

        names = sorted(span.name for span in exporter.get_finished_spans())
        assert names == ["mcp.bridge.call", "mcp.bridge.process"]
        bridge_values = {span.attributes[ATTR_BRIDGE] for span in exporter.get_finished_spans()}
        assert bridge_values == {"local"}


class TestAttributeConstants:
    def test_constants_are_strings(self) -> None:
        assert isinstance(ATTR_METHOD, str)
        assert ATTR_METHOD.startswith("mcp.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "mcpcore"
