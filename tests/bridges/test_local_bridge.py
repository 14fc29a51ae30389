"""Tests for the local-model tool-call bridge."""

from __future__ import annotations

import json
import logging

import pytest

from mcpcore.bridges.local import ExtractionMode, LocalModelBridge
from mcpcore.bridges.models import LocalToolCall
from mcpcore.protocol.errors import ToolError
from mcpcore.protocol.tool import build_tool_schema

SCHEMA = build_tool_schema(
    "healthKit/getSteps",
    "Get step counts",
    {"type": "object", "properties": {"days": {"type": "integer"}}},
)

TWO_CALLS = """I'll check both.
<tool_call>
{"name": "healthkit_getsteps", "arguments": {"days": 7}}
</tool_call>
and
<tool_call>{"name": "location/current", "arguments": {"filter": {"accuracy": "high"}}}</tool_call>
"""


class TestFunctions:
    def test_parameters_stay_structured(self) -> None:
        function = LocalModelBridge().to_external_function(SCHEMA)
        assert function.function.name == "healthkit_getsteps"
        assert function.function.parameters == {
            "type": "object",
            "properties": {"days": {"type": "integer"}},
        }

    def test_schema_round_trip(self) -> None:
        bridge = LocalModelBridge()
        restored = json.loads(bridge.to_schema_document(bridge.to_external_function(SCHEMA)))
        assert restored["function"]["parameters"] == json.loads(SCHEMA)["function"]["parameters"]


class TestExtractCalls:
    def test_extracts_in_order(self) -> None:
        calls = LocalModelBridge().extract_calls(TWO_CALLS)

        assert [c.name for c in calls] == ["healthkit_getsteps", "location/current"]
        assert calls[0].arguments == {"days": 7}
        assert calls[1].arguments == {"filter": {"accuracy": "high"}}

    def test_no_calls(self) -> None:
        assert LocalModelBridge().extract_calls("Just a plain answer.") == []

    def test_unterminated_block_ignored(self) -> None:
        text = '<tool_call>{"name": "x", "arguments": {}}'
        assert LocalModelBridge().extract_calls(text) == []

    def test_unterminated_block_does_not_swallow_next(self) -> None:
        text = (
            '<tool_call>{"name": "bad", "arguments": {}}\n'
            '<tool_call>{"name": "good", "arguments": {"a": 1}}</tool_call>'
        )
        calls = LocalModelBridge(ExtractionMode.STRICT).extract_calls(text)
        assert [(c.name, c.arguments) for c in calls] == [("good", {"a": 1})]

    def test_best_effort_skips_malformed(self, caplog: pytest.LogCaptureFixture) -> None:
        text = '<tool_call>{"name": 1, "arguments": {}}</tool_call>' + TWO_CALLS
        with caplog.at_level(logging.WARNING, logger="mcpcore.bridges.local"):
            calls = LocalModelBridge().extract_calls(text)

        assert len(calls) == 2
        assert "missing name" in caplog.text

    def test_strict_raises_on_first_malformed(self) -> None:
        text = TWO_CALLS + '<tool_call>{"name": "x"}</tool_call>'
        with pytest.raises(ToolError, match="missing or invalid arguments"):
            LocalModelBridge(ExtractionMode.STRICT).extract_calls(text)

    def test_mode_argument_overrides_default(self) -> None:
        text = "<tool_call>{oops}</tool_call>"
        bridge = LocalModelBridge(ExtractionMode.STRICT)
        assert bridge.extract_calls(text, ExtractionMode.BEST_EFFORT) == []
        with pytest.raises(ToolError, match="Failed to parse tool call"):
            bridge.extract_calls(text)


class TestCallsAndResults:
    def test_to_internal_call_sanitizes(self) -> None:
        call = LocalToolCall(name="Location/Current", arguments={"a": 1})
        assert LocalModelBridge().to_internal_call(call) == ("location_current", {"a": 1})

    def test_format_result(self) -> None:
        text = LocalModelBridge().format_result({"steps": 8000}, "healthkit_getsteps")

        assert text.startswith("<tool_response>\n")
        assert text.endswith("\n</tool_response>")
        body = text.removeprefix("<tool_response>\n").removesuffix("\n</tool_response>")
        assert json.loads(body) == {"name": "healthkit_getsteps", "content": {"steps": 8000}}

    def test_format_result_escapes_name(self) -> None:
        text = LocalModelBridge().format_result({}, 'odd"name')
        body = text.removeprefix("<tool_response>\n").removesuffix("\n</tool_response>")
        assert json.loads(body)["name"] == 'odd"name'
