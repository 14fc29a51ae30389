"""Registries that serve tools through a bridge.

Tools are stored under their sanitized names, so a lookup by either the raw
method name (``"healthKit/getSteps"``) or the name an external model sees
(``"healthkit_getsteps"``) finds the same tool. Because sanitization is not
injective, two tools whose names sanitize identically overwrite each other;
the later registration wins and a warning is logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from mcpcore.bridges.base import ToolBridge, sanitize_tool_name
from mcpcore.bridges.local import ExtractionMode, LocalModelBridge
from mcpcore.bridges.openai import OpenAIBridge
from mcpcore.protocol.errors import ToolNotFoundError
from mcpcore.protocol.registry import ToolRegistry
from mcpcore.utils.telemetry import ATTR_BRIDGE, ATTR_TOOL_CALLS, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from mcpcore.bridges.models import OpenAIFunction, OpenAIToolCall, OpenAIToolResponse
    from mcpcore.protocol.json_value import JsonObject
    from mcpcore.protocol.tool import MCPTool

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

BridgeT = TypeVar("BridgeT", bound=ToolBridge)


@dataclass(frozen=True)
class _BridgedEntry:
    """A tool filed under its sanitized name, with the schema to publish."""

    method_name: str
    tool: MCPTool
    schema: str

    @property
    def tool_schema(self) -> str:
        return self.schema

    async def handle(self, params: JsonObject) -> JsonObject:
        return await self.tool.handle(params)


class BridgedToolRegistry(Generic[BridgeT]):
    """Registry keyed by sanitized names, publishing schemas through a bridge."""

    def __init__(self, bridge: BridgeT) -> None:
        self.bridge = bridge
        self._registry = ToolRegistry()

    def register(self, tool: MCPTool, schema: str | None = None) -> None:
        """Register *tool*, optionally publishing *schema* instead of its own."""
        key = sanitize_tool_name(tool.method_name)
        existing = self._registry.tool_for(key)
        if isinstance(existing, _BridgedEntry) and existing.tool.method_name != tool.method_name:
            logger.warning(
                "%s registry: %r replaces %r (both sanitize to %r)",
                self.bridge.name,
                tool.method_name,
                existing.tool.method_name,
                key,
            )
        entry = _BridgedEntry(method_name=key, tool=tool, schema=schema or tool.tool_schema)
        self._registry.register(entry)

    def unregister(self, method_name: str) -> None:
        self._registry.unregister(sanitize_tool_name(method_name))

    def tool_for(self, method_name: str) -> MCPTool | None:
        """Return the tool for a raw or sanitized *method_name*."""
        entry = self._entry(method_name)
        return entry.tool if entry is not None else None

    def schema_for(self, method_name: str) -> str | None:
        entry = self._entry(method_name)
        return entry.schema if entry is not None else None

    def registered_methods(self) -> set[str]:
        """Return the sanitized names of all registered tools."""
        return self._registry.registered_methods()

    def __contains__(self, method_name: object) -> bool:
        return isinstance(method_name, str) and self._entry(method_name) is not None

    def __len__(self) -> int:
        return len(self._registry)

    def _entry(self, method_name: str) -> _BridgedEntry | None:
        entry = self._registry.tool_for(sanitize_tool_name(method_name))
        return entry if isinstance(entry, _BridgedEntry) else None

    def _schemas(self) -> list[str]:
        return [tool.tool_schema for tool in self._registry.tools()]

    async def _execute(self, name: str, params: JsonObject) -> JsonObject:
        tool = self.tool_for(name)
        if tool is None:
            raise ToolNotFoundError(name)
        with _tracer.start_as_current_span("mcp.bridge.call") as span:
            span.set_attribute(ATTR_BRIDGE, self.bridge.name)
            span.set_attribute(ATTR_TOOL_NAME, tool.method_name)
            return await tool.handle(params)


class OpenAIToolRegistry(BridgedToolRegistry[OpenAIBridge]):
    """Serves registered tools to a chat-completion API.

    Usage::

        registry = OpenAIToolRegistry()
        registry.register(steps_tool)
        tools = [f.model_dump() for f in registry.functions()]
        replies = await registry.handle_tool_calls(message.tool_calls)
    """

    def __init__(self, bridge: OpenAIBridge | None = None) -> None:
        super().__init__(bridge or OpenAIBridge())

    def functions(self) -> list[OpenAIFunction]:
        """Return all registered tools as OpenAI function definitions."""
        return [self.bridge.to_external_function(schema) for schema in self._schemas()]

    async def handle_tool_call(self, call: OpenAIToolCall) -> OpenAIToolResponse:
        """Execute one tool call and return its tool-role response."""
        name, params = self.bridge.to_internal_call(call)
        result = await self._execute(name, params)
        return self.bridge.format_result(result, call.id)

    async def handle_tool_calls(self, calls: list[OpenAIToolCall]) -> list[OpenAIToolResponse]:
        """Execute tool calls one after another, in order."""
        responses: list[OpenAIToolResponse] = []
        for call in calls:
            responses.append(await self.handle_tool_call(call))
        return responses


class LocalToolRegistry(BridgedToolRegistry[LocalModelBridge]):
    """Serves registered tools to a locally run model.

    Usage::

        registry = LocalToolRegistry()
        registry.register(steps_tool)
        text, called = await registry.process_tool_calls(model_output)
    """

    def __init__(self, bridge: LocalModelBridge | None = None) -> None:
        super().__init__(bridge or LocalModelBridge())

    def functions(self) -> list[dict[str, Any]]:
        """Return all registered tools as plain function-definition dicts."""
        return [self.bridge.to_external_function(schema).model_dump() for schema in self._schemas()]

    async def process_tool_calls(
        self,
        model_output: str,
        mode: ExtractionMode | None = None,
    ) -> tuple[str, bool]:
        """Run every tool call in *model_output* and append the responses.

        Returns the (possibly extended) text and whether any tool was called.
        """
        calls = self.bridge.extract_calls(model_output, mode)
        if not calls:
            return model_output, False

        with _tracer.start_as_current_span("mcp.bridge.process") as span:
            span.set_attribute(ATTR_BRIDGE, self.bridge.name)
            span.set_attribute(ATTR_TOOL_CALLS, len(calls))

            responses: list[str] = []
            for call in calls:
                name, params = self.bridge.to_internal_call(call)
                result = await self._execute(name, params)
                responses.append(self.bridge.format_result(result, name))

        return model_output + "\n\n" + "\n\n".join(responses), True
