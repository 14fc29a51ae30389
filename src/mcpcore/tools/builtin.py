"""Built-in tools registered by default.

``ping`` and ``tools/list`` let a client probe a dispatcher; ``debug/echo``
returns its parameters unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcpcore.protocol.tool import build_tool_schema

if TYPE_CHECKING:
    from mcpcore.protocol.json_value import JsonObject
    from mcpcore.protocol.registry import ToolRegistry


class PingTool:
    method_name = "ping"
    tool_schema = build_tool_schema("ping", "Check that the dispatcher is reachable.")

    async def handle(self, params: JsonObject) -> JsonObject:
        return {}


class EchoTool:
    method_name = "debug/echo"
    tool_schema = build_tool_schema(
        "debug/echo",
        "Return the given parameters unchanged.",
        {"type": "object", "properties": {}, "additionalProperties": True},
    )

    async def handle(self, params: JsonObject) -> JsonObject:
        return {"params": dict(params)}


class ListMethodsTool:
    """Lists the method names of the registry it belongs to."""

    method_name = "tools/list"
    tool_schema = build_tool_schema("tools/list", "List the registered method names.")

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def handle(self, params: JsonObject) -> JsonObject:
        return {"methods": sorted(self._registry.registered_methods())}


def register_builtin_tools(registry: ToolRegistry) -> None:
    """Register the built-in tools into *registry*."""
    registry.register(PingTool())
    registry.register(EchoTool())
    registry.register(ListMethodsTool(registry))
