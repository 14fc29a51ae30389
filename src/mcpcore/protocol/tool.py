"""MCPTool protocol — the contract every capability handler satisfies.

A tool owns one JSON-RPC method. It describes itself with a function-schema
document in the chat-completion format::

    {
        "type": "function",
        "function": {
            "name": "healthKit/getSteps",
            "description": "...",
            "parameters": { ... }   # JSON Schema
        }
    }

and handles calls asynchronously. Handlers may be invoked concurrently, so a
tool holding mutable state must synchronize it itself.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from mcpcore.protocol.errors import InvalidParamsError
from mcpcore.protocol.json_value import JsonObject

ToolHandler = Callable[[JsonObject], Awaitable[JsonObject]]


@runtime_checkable
class MCPTool(Protocol):
    """A named capability reachable through the dispatcher."""

    @property
    def method_name(self) -> str:
        """Unique JSON-RPC method name, conventionally ``"category/action"``."""
        ...

    @property
    def tool_schema(self) -> str:
        """JSON-encoded function-schema document."""
        ...

    async def handle(self, params: JsonObject) -> JsonObject:
        """Run the tool.

        Raises ``ToolError`` or ``InvalidParamsError`` on failure.
        """
        ...


def require_params(required: Iterable[str], params: Mapping[str, Any]) -> None:
    """Raise :class:`InvalidParamsError` if any *required* key is absent."""
    missing = [key for key in required if key not in params]
    if missing:
        raise InvalidParamsError(f"Missing required parameters: {', '.join(missing)}")


def build_tool_schema(
    name: str,
    description: str,
    parameters: Mapping[str, Any] | None = None,
) -> str:
    """Return a function-schema document for a tool."""
    return json.dumps(
        {
            "type": "function",
            "function": {
                "name": name,
                "description": description,
                "parameters": dict(parameters or {"type": "object", "properties": {}}),
            },
        }
    )


@dataclass
class FunctionTool:
    """Adapts a plain ``async`` function into an :class:`MCPTool`.

    Usage::

        async def get_steps(params):
            return {"steps": 1234}

        tool = FunctionTool("healthKit/getSteps", get_steps, description="Step count")
    """

    name: str
    handler: ToolHandler
    description: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    @property
    def method_name(self) -> str:
        return self.name

    @property
    def tool_schema(self) -> str:
        parameters = self.parameters or {"type": "object", "properties": {}}
        if self.required and "required" not in parameters:
            parameters = {**parameters, "required": list(self.required)}
        return build_tool_schema(self.name, self.description, parameters)

    async def handle(self, params: JsonObject) -> JsonObject:
        require_params(self.required, params)
        return await self.handler(params)
