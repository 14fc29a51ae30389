"""ToolRegistry — maps JSON-RPC method names to tools.

The registry is owned by the hosting application. Registering under an
existing name replaces the previous tool; unregistering an unknown name is a
no-op. :class:`ToolRegistry` assumes tools are registered during setup;
use :class:`LockedToolRegistry` when tools are added or removed while
requests are being dispatched from several threads.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mcpcore.protocol.tool import MCPTool


class ToolLookup(Protocol):
    """What the dispatcher needs from a registry."""

    def tool_for(self, method_name: str) -> MCPTool | None: ...


class ToolRegistry:
    """Holds registered tools keyed by method name.

    Usage::

        registry = ToolRegistry()
        registry.register(steps_tool)
        tool = registry.tool_for("healthKit/getSteps")
    """

    def __init__(self) -> None:
        self._tools: dict[str, MCPTool] = {}

    def register(self, tool: MCPTool) -> None:
        """Register *tool*, replacing any tool with the same method name."""
        self._tools[tool.method_name] = tool

    def tool_for(self, method_name: str) -> MCPTool | None:
        """Return the tool for *method_name*, or ``None``."""
        return self._tools.get(method_name)

    def unregister(self, method_name: str) -> None:
        """Remove the tool for *method_name* if present."""
        self._tools.pop(method_name, None)

    def registered_methods(self) -> set[str]:
        """Return a snapshot of registered method names."""
        return set(self._tools)

    def tools(self) -> list[MCPTool]:
        """Return a snapshot of registered tools."""
        return list(self._tools.values())

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


class LockedToolRegistry(ToolRegistry):
    """A :class:`ToolRegistry` safe for mutation from multiple threads."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    def register(self, tool: MCPTool) -> None:
        with self._lock:
            super().register(tool)

    def tool_for(self, method_name: str) -> MCPTool | None:
        with self._lock:
            return super().tool_for(method_name)

    def unregister(self, method_name: str) -> None:
        with self._lock:
            super().unregister(method_name)

    def registered_methods(self) -> set[str]:
        with self._lock:
            return super().registered_methods()

    def tools(self) -> list[MCPTool]:
        with self._lock:
            return super().tools()

    def __contains__(self, method_name: object) -> bool:
        with self._lock:
            return super().__contains__(method_name)

    def __len__(self) -> int:
        with self._lock:
            return super().__len__()
