"""JSON-RPC tool dispatch with OpenAI and local-model bridges."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from mcpcore.bridges.registry import LocalToolRegistry as LocalToolRegistry
    from mcpcore.bridges.registry import OpenAIToolRegistry as OpenAIToolRegistry
    from mcpcore.protocol.client import MCPClient as MCPClient
    from mcpcore.protocol.registry import ToolRegistry as ToolRegistry

_EXPORTS = {
    "MCPClient": "mcpcore.protocol.client",
    "ToolRegistry": "mcpcore.protocol.registry",
    "OpenAIToolRegistry": "mcpcore.bridges.registry",
    "LocalToolRegistry": "mcpcore.bridges.registry",
}


def __getattr__(name: str) -> object:
    module_path = _EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'mcpcore' has no attribute {name!r}")
