"""Reference tool implementations."""

from mcpcore.tools.builtin import EchoTool, ListMethodsTool, PingTool, register_builtin_tools

__all__ = ["EchoTool", "ListMethodsTool", "PingTool", "register_builtin_tools"]
