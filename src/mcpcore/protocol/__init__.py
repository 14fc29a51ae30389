"""JSON-RPC envelopes, tool registry and dispatch."""

from mcpcore.protocol.client import MCPClient
from mcpcore.protocol.errors import (
    DecodeError,
    ErrorKind,
    InvalidParamsError,
    InvalidRequestError,
    MCPError,
    ToolError,
    ToolNotFoundError,
    error_code,
)
from mcpcore.protocol.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from mcpcore.protocol.registry import LockedToolRegistry, ToolLookup, ToolRegistry
from mcpcore.protocol.tool import FunctionTool, MCPTool, build_tool_schema, require_params

__all__ = [
    "DecodeError",
    "ErrorKind",
    "FunctionTool",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "LockedToolRegistry",
    "MCPClient",
    "MCPError",
    "MCPTool",
    "ToolError",
    "ToolLookup",
    "ToolNotFoundError",
    "ToolRegistry",
    "build_tool_schema",
    "error_code",
    "require_params",
]
