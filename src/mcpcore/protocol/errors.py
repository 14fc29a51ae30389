"""Error taxonomy for the dispatch core.

Every failure the dispatcher can report maps to exactly one :class:`ErrorKind`,
and every kind carries a fixed JSON-RPC error code.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds reported over JSON-RPC."""

    TOOL_NOT_FOUND = "tool_not_found"
    INVALID_PARAMS = "invalid_params"
    TOOL_ERROR = "tool_error"
    PARSE_ERROR = "parse_error"
    INVALID_REQUEST = "invalid_request"


_CODES: dict[ErrorKind, int] = {
    ErrorKind.TOOL_NOT_FOUND: -32601,
    ErrorKind.INVALID_PARAMS: -32602,
    ErrorKind.TOOL_ERROR: -32000,
    ErrorKind.PARSE_ERROR: -32700,
    ErrorKind.INVALID_REQUEST: -32600,
}


def error_code(kind: ErrorKind) -> int:
    """Return the JSON-RPC error code for *kind*."""
    return _CODES[kind]


class MCPError(Exception):
    """Base error for all dispatch-core failures."""

    kind: ErrorKind = ErrorKind.TOOL_ERROR

    def __init__(self, message: str, detail: str = "") -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)

    @property
    def code(self) -> int:
        return error_code(self.kind)

    def to_payload(self) -> dict[str, Any]:
        """Return the ``error`` member of a JSON-RPC response."""
        return {"code": self.code, "message": self.message}


class ToolNotFoundError(MCPError):
    """Requested method is not registered."""

    kind = ErrorKind.TOOL_NOT_FOUND

    def __init__(self, name: str = "") -> None:
        self.name = name
        super().__init__("The requested tool was not found in the registry", detail=name)


class InvalidParamsError(MCPError):
    """A required parameter is missing or has the wrong type."""

    kind = ErrorKind.INVALID_PARAMS

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid parameters: {detail}", detail=detail)


class ToolError(MCPError):
    """Domain failure raised by a tool handler or a bridge."""

    kind = ErrorKind.TOOL_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"Tool error: {detail}", detail=detail)


class DecodeError(MCPError):
    """Payload is not valid JSON, or not a valid JSON value."""

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"Parse error: {detail}", detail=detail)


class InvalidRequestError(MCPError):
    """Payload is JSON but not a well-formed JSON-RPC request envelope."""

    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        super().__init__("Invalid JSON-RPC request format", detail=detail)
