"""JSON-RPC 2.0 envelope models.

Inbound requests are decoded into an immutable :class:`JsonRpcRequest`;
outbound messages are :class:`JsonRpcResponse` objects carrying either a
``result`` or an ``error``, never both.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, JsonValue, StrictStr, field_validator

from mcpcore.protocol.errors import DecodeError
from mcpcore.protocol.json_value import JsonObject, decode_object, encode

if TYPE_CHECKING:
    from mcpcore.protocol.errors import MCPError

JSONRPC_VERSION = "2.0"

# Id reported when none can be recovered from the request. Existing clients
# expect the string "null", not a JSON null.
NULL_ID = "null"

# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    model_config = {"frozen": True}

    jsonrpc: Literal["2.0"]
    method: StrictStr
    id: StrictStr
    params: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("params", mode="before")
    @classmethod
    def _decode_embedded_params(cls, value: Any) -> Any:
        # Legacy clients send params as a JSON-encoded string.
        if value is None:
            return {}
        if isinstance(value, str):
            try:
                return decode_object(value)
            except DecodeError as exc:
                raise ValueError(exc.detail) from exc
        return value


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = JSONRPC_VERSION
    id: str = NULL_ID
    result: dict[str, JsonValue] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, id: str, result: JsonObject) -> JsonRpcResponse:
        """Build a success response."""
        return cls(id=id, result=result)

    @classmethod
    def failure(cls, id: str | None, error: MCPError) -> JsonRpcResponse:
        """Build an error response; a missing id becomes ``"null"``."""
        return cls(
            id=id if id is not None else NULL_ID,
            error=JsonRpcError(code=error.code, message=error.message),
        )

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_wire(self) -> dict[str, Any]:
        """Return the wire shape: ``result`` or ``error``, never both."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump()
        else:
            data["result"] = self.result if self.result is not None else {}
        return data

    def to_json(self) -> str:
        """Serialize to compact JSON text."""
        return encode(self.to_wire()).decode("utf-8")
