"""Name sanitization and schema-document parsing shared by the bridges."""

from __future__ import annotations

from typing import Any, Protocol

from mcpcore.bridges.models import FunctionSchema
from mcpcore.protocol.errors import DecodeError, ToolError
from mcpcore.protocol.json_value import JsonObject, decode_object


def sanitize_tool_name(name: str) -> str:
    """Return *name* lowercased with ``/``, ``-`` and spaces replaced by ``_``.

    Not injective: ``"a/b"`` and ``"a-b"`` both become ``"a_b"``.
    """
    return name.lower().replace("/", "_").replace("-", "_").replace(" ", "_")


def parse_schema_document(schema: str) -> FunctionSchema:
    """Parse a tool schema document into its ``function`` member.

    Raises :class:`ToolError` when the document is not JSON or a required
    field is missing or mistyped.
    """
    try:
        document = decode_object(schema)
    except DecodeError as exc:
        raise ToolError(f"Invalid JSON schema format - {exc.detail}") from exc

    function = document.get("function")
    if not isinstance(function, dict):
        raise ToolError("Invalid JSON schema format - missing function object")

    name = function.get("name")
    if not isinstance(name, str):
        raise ToolError("Invalid JSON schema format - missing name")

    description = function.get("description")
    if not isinstance(description, str):
        raise ToolError("Invalid JSON schema format - missing description")

    parameters = function.get("parameters")
    if not isinstance(parameters, dict):
        raise ToolError("Invalid JSON schema format - missing parameters")

    return FunctionSchema(name=name, description=description, parameters=parameters)


def schema_document(function: FunctionSchema) -> dict[str, Any]:
    """Build the schema document dict for *function*."""
    return {"type": "function", "function": function.model_dump()}


class ToolBridge(Protocol):
    """Translates between tool schemas/results and an external wire format."""

    name: str

    def to_external_function(self, schema: str) -> Any:
        """Convert a tool schema document to the external function definition."""
        ...

    def to_schema_document(self, function: Any) -> str:
        """Convert an external function definition back to a schema document."""
        ...

    def to_internal_call(self, call: Any) -> tuple[str, JsonObject]:
        """Convert an external tool call to ``(method_name, params)``."""
        ...

    def format_result(self, result: JsonObject, correlation: str) -> Any:
        """Wrap a tool result for return to the external caller."""
        ...
