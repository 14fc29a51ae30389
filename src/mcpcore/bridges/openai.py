"""OpenAI bridge — tools as chat-completion function definitions.

The chat-completion format carries both the parameter schema and the call
arguments as embedded JSON strings.
"""

from __future__ import annotations

from mcpcore.bridges.base import parse_schema_document, sanitize_tool_name, schema_document
from mcpcore.bridges.models import (
    FunctionSchema,
    OpenAIFunction,
    OpenAIFunctionDefinition,
    OpenAIToolCall,
    OpenAIToolResponse,
)
from mcpcore.protocol.errors import DecodeError, ToolError
from mcpcore.protocol.json_value import JsonObject, decode_object, encode


class OpenAIBridge:
    """Converts between tool schemas and OpenAI's function-calling format."""

    name = "openai"

    def to_external_function(self, schema: str) -> OpenAIFunction:
        """Convert a tool schema document to an :class:`OpenAIFunction`."""
        function = parse_schema_document(schema)
        return OpenAIFunction(
            function=OpenAIFunctionDefinition(
                name=sanitize_tool_name(function.name),
                description=function.description,
                parameters=encode(function.parameters).decode("utf-8"),
            )
        )

    def to_schema_document(self, function: OpenAIFunction) -> str:
        """Rebuild a tool schema document from *function*."""
        restored = FunctionSchema(
            name=function.function.name,
            description=function.function.description,
            parameters=_parse_arguments(function.function.parameters, what="parameters"),
        )
        return encode(schema_document(restored)).decode("utf-8")

    def to_internal_call(self, call: OpenAIToolCall) -> tuple[str, JsonObject]:
        """Decode the call's argument string into a parameter mapping."""
        return call.function.name, _parse_arguments(call.function.arguments, what="arguments")

    def format_result(self, result: JsonObject, correlation: str) -> OpenAIToolResponse:
        """Wrap *result* as the tool message for call id *correlation*."""
        return OpenAIToolResponse(
            tool_call_id=correlation,
            content=encode(result).decode("utf-8"),
        )


def _parse_arguments(raw: str, *, what: str) -> JsonObject:
    if not raw.strip():
        return {}
    try:
        return decode_object(raw)
    except DecodeError as exc:
        raise ToolError(f"Invalid tool call {what} - {exc.detail}") from exc
