"""Local-model bridge — tools for models that emit tool calls as markup.

A locally run model receives function definitions with structured
``parameters`` and answers with free-form text in which tool calls appear as::

    <tool_call>
    {"name": "healthkit_getsteps", "arguments": {"days": 7}}
    </tool_call>

Results are fed back in matching ``<tool_response>`` markup.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

from mcpcore.bridges.base import parse_schema_document, sanitize_tool_name, schema_document
from mcpcore.bridges.models import (
    FunctionSchema,
    LocalFunction,
    LocalFunctionDefinition,
    LocalToolCall,
)
from mcpcore.protocol.errors import DecodeError, ToolError
from mcpcore.protocol.json_value import JsonObject, decode_object, encode

logger = logging.getLogger(__name__)

# The closing tag anchors the lazy match, so nested braces are captured whole.
# A block never spans another opening tag, so an unterminated block cannot
# swallow the one after it.
_TOOL_CALL_RE = re.compile(
    r"<tool_call>\s*(\{(?:(?!<tool_call>).)*?\})\s*</tool_call>",
    re.DOTALL,
)


class ExtractionMode(str, Enum):
    """How :meth:`LocalModelBridge.extract_calls` treats malformed blocks."""

    BEST_EFFORT = "best_effort"
    STRICT = "strict"


class LocalModelBridge:
    """Converts between tool schemas and the local-model tool-call format."""

    name = "local"

    def __init__(self, extraction_mode: ExtractionMode = ExtractionMode.BEST_EFFORT) -> None:
        self.extraction_mode = extraction_mode

    def to_external_function(self, schema: str) -> LocalFunction:
        """Convert a tool schema document to a :class:`LocalFunction`."""
        function = parse_schema_document(schema)
        return LocalFunction(
            function=LocalFunctionDefinition(
                name=sanitize_tool_name(function.name),
                description=function.description,
                parameters=function.parameters,
            )
        )

    def to_schema_document(self, function: LocalFunction) -> str:
        """Rebuild a tool schema document from *function*."""
        restored = FunctionSchema(**function.function.model_dump())
        return encode(schema_document(restored)).decode("utf-8")

    def to_internal_call(self, call: LocalToolCall) -> tuple[str, JsonObject]:
        """Return the sanitized method name and the call's arguments."""
        return sanitize_tool_name(call.name), dict(call.arguments)

    def format_result(self, result: JsonObject, correlation: str) -> str:
        """Wrap *result* of tool *correlation* in ``<tool_response>`` markup."""
        name = encode(correlation).decode("utf-8")
        content = encode(result).decode("utf-8")
        return f'<tool_response>\n{{"name": {name}, "content": {content}}}\n</tool_response>'

    def extract_calls(
        self,
        text: str,
        mode: ExtractionMode | None = None,
    ) -> list[LocalToolCall]:
        """Return every tool call found in *text*, in order of appearance.

        In ``BEST_EFFORT`` mode malformed blocks are logged and skipped; in
        ``STRICT`` mode the first malformed block raises :class:`ToolError`.
        """
        effective = mode or self.extraction_mode
        calls: list[LocalToolCall] = []
        for index, match in enumerate(_TOOL_CALL_RE.finditer(text)):
            try:
                calls.append(_parse_block(match.group(1)))
            except ToolError as exc:
                if effective is ExtractionMode.STRICT:
                    raise
                logger.warning("Skipping malformed tool call block %d: %s", index, exc.detail)
        return calls


def _parse_block(raw: str) -> LocalToolCall:
    try:
        block = decode_object(raw)
    except DecodeError as exc:
        raise ToolError(f"Failed to parse tool call: {exc.detail}") from exc

    name = block.get("name")
    if not isinstance(name, str):
        raise ToolError("Invalid tool call format - missing name")

    arguments = block.get("arguments")
    if not isinstance(arguments, dict):
        raise ToolError("Invalid tool call format - missing or invalid arguments")

    return LocalToolCall(name=name, arguments=arguments)
