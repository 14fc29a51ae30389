"""Wire shapes of the external function-calling conventions.

OpenAI-style payloads embed the parameter schema and call arguments as JSON
strings; local-model payloads carry them as structured objects.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, JsonValue

# ---------------------------------------------------------------------------
# Internal function schema (parsed tool schema document)
# ---------------------------------------------------------------------------


class FunctionSchema(BaseModel):
    """The ``function`` member of a tool schema document."""

    name: str
    description: str
    parameters: dict[str, JsonValue]


# ---------------------------------------------------------------------------
# OpenAI-style chat completion
# ---------------------------------------------------------------------------


class OpenAIFunctionDefinition(BaseModel):
    """Function definition with ``parameters`` as an embedded JSON string."""

    name: str
    description: str
    parameters: str


class OpenAIFunction(BaseModel):
    """A tool entry in a chat completion request."""

    type: Literal["function"] = "function"
    function: OpenAIFunctionDefinition


class OpenAIFunctionCall(BaseModel):
    name: str
    arguments: str


class OpenAIToolCall(BaseModel):
    """A tool call emitted by the remote model."""

    id: str
    type: Literal["function"] = "function"
    function: OpenAIFunctionCall


class OpenAIToolResponse(BaseModel):
    """A tool-role message answering an :class:`OpenAIToolCall`."""

    tool_call_id: str
    content: str


# ---------------------------------------------------------------------------
# Local model (tool-call markup in generated text)
# ---------------------------------------------------------------------------


class LocalFunctionDefinition(BaseModel):
    """Function definition with ``parameters`` as a structured object."""

    name: str
    description: str
    parameters: dict[str, JsonValue]


class LocalFunction(BaseModel):
    type: Literal["function"] = "function"
    function: LocalFunctionDefinition


class LocalToolCall(BaseModel):
    """A tool call found in ``<tool_call>`` markup."""

    name: str
    arguments: dict[str, JsonValue] = {}
