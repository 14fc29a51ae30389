"""Bridges between registered tools and external function-calling formats."""

from mcpcore.bridges.base import ToolBridge, parse_schema_document, sanitize_tool_name
from mcpcore.bridges.local import ExtractionMode, LocalModelBridge
from mcpcore.bridges.local_model import LocalModelHandler, TextGenerator
from mcpcore.bridges.models import (
    FunctionSchema,
    LocalFunction,
    LocalFunctionDefinition,
    LocalToolCall,
    OpenAIFunction,
    OpenAIFunctionCall,
    OpenAIFunctionDefinition,
    OpenAIToolCall,
    OpenAIToolResponse,
)
from mcpcore.bridges.openai import OpenAIBridge
from mcpcore.bridges.registry import BridgedToolRegistry, LocalToolRegistry, OpenAIToolRegistry

__all__ = [
    "BridgedToolRegistry",
    "ExtractionMode",
    "FunctionSchema",
    "LocalFunction",
    "LocalFunctionDefinition",
    "LocalModelBridge",
    "LocalModelHandler",
    "LocalToolCall",
    "LocalToolRegistry",
    "OpenAIBridge",
    "OpenAIFunction",
    "OpenAIFunctionCall",
    "OpenAIFunctionDefinition",
    "OpenAIToolCall",
    "OpenAIToolRegistry",
    "OpenAIToolResponse",
    "TextGenerator",
    "ToolBridge",
    "parse_schema_document",
    "sanitize_tool_name",
]
