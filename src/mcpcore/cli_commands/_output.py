"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from mcpcore.bridges.models import LocalToolCall

console = Console()


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print a list of tool schemas as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")

    for tool in tools:
        func = tool.get("function", {})
        table.add_row(
            func.get("name", "?"),
            _truncate(func.get("description", "")),
        )

    console.print(table)


def print_response(raw: str) -> None:
    """Pretty-print a serialized JSON-RPC response."""
    console.print_json(raw)


def print_tool_calls(calls: list[LocalToolCall], *, as_json: bool = False) -> None:
    """Print tool calls extracted from model output."""
    if as_json:
        console.print_json(json.dumps([call.model_dump() for call in calls]))
        return

    table = Table(title="Tool Calls")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Arguments")

    for index, call in enumerate(calls, start=1):
        table.add_row(str(index), call.name, _truncate(json.dumps(call.arguments)))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
