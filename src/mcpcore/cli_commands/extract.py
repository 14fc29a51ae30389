"""``mcpcore extract`` — find ``<tool_call>`` blocks in model output."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from mcpcore.cli_commands._output import console, print_tool_calls


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--strict", is_flag=True, help="Fail on the first malformed block.")
@click.option("--json", "as_json", is_flag=True, help="Print calls as JSON.")
def extract(file: str, strict: bool, as_json: bool) -> None:
    """Extract tool calls from the model output in FILE."""
    from mcpcore.bridges.local import ExtractionMode, LocalModelBridge
    from mcpcore.protocol.errors import ToolError

    text = Path(file).read_text(encoding="utf-8")
    mode = ExtractionMode.STRICT if strict else ExtractionMode.BEST_EFFORT

    try:
        calls = LocalModelBridge().extract_calls(text, mode)
    except ToolError as exc:
        console.print(f"[red]Extraction error:[/red] {exc}")
        sys.exit(1)

    if not calls:
        console.print("[yellow]No tool calls found.[/yellow]")
        return

    print_tool_calls(calls, as_json=as_json)
