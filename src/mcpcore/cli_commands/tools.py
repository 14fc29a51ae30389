"""``mcpcore tools`` — list registered tools in native or bridged form."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from mcpcore.cli_commands._output import console, print_tools_table


@click.group()
def tools() -> None:
    """Inspect registered tools."""


@tools.command("list")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file naming the tools to register.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["native", "openai", "local"]),
    default="native",
    help="Schema format to show.",
)
@click.option("--json", "as_json", is_flag=True, help="Print schemas as JSON.")
def list_tools(config_path: str | None, fmt: str, as_json: bool) -> None:
    """List the tools a config registers."""
    from mcpcore.bridges.local import LocalModelBridge
    from mcpcore.bridges.registry import LocalToolRegistry, OpenAIToolRegistry
    from mcpcore.config import ConfigError, build_registry, load_config
    from mcpcore.protocol.errors import MCPError

    try:
        config = load_config(Path(config_path) if config_path else None)
        registry = build_registry(config)
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    schemas: list[dict[str, Any]]
    try:
        if fmt == "openai":
            openai_registry = OpenAIToolRegistry()
            for tool in registry.tools():
                openai_registry.register(tool)
            schemas = [function.model_dump() for function in openai_registry.functions()]
        elif fmt == "local":
            local_registry = LocalToolRegistry(LocalModelBridge(config.extraction_mode))
            for tool in registry.tools():
                local_registry.register(tool)
            schemas = local_registry.functions()
        else:
            schemas = [json.loads(tool.tool_schema) for tool in registry.tools()]
    except (MCPError, ValueError) as exc:
        console.print(f"[red]Schema error:[/red] {exc}")
        sys.exit(1)

    if not schemas:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    if as_json:
        console.print_json(json.dumps(schemas))
        return

    print_tools_table(schemas)
