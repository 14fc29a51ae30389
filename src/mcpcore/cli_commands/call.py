"""``mcpcore call`` — dispatch one JSON-RPC request and print the response."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from mcpcore.cli_commands._output import console, print_response


@click.command()
@click.argument("request")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file naming the tools to register.",
)
def call(request: str, config_path: str | None) -> None:
    """Dispatch REQUEST and print the JSON-RPC response.

    REQUEST is the JSON payload itself, or @PATH to read it from a file.
    Exits with status 1 when the response is an error.
    """
    from mcpcore.config import ConfigError, apply_telemetry, build_registry, load_config
    from mcpcore.protocol.client import MCPClient
    from mcpcore.protocol.json_value import decode_object

    if request.startswith("@"):
        try:
            payload = Path(request[1:]).read_bytes()
        except OSError as exc:
            console.print(f"[red]Cannot read request:[/red] {exc}")
            sys.exit(1)
    else:
        payload = request.encode("utf-8")

    try:
        config = load_config(Path(config_path) if config_path else None)
        registry = build_registry(config)
    except ConfigError as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    apply_telemetry(config)

    responses: list[str] = []
    client = MCPClient(registry, responses.append)
    asyncio.run(client.handle_incoming_message(payload))

    print_response(responses[0])
    if "error" in decode_object(responses[0]):
        sys.exit(1)
