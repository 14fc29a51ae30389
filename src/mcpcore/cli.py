"""mcpcore CLI entrypoint."""

from __future__ import annotations

import logging

import click

from mcpcore import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mcpcore")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Dispatch JSON-RPC requests to registered tools."""
    if verbose:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


# Register subcommands
from mcpcore.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
