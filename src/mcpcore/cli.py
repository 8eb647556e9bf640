"""mcpcore CLI entrypoint."""

from __future__ import annotations

import logging
import sys

import click

from mcpcore import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mcpcore")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for stderr logging.",
)
def main(log_level: str) -> None:
    """mcpcore — serve and inspect MCP servers."""
    logging.basicConfig(
        level=log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from mcpcore.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
