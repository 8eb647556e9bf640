"""``mcpcore list`` — show the tools and prompts a server registers."""

from __future__ import annotations

import click

from mcpcore.cli_commands._output import print_server
from mcpcore.cli_commands._target import load_server


@click.command("list")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def list_cmd(target: str, as_json: bool) -> None:
    """List the tools and prompts of a server.

    TARGET is ``module:attribute`` naming a Server, or a callable returning one.
    """
    print_server(load_server(target), as_json=as_json)
