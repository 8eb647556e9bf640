"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from mcpcore.server import Server  # noqa: TC001

console = Console()


def print_server(server: Server, *, as_json: bool = False) -> None:
    """Pretty-print a server's identity, tools, and prompts."""
    tools = server.tools.definitions()
    prompts = server.prompts.definitions()

    if as_json:
        data = {
            "name": server.name,
            "version": server.version,
            "protocolVersion": server.protocol_version,
            "tools": tools,
            "prompts": prompts,
        }
        console.print_json(json.dumps(data, default=str))
        return

    console.print(f"\n[bold]{server.name}[/bold] {server.version}")
    console.print(f"  Protocol version: {server.protocol_version}")

    if tools:
        print_tools_table(tools)
    else:
        console.print("[yellow]No tools registered.[/yellow]")

    if prompts:
        print_prompts_table(prompts)
    else:
        console.print("[yellow]No prompts registered.[/yellow]")


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print ``tools/list`` entries as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")
    table.add_column("Hints")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        hints = ", ".join(k for k, v in tool.get("annotations", {}).items() if v is True)
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            ", ".join(schema.get("required", [])) or "-",
            hints or "-",
        )

    console.print(table)


def print_prompts_table(prompts: list[dict[str, Any]]) -> None:
    """Pretty-print ``prompts/list`` entries as a table."""
    table = Table(title="Prompts")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Arguments")

    for prompt in prompts:
        arguments = ", ".join(
            a["name"] + ("*" if a.get("required") else "") for a in prompt.get("arguments", [])
        )
        table.add_row(
            prompt.get("name", "?"),
            _truncate(prompt.get("description", "")),
            arguments or "-",
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
