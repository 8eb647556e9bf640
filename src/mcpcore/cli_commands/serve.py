"""``mcpcore serve`` — run a server over the stdio transport."""

from __future__ import annotations

import click

from mcpcore.cli_commands._target import load_server
from mcpcore.config import set_protocol_version
from mcpcore.transport.stdio import StdioTransport
from mcpcore.utils.telemetry import configure_telemetry


@click.command("serve")
@click.argument("target")
@click.option(
    "--protocol-version",
    envvar="MCPCORE_PROTOCOL_VERSION",
    default=None,
    help="Pin the protocol version announced by servers built at load time.",
)
@click.option("--trace-console", is_flag=True, help="Export trace spans to stderr.")
@click.option(
    "--otlp-endpoint",
    envvar="MCPCORE_OTLP_ENDPOINT",
    default=None,
    help="Export trace spans via OTLP/gRPC to this endpoint.",
)
def serve(
    target: str,
    protocol_version: str | None,
    trace_console: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve an MCP server over stdin/stdout.

    TARGET is ``module:attribute`` naming a Server, or a callable returning one.
    Tracing options require the ``otel`` extra.
    """
    if protocol_version:
        set_protocol_version(protocol_version)
    server = load_server(target)

    if trace_console or otlp_endpoint:
        try:
            configure_telemetry(
                service_name=server.name,
                export_to_console=trace_console,
                otlp_endpoint=otlp_endpoint,
            )
        except ImportError as exc:
            raise click.ClickException(str(exc)) from exc

    StdioTransport(server).serve_forever()
