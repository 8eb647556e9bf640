"""Reference transports for serving an MCP server."""

from mcpcore.transport.stdio import StdioTransport

__all__ = ["StdioTransport"]
