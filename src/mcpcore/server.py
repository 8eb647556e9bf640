"""Server — the facade transports talk to.

One server holds immutable registries, an opaque context, and a configuration,
and turns one JSON-RPC message into at most one JSON-RPC message::

    server = Server("weather", tools=[forecast], context={"user": user})
    reply = server.handle_json(line)     # str | None
    reply = server.handle(message)       # dict | None

A server never mutates its own state after construction, so a single instance
may be shared across threads as long as its tool and prompt handlers allow it.
Faults raised by prompt handlers (and any other unexpected fault) are reported
and then propagate out of :meth:`Server.handle`; the transport decides how to
surface them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from mcpcore.config import Configuration, get_default_configuration, get_protocol_version
from mcpcore.envelope import ExecutionEnvelope
from mcpcore.errors import RpcFault
from mcpcore.messages import (
    JsonRpcRequest,
    JsonRpcResponse,
    error_response,
    parse_request,
    serialize_response,
    success_response,
)
from mcpcore.prompts import Prompt, PromptRegistry
from mcpcore.router import MethodRouter
from mcpcore.tools import Tool, ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_SERVER_VERSION = "0.1.0"


class Server:
    """An MCP server: name, protocol version, tools, prompts, and context.

    Parameters
    ----------
    name:
        Reported in ``serverInfo``.
    version:
        The server's own version, reported in ``serverInfo``.
    protocol_version:
        Protocol version to announce.  Defaults to the process-wide value in
        effect at construction (see :func:`mcpcore.config.set_protocol_version`).
    tools, prompts:
        Definitions or ready-made registries.  Names must be unique.
    context:
        Opaque mapping handed unchanged to every handler call.
    configuration:
        Reporter and instrumentation hooks.  Defaults to the process-wide
        default configuration in effect at construction.
    """

    def __init__(
        self,
        name: str,
        *,
        version: str = DEFAULT_SERVER_VERSION,
        protocol_version: str | None = None,
        tools: ToolRegistry | Iterable[Tool] = (),
        prompts: PromptRegistry | Iterable[Prompt] = (),
        context: Mapping[str, Any] | None = None,
        configuration: Configuration | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.protocol_version = protocol_version or get_protocol_version()
        self.tools = tools if isinstance(tools, ToolRegistry) else ToolRegistry(tools)
        self.prompts = prompts if isinstance(prompts, PromptRegistry) else PromptRegistry(prompts)
        self.context: Mapping[str, Any] = context if context is not None else {}
        self.configuration = configuration or get_default_configuration()
        self._router = MethodRouter(self)
        self._envelope = ExecutionEnvelope(self._router, self.configuration)

    def __repr__(self) -> str:
        return (
            f"Server(name={self.name!r}, protocol_version={self.protocol_version!r}, "
            f"tools={self.tools.names()!r}, prompts={self.prompts.names()!r})"
        )

    def handle(self, message: Mapping[str, Any]) -> dict[str, Any] | None:
        """Handle one parsed JSON-RPC message; ``None`` for notifications."""
        try:
            request = parse_request(message)
        except RpcFault as fault:
            return error_response(fault.request_id, fault).to_dict()
        response = self._respond(request)
        return response.to_dict() if response is not None else None

    def handle_json(self, raw: str | bytes) -> str | None:
        """Handle one raw JSON-RPC message; ``None`` for notifications."""
        try:
            request = parse_request(raw)
        except RpcFault as fault:
            logger.debug("Rejected payload: %s", fault.message)
            return serialize_response(error_response(fault.request_id, fault))
        return serialize_response(self._respond(request))

    def _respond(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        try:
            result = self._envelope.run(request)
        except RpcFault as fault:
            if request.is_notification:
                return None
            return error_response(request.id, fault)
        if request.is_notification:
            return None
        return success_response(request.id, result)
