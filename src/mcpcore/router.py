"""MethodRouter — maps JSON-RPC method names to the built-in MCP handlers.

The method surface is fixed by the protocol; names are matched by exact string
equality.  Handlers take the parsed request and the request's
:class:`~mcpcore.envelope.InstrumentationEvent`, fill in the event fields they
own, and return the ``result`` payload or raise an :class:`~mcpcore.errors.RpcFault`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcpcore.errors import (
    InvalidParamsError,
    MethodNotFoundError,
    PromptNotFoundError,
    ToolNotFoundError,
)
from mcpcore.tools import ToolFailed

if TYPE_CHECKING:
    from mcpcore.envelope import InstrumentationEvent
    from mcpcore.messages import JsonRpcRequest
    from mcpcore.server import Server

logger = logging.getLogger(__name__)

INITIALIZE = "initialize"
PING = "ping"
TOOLS_LIST = "tools/list"
TOOLS_CALL = "tools/call"
PROMPTS_LIST = "prompts/list"
PROMPTS_GET = "prompts/get"

SUPPORTED_METHODS = (INITIALIZE, PING, TOOLS_LIST, TOOLS_CALL, PROMPTS_LIST, PROMPTS_GET)

# Client notifications that are acknowledged silently.
NOTIFICATION_INITIALIZED = "notifications/initialized"
NOTIFICATION_CANCELLED = "notifications/cancelled"

# Instrumentation ``method`` for names outside the supported surface.
UNSUPPORTED_METHOD = "unsupported_method"

TOOL_FAILURE_MESSAGE = "Internal error occurred"

Handler = Callable[["JsonRpcRequest", "InstrumentationEvent"], dict[str, Any]]


class MethodRouter:
    """Dispatches requests for one :class:`~mcpcore.server.Server`.

    Usage::

        router = MethodRouter(server)
        result = router.dispatch(request, event)
    """

    def __init__(self, server: Server) -> None:
        self._server = server
        self._handlers: dict[str, Handler] = {
            INITIALIZE: self._initialize,
            PING: self._ping,
            TOOLS_LIST: self._list_tools,
            TOOLS_CALL: self._call_tool,
            PROMPTS_LIST: self._list_prompts,
            PROMPTS_GET: self._get_prompt,
        }
        self._notification_handlers: dict[str, Handler] = {
            NOTIFICATION_INITIALIZED: self._acknowledge,
            NOTIFICATION_CANCELLED: self._acknowledge,
        }

    def supports(self, method: str) -> bool:
        return method in self._handlers

    def dispatch(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        """Run the handler registered for ``request.method``."""
        handler = self._handlers.get(request.method)
        if handler is None and request.is_notification:
            handler = self._notification_handlers.get(request.method)
        if handler is None:
            event.method = UNSUPPORTED_METHOD
            raise MethodNotFoundError(request.method, request_id=request.id)
        event.method = request.method
        return handler(request, event)

    # -- lifecycle ----------------------------------------------------------

    def _initialize(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        server = self._server
        capabilities: dict[str, Any] = {}
        if len(server.tools):
            capabilities["tools"] = {"listChanged": False}
        if len(server.prompts):
            capabilities["prompts"] = {"listChanged": False}
        return {
            "protocolVersion": server.protocol_version,
            "capabilities": capabilities,
            "serverInfo": {"name": server.name, "version": server.version},
        }

    def _ping(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        return {}

    def _acknowledge(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        logger.debug("Received %s", request.method)
        return {}

    # -- tools --------------------------------------------------------------

    def _list_tools(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        return {"tools": self._server.tools.definitions()}

    def _call_tool(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        params = request.arguments
        name = _require_name(params, request)
        tool = self._server.tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name, request_id=request.id)
        event.tool_name = name

        arguments = _arguments(params, request)
        if self._server.configuration.validate_tool_call_arguments:
            tool.validate_arguments(arguments)

        outcome = tool.invoke(arguments, self._server.context)
        if isinstance(outcome, ToolFailed):
            self._server.configuration.report_exception(
                outcome.fault, {"tool_name": name, "arguments": arguments}
            )
            return {"error": TOOL_FAILURE_MESSAGE, "isError": True}
        return outcome.response.to_result()

    # -- prompts ------------------------------------------------------------

    def _list_prompts(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        return {"prompts": self._server.prompts.definitions()}

    def _get_prompt(self, request: JsonRpcRequest, event: InstrumentationEvent) -> dict[str, Any]:
        params = request.arguments
        name = _require_name(params, request)
        prompt = self._server.prompts.get(name)
        if prompt is None:
            raise PromptNotFoundError(name, request_id=request.id)
        event.prompt_name = name

        arguments = _arguments(params, request)
        prompt.validate_arguments(arguments)
        return prompt.render(arguments, self._server.context).to_result()


def _require_name(params: dict[str, Any], request: JsonRpcRequest) -> str:
    name = params.get("name")
    if not isinstance(name, str):
        raise InvalidParamsError(
            f"{request.method} requires a string 'name'", request_id=request.id
        )
    return name


def _arguments(params: dict[str, Any], request: JsonRpcRequest) -> dict[str, Any]:
    arguments = params.get("arguments")
    if arguments is None:
        return {}
    if not isinstance(arguments, dict):
        raise InvalidParamsError(
            f"{request.method} 'arguments' must be an object", request_id=request.id
        )
    return arguments
