"""Shared error types for the MCP server core.

:class:`RpcFault` subclasses are the faults that become JSON-RPC ``error``
objects on the wire.  Anything else raised while handling a request is an
unexpected fault: it is reported and either converted into an ``isError``
tool result or propagated to the transport.
"""

from __future__ import annotations

from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class MCPError(Exception):
    """Base error for all mcpcore failures."""


class DefinitionError(MCPError):
    """A Tool or Prompt definition is invalid or clashes with another one."""


class RpcFault(MCPError):
    """A fault that is answered with a JSON-RPC error object.

    ``error_type`` is the short tag reported to the instrumentation callback
    (``"tool_not_found"``, ``"invalid_schema"``...).
    """

    code: int = INTERNAL_ERROR
    error_type: str | None = None

    def __init__(
        self,
        message: str,
        *,
        data: Any = None,
        request_id: Any = None,
        error_type: str | None = None,
    ) -> None:
        self.message = message
        self.data = data
        self.request_id = request_id
        if error_type is not None:
            self.error_type = error_type
        super().__init__(message)


class ParseError(RpcFault):
    """The payload is not well-formed JSON."""

    code = PARSE_ERROR


class InvalidRequestError(RpcFault):
    """The payload is JSON but not a valid JSON-RPC 2.0 request."""

    code = INVALID_REQUEST


class MethodNotFoundError(RpcFault):
    """The requested method is not part of the supported surface."""

    code = METHOD_NOT_FOUND
    error_type = "method_not_found"

    def __init__(self, method: str, *, request_id: Any = None) -> None:
        self.method = method
        super().__init__(
            f"Method not found: {method}", data={"method": method}, request_id=request_id
        )


class InvalidParamsError(RpcFault):
    """The method exists but its params are unusable."""

    code = INVALID_PARAMS
    error_type = "invalid_params"


class ToolNotFoundError(InvalidParamsError):
    """Requested tool does not exist in the server's registry."""

    error_type = "tool_not_found"

    def __init__(self, name: str, *, request_id: Any = None) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}", data={"name": name}, request_id=request_id)


class PromptNotFoundError(InvalidParamsError):
    """Requested prompt does not exist in the server's registry."""

    error_type = "prompt_not_found"

    def __init__(self, name: str, *, request_id: Any = None) -> None:
        self.name = name
        super().__init__(
            f"Prompt not found: {name}", data={"name": name}, request_id=request_id
        )
