"""Message model — JSON-RPC 2.0 requests, responses, and error objects.

Implements the envelope used by the Model Context Protocol.  Parsing is strict
(anything that is not a single JSON-RPC 2.0 request object is rejected with the
matching :mod:`mcpcore.errors` fault); serialization performs no further
validation.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from mcpcore.errors import InvalidRequestError, ParseError, RpcFault

RequestId = str | int | float | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification.

    A payload without an ``id`` member is a notification; ``"id": null`` is an
    ordinary request whose id happens to be null.
    """

    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: RequestId = None
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set

    @property
    def arguments(self) -> dict[str, Any]:
        """``params`` or an empty mapping."""
        return dict(self.params or {})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "method": self.method}
        if not self.is_notification:
            data["id"] = self.id
        if self.params is not None:
            data["params"] = self.params
        return data


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    @classmethod
    def from_fault(cls, fault: RpcFault) -> JsonRpcError:
        return cls(code=fault.code, message=fault.message, data=fault.data)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            data["data"] = self.data
        return data


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response carrying exactly one of ``result`` or ``error``."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def _one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            msg = "a response carries exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.to_dict()
        else:
            data["result"] = self.result
        return data


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def success_response(request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
    return JsonRpcResponse(id=request_id, result=result)


def error_response(request_id: RequestId, error: JsonRpcError | RpcFault) -> JsonRpcResponse:
    if isinstance(error, RpcFault):
        error = JsonRpcError.from_fault(error)
    return JsonRpcResponse(id=request_id, error=error)


# ---------------------------------------------------------------------------
# Parsing and serialization
# ---------------------------------------------------------------------------


def _valid_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int, float))


def parse_request(raw: str | bytes | Mapping[str, Any]) -> JsonRpcRequest:
    """Parse *raw* into a :class:`JsonRpcRequest`.

    Raises:
        ParseError: *raw* is text that is not well-formed JSON.
        InvalidRequestError: the value is not a single JSON-RPC 2.0 request
            object.  The fault carries the request id when one was readable.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            payload: Any = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as exc:
            raise ParseError("Parse error", data=str(exc)) from exc
    else:
        payload = raw

    if not isinstance(payload, Mapping):
        raise InvalidRequestError("Invalid Request", data="request must be a JSON object")

    request_id = payload.get("id")
    if not _valid_id(request_id):
        raise InvalidRequestError("Invalid Request", data="id must be a string, number or null")

    if payload.get("jsonrpc") != "2.0":
        raise InvalidRequestError(
            "Invalid Request", data="jsonrpc must be exactly '2.0'", request_id=request_id
        )
    if not isinstance(payload.get("method"), str):
        raise InvalidRequestError(
            "Invalid Request", data="method must be a string", request_id=request_id
        )
    params = payload.get("params")
    if params is not None and not isinstance(params, Mapping):
        raise InvalidRequestError(
            "Invalid Request", data="params must be an object", request_id=request_id
        )

    try:
        return JsonRpcRequest.model_validate(dict(payload))
    except ValidationError as exc:
        raise InvalidRequestError(
            "Invalid Request", data=str(exc), request_id=request_id
        ) from exc


def serialize_response(response: JsonRpcResponse | None) -> str | None:
    """Serialize *response* to compact JSON text; ``None`` stays ``None``."""
    if response is None:
        return None
    return json.dumps(response.to_dict(), separators=(",", ":"))
