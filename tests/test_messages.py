"""Tests for JSON-RPC message parsing and serialization."""

import json

import pytest
from pydantic import ValidationError

from mcpcore.errors import INVALID_REQUEST, PARSE_ERROR, InvalidRequestError, ParseError
from mcpcore.messages import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    error_response,
    parse_request,
    serialize_response,
    success_response,
)


class TestParseRequest:
    def test_parses_text(self) -> None:
        req = parse_request('{"jsonrpc": "2.0", "id": 7, "method": "ping"}')
        assert req.method == "ping"
        assert req.id == 7
        assert req.params is None
        assert not req.is_notification

    def test_parses_bytes(self) -> None:
        req = parse_request(b'{"jsonrpc": "2.0", "id": "a", "method": "ping"}')
        assert req.id == "a"

    def test_parses_mapping(self) -> None:
        req = parse_request({"jsonrpc": "2.0", "id": 1, "method": "tools/list", "params": {}})
        assert req.params == {}

    def test_missing_id_is_notification(self) -> None:
        req = parse_request({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert req.is_notification

    def test_null_id_is_not_notification(self) -> None:
        req = parse_request({"jsonrpc": "2.0", "id": None, "method": "ping"})
        assert not req.is_notification
        assert req.id is None

    def test_malformed_json_is_parse_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_request("{not json")
        assert exc_info.value.code == PARSE_ERROR
        assert exc_info.value.request_id is None

    def test_array_is_invalid_request(self) -> None:
        with pytest.raises(InvalidRequestError):
            parse_request('[{"jsonrpc": "2.0", "id": 1, "method": "ping"}]')

    def test_wrong_version_is_invalid_request(self) -> None:
        with pytest.raises(InvalidRequestError) as exc_info:
            parse_request({"jsonrpc": "1.0", "id": 3, "method": "ping"})
        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.request_id == 3

    def test_missing_method_is_invalid_request(self) -> None:
        with pytest.raises(InvalidRequestError, match="Invalid Request"):
            parse_request({"jsonrpc": "2.0", "id": 1})

    def test_non_string_method_is_invalid_request(self) -> None:
        with pytest.raises(InvalidRequestError):
            parse_request({"jsonrpc": "2.0", "id": 1, "method": 5})

    def test_array_params_are_invalid(self) -> None:
        with pytest.raises(InvalidRequestError):
            parse_request({"jsonrpc": "2.0", "id": 1, "method": "ping", "params": [1]})

    def test_object_id_is_invalid(self) -> None:
        with pytest.raises(InvalidRequestError) as exc_info:
            parse_request({"jsonrpc": "2.0", "id": {"x": 1}, "method": "ping"})
        assert exc_info.value.request_id is None

    def test_boolean_id_is_invalid(self) -> None:
        with pytest.raises(InvalidRequestError):
            parse_request({"jsonrpc": "2.0", "id": True, "method": "ping"})


class TestJsonRpcRequest:
    def test_frozen(self) -> None:
        req = JsonRpcRequest(method="ping", id=1)
        with pytest.raises(ValidationError):
            req.method = "other"  # type: ignore[misc]

    def test_to_dict_omits_id_for_notifications(self) -> None:
        req = parse_request({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert "id" not in req.to_dict()

    def test_to_dict_round_trips(self) -> None:
        raw = {"jsonrpc": "2.0", "id": "x-1", "method": "tools/call", "params": {"name": "a"}}
        assert parse_request(raw).to_dict() == raw

    def test_arguments_default_to_empty(self) -> None:
        assert JsonRpcRequest(method="ping", id=1).arguments == {}


class TestJsonRpcResponse:
    def test_requires_exactly_one_outcome(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcResponse(id=1)
        with pytest.raises(ValidationError):
            JsonRpcResponse(
                id=1, result={}, error=JsonRpcError(code=-32600, message="Invalid Request")
            )

    def test_success_shape(self) -> None:
        data = success_response(5, {"tools": []}).to_dict()
        assert data == {"jsonrpc": "2.0", "id": 5, "result": {"tools": []}}

    def test_error_shape_omits_empty_data(self) -> None:
        data = error_response(None, JsonRpcError(code=-32700, message="Parse error")).to_dict()
        assert data == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32700, "message": "Parse error"},
        }

    def test_error_from_fault(self) -> None:
        fault = InvalidRequestError("Invalid Request", data="bad", request_id=9)
        data = error_response(fault.request_id, fault).to_dict()
        assert data["id"] == 9
        assert data["error"] == {"code": -32600, "message": "Invalid Request", "data": "bad"}


class TestSerializeResponse:
    def test_none_stays_none(self) -> None:
        assert serialize_response(None) is None

    def test_round_trip(self) -> None:
        text = serialize_response(success_response("abc", {"content": [], "isError": False}))
        assert text is not None
        restored = JsonRpcResponse.model_validate(json.loads(text))
        assert restored.id == "abc"
        assert restored.result == {"content": [], "isError": False}

    def test_compact(self) -> None:
        text = serialize_response(success_response(1, {}))
        assert text == '{"jsonrpc":"2.0","id":1,"result":{}}'
