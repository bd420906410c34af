"""Tests for JSON-RPC and tool models."""

import json

import pytest

from gitmcp.protocol.models import (
    CallToolResult,
    JsonRpcRequest,
    JsonRpcResponse,
    MessageKind,
    Method,
    ToolDescriptor,
    ToolProperty,
)


class TestMethod:
    def test_lookup_known(self) -> None:
        assert Method.lookup("tools/call") is Method.TOOLS_CALL
        assert Method.lookup("notifications/initialized") is Method.INITIALIZED

    def test_lookup_unknown(self) -> None:
        assert Method.lookup("resources/list") is None


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.params == {}
        assert req.id is None

    def test_null_params_become_empty(self) -> None:
        req = JsonRpcRequest.model_validate({"method": "initialize", "params": None, "id": 1})
        assert req.params == {}

    def test_kind(self) -> None:
        assert JsonRpcRequest(method="x").kind is MessageKind.NOTIFICATION
        assert JsonRpcRequest(method="x", id=0).kind is MessageKind.CALL
        assert JsonRpcRequest(method="x", id="").kind is MessageKind.CALL

    def test_id_keeps_json_type(self) -> None:
        assert JsonRpcRequest.model_validate({"method": "x", "id": "7"}).id == "7"
        assert JsonRpcRequest.model_validate({"method": "x", "id": 7}).id == 7


class TestJsonRpcResponse:
    def test_to_line_is_compact_single_line(self) -> None:
        line = JsonRpcResponse(id=1, result={"a": [1, 2]}).to_line()
        assert line == '{"jsonrpc":"2.0","id":1,"result":{"a":[1,2]}}'
        assert "\n" not in line

    def test_to_line_string_id(self) -> None:
        line = JsonRpcResponse(id="abc", result={}).to_line()
        assert json.loads(line)["id"] == "abc"

    def test_to_line_escapes_newlines_in_payload(self) -> None:
        line = JsonRpcResponse(id=1, result={"text": "a\nb"}).to_line()
        assert "\n" not in line
        assert json.loads(line)["result"]["text"] == "a\nb"

    def test_to_line_is_ascii_only(self) -> None:
        line = JsonRpcResponse(id="\ud800", result={"text": "caf\u00e9"}).to_line()
        assert line.isascii()
        line.encode("utf-8")
        assert json.loads(line)["result"]["text"] == "caf\u00e9"

    def test_to_line_rejects_nan(self) -> None:
        with pytest.raises(ValueError):
            JsonRpcResponse(id=float("nan"), result={}).to_line()


class TestToolDescriptor:
    def test_input_schema(self) -> None:
        tool = ToolDescriptor(
            name="get_file_tree",
            description="Explore",
            properties=(
                ToolProperty(name="url", required=True, default=""),
                ToolProperty(name="branch", description="Ref to list"),
            ),
        )
        assert tool.to_wire() == {
            "name": "get_file_tree",
            "description": "Explore",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "url": {"type": "string"},
                    "branch": {"type": "string", "description": "Ref to list"},
                },
                "required": ["url"],
            },
        }


class TestCallToolResult:
    def test_success_serializes_payload(self) -> None:
        result = CallToolResult.success({"tags": ["v1.0.0"]})
        assert result.to_payload() == {
            "content": [{"type": "text", "text": '{"tags":["v1.0.0"]}'}]
        }

    def test_success_keeps_strings(self) -> None:
        assert CallToolResult.success("plain").text == "plain"

    def test_failure(self) -> None:
        payload = CallToolResult.failure("Tool 'x' not found").to_payload()
        assert payload["isError"] is True
        assert payload["content"] == [{"type": "text", "text": "Tool 'x' not found"}]
