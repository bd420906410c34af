"""Protocol models — JSON-RPC 2.0 messages, tool descriptors and tool results.

Implements the message format used by the Model Context Protocol for
the handshake (``initialize``), tool discovery (``tools/list``) and
execution (``tools/call``).
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

# ---------------------------------------------------------------------------
# Method set
# ---------------------------------------------------------------------------


class Method(str, Enum):
    """Protocol methods the server understands."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    INITIALIZED = "notifications/initialized"

    @classmethod
    def lookup(cls, name: str) -> Method | None:
        """Return the member for *name*, or ``None`` for unrecognized methods."""
        try:
            return cls(name)
        except ValueError:
            return None


class MessageKind(str, Enum):
    """Whether an inbound message expects an answer."""

    NOTIFICATION = "notification"
    CALL = "call"


# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A parsed inbound JSON-RPC message.

    ``id`` is kept exactly as decoded so it can be echoed with its
    original JSON type. A missing or ``null`` id marks a notification.
    """

    model_config = ConfigDict(frozen=True)

    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: Any = Field(default_factory=dict)
    id: Any = None

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def kind(self) -> MessageKind:
        return MessageKind.NOTIFICATION if self.id is None else MessageKind.CALL


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    model_config = ConfigDict(frozen=True)

    jsonrpc: str = JSONRPC_VERSION
    id: Any
    result: dict[str, Any] = Field(default_factory=dict)

    def to_line(self) -> str:
        """Serialize to a single line of compact, ASCII-only JSON (no trailing newline).

        Raises:
            ValueError: If the payload holds a float JSON cannot represent.
        """
        payload = {"jsonrpc": self.jsonrpc, "id": self.id, "result": self.result}
        return json.dumps(payload, separators=(",", ":"), allow_nan=False)


# ---------------------------------------------------------------------------
# Tool descriptors
# ---------------------------------------------------------------------------


class ToolProperty(BaseModel):
    """One named input of a tool.

    ``default`` is what argument extraction substitutes when the caller
    omits the property or sends a value of the wrong type.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["string", "integer"] = "string"
    description: str = ""
    required: bool = False
    default: Any = None


class ToolDescriptor(BaseModel):
    """Static metadata for a tool, as advertised by ``tools/list``."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    properties: tuple[ToolProperty, ...] = ()

    @property
    def required(self) -> list[str]:
        return [p.name for p in self.properties if p.required]

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema object describing the tool's arguments."""
        properties: dict[str, Any] = {}
        for prop in self.properties:
            schema: dict[str, Any] = {"type": prop.type}
            if prop.description:
                schema["description"] = prop.description
            properties[prop.name] = schema
        return {"type": "object", "properties": properties, "required": self.required}

    def to_wire(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# ---------------------------------------------------------------------------
# Tool results
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """The ``result`` body of a ``tools/call`` response."""

    content: list[TextContent] = []
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> CallToolResult:
        """Wrap a provider payload as a single JSON text part."""
        if isinstance(payload, str):
            text = payload
        else:
            text = json.dumps(
                payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
            )
        return cls(content=[TextContent(text=text)])

    @classmethod
    def failure(cls, text: str) -> CallToolResult:
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": [part.model_dump() for part in self.content]}
        if self.is_error:
            payload["isError"] = True
        return payload
