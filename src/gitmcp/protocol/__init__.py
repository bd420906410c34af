"""Protocol layer — JSON-RPC models, tool registry, dispatcher and transport."""

from gitmcp.protocol.dispatcher import Dispatcher
from gitmcp.protocol.errors import (
    ParseError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
    TransportClosedError,
    UpstreamError,
)
from gitmcp.protocol.models import (
    CallToolResult,
    JsonRpcRequest,
    JsonRpcResponse,
    MessageKind,
    Method,
    ToolDescriptor,
    ToolProperty,
)
from gitmcp.protocol.registry import ToolRegistry
from gitmcp.protocol.transport import StdioTransport

__all__ = [
    "CallToolResult",
    "Dispatcher",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MessageKind",
    "Method",
    "ParseError",
    "ProtocolError",
    "StdioTransport",
    "ToolDescriptor",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolProperty",
    "ToolRegistry",
    "TransportClosedError",
    "UpstreamError",
]
