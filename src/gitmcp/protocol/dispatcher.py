"""Dispatcher — turns one inbound line into zero or one responses.

Parse failures are logged and dropped. Notifications are acknowledged in
the log only. Calls are routed on :class:`Method`; ``tools/call`` runs the
named provider synchronously and folds any failure into an ``isError``
result. Nothing raised while handling a line escapes
:meth:`Dispatcher.dispatch_line`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gitmcp import SERVER_NAME, __version__
from gitmcp.protocol.errors import ParseError, ToolExecutionError, ToolNotFoundError
from gitmcp.protocol.models import (
    PROTOCOL_VERSION,
    CallToolResult,
    JsonRpcRequest,
    JsonRpcResponse,
    MessageKind,
    Method,
)
from gitmcp.utils.telemetry import (
    ATTR_RPC_KIND,
    ATTR_RPC_METHOD,
    ATTR_TOOL_ERROR,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from gitmcp.config import ServerConfig
    from gitmcp.protocol.registry import ToolRegistry
    from gitmcp.providers.base import ToolProvider

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by the json module but are not JSON.
    raise ValueError(f"non-standard constant {name!r}")


class Dispatcher:
    """Routes parsed requests to protocol handlers and tool providers.

    Holds no per-request state: the registry, the provider table and the
    configuration are fixed at construction.

    Usage::

        dispatcher = Dispatcher(default_registry(), PROVIDERS, ServerConfig())
        response = dispatcher.dispatch_line('{"jsonrpc":"2.0","method":"tools/list","id":1}')
    """

    def __init__(
        self,
        registry: ToolRegistry,
        providers: Mapping[str, ToolProvider],
        config: ServerConfig,
    ) -> None:
        missing = [name for name in registry.names() if name not in providers]
        if missing:
            msg = f"No provider registered for tools: {', '.join(missing)}"
            raise ValueError(msg)
        self._registry = registry
        self._providers = dict(providers)
        self._config = config
        self._routes: dict[Method, Callable[[JsonRpcRequest], dict[str, Any]]] = {
            Method.INITIALIZE: self._initialize,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    # -- per-line entry point ---------------------------------------------

    def dispatch_line(self, line: str) -> JsonRpcResponse | None:
        """Process one raw line; return the response to send, if any."""
        try:
            request = self.parse_line(line)
        except ParseError as exc:
            logger.error("%s | Input: %s", exc, line.rstrip("\n"))
            return None

        kind = self.classify(request)
        with _tracer.start_as_current_span("rpc.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            span.set_attribute(ATTR_RPC_KIND, kind.value)

            if kind is MessageKind.NOTIFICATION:
                try:
                    self.handle_notification(request)
                except Exception:
                    logger.exception("Error while handling notification %s", request.method)
                return None

            try:
                return self.handle_call(request)
            except Exception as exc:
                logger.exception(
                    "Unhandled error while answering %s (id=%r)", request.method, request.id
                )
                failure = CallToolResult.failure(f"Internal error: {exc}")
                return JsonRpcResponse(id=request.id, result=failure.to_payload())

    # -- stages -----------------------------------------------------------

    def parse_line(self, text: str) -> JsonRpcRequest:
        """Decode one line into a request.

        Raises:
            ParseError: On invalid JSON (including ``NaN``/``Infinity`` and
                input nested too deeply to decode), a non-object message, or
                a missing or non-string ``method``.
        """
        try:
            data: Any = json.loads(text, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ParseError("Invalid request: message must be a JSON object")

        try:
            return JsonRpcRequest.model_validate(data)
        except ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise ParseError(f"Invalid request: {errors}") from exc

    @staticmethod
    def classify(request: JsonRpcRequest) -> MessageKind:
        return request.kind

    def handle_notification(self, request: JsonRpcRequest) -> None:
        """Log well-known notifications; ignore everything else."""
        if Method.lookup(request.method) is Method.INITIALIZED:
            logger.info("Client initialized successfully.")
        else:
            logger.debug("Ignoring notification %s", request.method)

    def handle_call(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Answer a call. Unknown methods get an empty result."""
        method = Method.lookup(request.method)
        handler = self._routes.get(method) if method is not None else None
        if handler is None:
            logger.debug("No handler for method %s, answering with empty result", request.method)
            return JsonRpcResponse(id=request.id, result={})
        return JsonRpcResponse(id=request.id, result=handler(request))

    # -- tool invocation --------------------------------------------------

    def call_tool(self, name: str, raw_arguments: Any) -> CallToolResult:
        """Run the tool *name* with the undecoded ``arguments`` value.

        Unknown tools and provider failures come back as ``is_error``
        results; other exceptions propagate to the caller.
        """
        with _tracer.start_as_current_span("tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            result = self._invoke(name, raw_arguments)
            span.set_attribute(ATTR_TOOL_ERROR, result.is_error)
            return result

    def _invoke(self, name: str, raw_arguments: Any) -> CallToolResult:
        if not self._registry.is_known(name):
            return CallToolResult.failure(str(ToolNotFoundError(name)))

        arguments = self._registry.extract_arguments(name, raw_arguments)
        provider = self._providers[name]
        logger.debug("Calling tool %s with %r", name, arguments)
        try:
            payload = provider(self._config, arguments)
        except ToolExecutionError as exc:
            logger.warning("Tool %s failed: %s", name, exc.detail)
            return CallToolResult.failure(exc.detail)
        return CallToolResult.success(payload)

    # -- method handlers --------------------------------------------------

    def _initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def _tools_list(self, request: JsonRpcRequest) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in self._registry.list_tools()]}

    def _tools_call(self, request: JsonRpcRequest) -> dict[str, Any]:
        params = request.params if isinstance(request.params, dict) else {}
        name = params.get("name")
        result = self.call_tool(name if isinstance(name, str) else "", params.get("arguments"))
        return result.to_payload()
