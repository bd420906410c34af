"""ToolProvider protocol — the call contract every tool implementation meets.

A provider receives the server configuration and the arguments already
extracted against its descriptor, and either returns a JSON-serializable
payload or raises :class:`~gitmcp.protocol.errors.ToolExecutionError` whose
``detail`` is shown to the caller as-is.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from gitmcp.protocol.errors import ToolExecutionError, UpstreamError

if TYPE_CHECKING:
    from gitmcp.config import ServerConfig


@runtime_checkable
class ToolProvider(Protocol):
    """Implements one named tool."""

    def __call__(self, config: ServerConfig, arguments: dict[str, Any]) -> Any: ...


@contextmanager
def upstream_errors(tool_name: str) -> Iterator[None]:
    """Re-raise :class:`UpstreamError` as a failure of *tool_name*."""
    try:
        yield
    except UpstreamError as exc:
        raise ToolExecutionError(tool_name, str(exc)) from exc


def require(tool_name: str, arguments: dict[str, Any], *keys: str) -> None:
    """Fail the call if any of *keys* resolved to an empty string."""
    for key in keys:
        if not arguments.get(key):
            raise ToolExecutionError(tool_name, f"Missing required argument '{key}'")
