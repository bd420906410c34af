"""Wiring — build the dispatcher for a configuration and serve stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from gitmcp.catalog import default_registry
from gitmcp.protocol.dispatcher import Dispatcher
from gitmcp.protocol.transport import StdioTransport
from gitmcp.providers import PROVIDERS

if TYPE_CHECKING:
    from gitmcp.config import ServerConfig


def build_dispatcher(config: ServerConfig) -> Dispatcher:
    """Dispatcher over the full git-mcp catalog."""
    return Dispatcher(default_registry(), PROVIDERS, config)


def serve_stdio(
    config: ServerConfig,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Serve one conversation until end of input."""
    return StdioTransport(build_dispatcher(config), stdin=stdin, stdout=stdout).serve()
