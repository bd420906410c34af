"""Shared fixtures: a fake-provider dispatcher and a mocked GitHub API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from gitmcp.config import ServerConfig
from gitmcp.protocol.dispatcher import Dispatcher
from gitmcp.protocol.errors import ToolExecutionError
from gitmcp.protocol.models import ToolDescriptor, ToolProperty
from gitmcp.protocol.registry import ToolRegistry

_REAL_CLIENT = httpx.Client

ECHO_TOOL = ToolDescriptor(
    name="echo",
    description="Echo the message back.",
    properties=(
        ToolProperty(name="message", required=True, default=""),
        ToolProperty(name="repeat", type="integer", default=1),
    ),
)
FAIL_TOOL = ToolDescriptor(name="fail", description="Always fails.")
CRASH_TOOL = ToolDescriptor(name="crash", description="Raises an unexpected error.")


def _echo(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    return {"echoed": arguments["message"] * arguments["repeat"], "arguments": arguments}


def _fail(config: ServerConfig, arguments: dict[str, Any]) -> Any:
    raise ToolExecutionError("fail", "upstream said no (Status: 503 Service Unavailable)")


def _crash(config: ServerConfig, arguments: dict[str, Any]) -> Any:
    raise RuntimeError("kaboom")


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(api_base="https://api.github.test")


@pytest.fixture
def fake_dispatcher(config: ServerConfig) -> Dispatcher:
    """Dispatcher over three in-memory tools: ``echo``, ``fail`` and ``crash``."""
    registry = ToolRegistry([ECHO_TOOL, FAIL_TOOL, CRASH_TOOL])
    providers = {"echo": _echo, "fail": _fail, "crash": _crash}
    return Dispatcher(registry, providers, config)


@pytest.fixture
def github_api(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """Route every ``GitHubClient`` request to *handler*.

    Returns the list the intercepted requests are appended to.
    """

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        monkeypatch.setattr(
            "gitmcp.providers.github.httpx.Client",
            lambda **kwargs: _REAL_CLIENT(transport=transport, **kwargs),
        )
        return seen

    return install
