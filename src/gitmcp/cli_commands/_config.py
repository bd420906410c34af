"""Options shared by every command that needs a :class:`ServerConfig`."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from gitmcp.config import ConfigError, ServerConfig, load_config

F = TypeVar("F", bound=Callable[..., Any])


def config_options(func: F) -> F:
    """Attach ``--config``, ``--github-token`` and ``--api-base``."""
    func = click.option(
        "--api-base",
        envvar="GIT_MCP_API_BASE",
        default=None,
        help="GitHub REST API base URL.",
    )(func)
    func = click.option(
        "--github-token",
        envvar="GITHUB_TOKEN",
        default=None,
        show_envvar=True,
        help="Token sent to the GitHub API (raises rate limits, enables code search).",
    )(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML file with server settings.",
    )(func)
    return func


def build_config(
    config_path: Path | None,
    github_token: str | None,
    api_base: str | None,
) -> ServerConfig:
    """Load the configuration or fail the command with a readable message."""
    try:
        return load_config(config_path, github_token=github_token, api_base=api_base)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
