"""Server configuration — built once at startup, read-only afterwards."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gitmcp import __version__


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or validated."""


class ServerConfig(BaseModel):
    """Settings every capability provider receives on each call.

    Nothing in the request path reads the environment; whatever a provider
    needs (credentials included) lives here.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    github_token: str | None = Field(default=None, repr=False)
    api_base: str = "https://api.github.com"
    user_agent: str = f"git-mcp/{__version__}"
    http_timeout: float = Field(default=30.0, gt=0)
    git_executable: str = "git"
    git_timeout: float = Field(default=60.0, gt=0)
    readme_max_chars: int = Field(default=20_000, gt=0)
    file_max_chars: int = Field(default=30_000, gt=0)
    tree_max_entries: int = Field(default=1_000, gt=0)
    search_default_limit: int = Field(default=30, gt=0)
    search_max_limit: int = Field(default=100, gt=0)


def load_config(path: Path | None = None, **overrides: Any) -> ServerConfig:
    """Merge defaults, an optional YAML file, and explicit overrides.

    ``None`` overrides are ignored so unset CLI options fall through to the
    file. Environment variables in the form ``${VAR}`` inside the file are
    expanded before parsing.

    Raises:
        ConfigError: On unreadable files, YAML errors, or invalid values.
    """
    data: dict[str, Any] = {}
    if path is not None:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc

        try:
            loaded: Any = yaml.safe_load(os.path.expandvars(raw))
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ConfigError("Config YAML must be a mapping")
            data.update(loaded)

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ServerConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
