"""Capability providers — one callable per advertised tool."""

from __future__ import annotations

from gitmcp.providers.base import ToolProvider
from gitmcp.providers.repository import (
    get_changelog,
    get_file_content,
    get_file_tree,
    get_readme,
    search_code,
)
from gitmcp.providers.tags import get_tags

PROVIDERS: dict[str, ToolProvider] = {
    "get_tags": get_tags,
    "get_changelog": get_changelog,
    "get_readme": get_readme,
    "get_file_tree": get_file_tree,
    "get_file_content": get_file_content,
    "search_code": search_code,
}

__all__ = [
    "PROVIDERS",
    "ToolProvider",
    "get_changelog",
    "get_file_content",
    "get_file_tree",
    "get_readme",
    "get_tags",
    "search_code",
]
