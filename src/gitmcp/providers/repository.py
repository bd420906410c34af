"""Providers backed by the GitHub REST API.

Every list-producing tool reports ``count`` (items returned),
``total_count`` (items available upstream) and ``is_truncated``; text
tools report ``is_truncated`` alone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gitmcp.protocol.errors import ToolExecutionError
from gitmcp.providers.base import require, upstream_errors
from gitmcp.providers.github import GitHubClient, parse_github_url

if TYPE_CHECKING:
    from gitmcp.config import ServerConfig

logger = logging.getLogger(__name__)

DEFAULT_REF = "HEAD"


def _truncate(text: str, max_chars: int, marker: str) -> tuple[str, bool]:
    if len(text) <= max_chars:
        return text, False
    return text[:max_chars] + marker, True


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _summarize_commit(commit: Any) -> str:
    """Render a compare-API commit as ``[YYYY-MM-DD] first line of message``.

    Missing or mistyped fields render as empty strings.
    """
    info = _mapping(_mapping(commit).get("commit"))
    message = _text(info.get("message"))
    date = _text(_mapping(info.get("author")).get("date")).split("T", 1)[0]
    subject = message.splitlines()[0] if message else ""
    return f"[{date}] {subject}"


def get_changelog(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    """Provider for ``get_changelog``."""
    url: str = arguments.get("url", "")
    start: str = arguments.get("start_tag", "")
    end: str = arguments.get("end_tag", "")
    logger.debug("Fetching changelog for %s: %s...%s", url, start, end)

    with upstream_errors("get_changelog"):
        owner, repo = parse_github_url(url)
        require("get_changelog", arguments, "start_tag", "end_tag")
        with GitHubClient(config) as gh:
            data = gh.compare(owner, repo, start, end)

    commits = data.get("commits")
    if not isinstance(commits, list):
        raise ToolExecutionError("get_changelog", "No commits found")

    changes = [_summarize_commit(c) for c in commits]
    total = data.get("total_commits")
    total = total if isinstance(total, int) else len(changes)
    return {
        "repository": url,
        "from": start,
        "to": end,
        "count": len(changes),
        "total_count": total,
        "is_truncated": len(changes) < total,
        "changes": changes,
    }


def get_readme(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    """Provider for ``get_readme``."""
    url: str = arguments.get("url", "")
    logger.debug("Fetching README for %s", url)

    with upstream_errors("get_readme"):
        owner, repo = parse_github_url(url)
        with GitHubClient(config) as gh:
            content = gh.readme(owner, repo)

    content, truncated = _truncate(content, config.readme_max_chars, "... [TRUNCATED]")
    return {
        "repository": url,
        "type": "readme",
        "is_truncated": truncated,
        "content": content,
    }


def get_file_tree(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    """Provider for ``get_file_tree``.

    Directories are listed with a trailing ``/``. Past
    ``config.tree_max_entries`` a final marker entry says how many were
    left out; ``count`` covers real entries only, so a truncated listing
    holds ``count + 1`` strings.
    """
    url: str = arguments.get("url", "")
    ref: str = arguments.get("branch") or DEFAULT_REF
    logger.debug("Fetching tree for %s (ref: %s)", url, ref)

    with upstream_errors("get_file_tree"):
        owner, repo = parse_github_url(url)
        with GitHubClient(config) as gh:
            data = gh.tree(owner, repo, ref)

    items = data.get("tree")
    if not isinstance(items, list):
        raise ToolExecutionError("get_file_tree", "Invalid tree response")

    files: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        path = _text(item.get("path"))
        files.append(f"{path}/" if item.get("type") == "tree" else path)

    total = len(files)
    cap = config.tree_max_entries
    if total > cap:
        files = files[:cap]
        files.append(f"... (remaining {total - cap} files hidden)")

    return {
        "repository": url,
        "ref": ref,
        "count": min(total, cap),
        "total_count": total,
        "limit_applied": cap,
        "is_truncated": total > cap or bool(data.get("truncated")),
        "files": files,
    }


def get_file_content(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    """Provider for ``get_file_content``."""
    url: str = arguments.get("url", "")
    ref: str = arguments.get("branch") or DEFAULT_REF
    path = str(arguments.get("path", "")).lstrip("/")
    logger.debug("Reading file %s @ %s (ref: %s)", path, url, ref)

    with upstream_errors("get_file_content"):
        owner, repo = parse_github_url(url)
        if not path:
            raise ToolExecutionError("get_file_content", "Missing required argument 'path'")
        with GitHubClient(config) as gh:
            content = gh.file_content(owner, repo, path, ref)

    max_chars = config.file_max_chars
    content, truncated = _truncate(
        content,
        max_chars,
        f"... \n\n[WARNING: File content truncated because it exceeds {max_chars} characters]",
    )
    return {
        "repository": url,
        "path": path,
        "ref": ref,
        "is_truncated": truncated,
        "content": content,
    }


def search_code(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    """Provider for ``search_code``."""
    url: str = arguments.get("url", "")
    query: str = arguments.get("query", "")
    requested: int | None = arguments.get("limit")
    limit = requested if requested is not None else config.search_default_limit
    limit = max(1, min(limit, config.search_max_limit))
    logger.debug("Searching %s for %r (limit: %d)", url, query, limit)

    with upstream_errors("search_code"):
        owner, repo = parse_github_url(url)
        require("search_code", arguments, "query")
        with GitHubClient(config) as gh:
            data = gh.search_code(owner, repo, query, limit)

    items = data.get("items")
    if not isinstance(items, list):
        raise ToolExecutionError("search_code", "Invalid search response")

    matches = [
        {
            "path": _text(item.get("path")),
            "name": _text(item.get("name")),
            "url": _text(item.get("html_url")),
        }
        for item in items[:limit]
        if isinstance(item, dict)
    ]
    total = data.get("total_count")
    total = total if isinstance(total, int) else len(matches)
    return {
        "repository": url,
        "query": query,
        "count": len(matches),
        "total_count": total,
        "limit_applied": limit,
        "is_truncated": len(matches) < total,
        "matches": matches,
    }
