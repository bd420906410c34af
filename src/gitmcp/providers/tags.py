"""Tag listing through ``git ls-remote``, ordered newest first."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import semver

from gitmcp.protocol.errors import UpstreamError
from gitmcp.providers.base import require, upstream_errors

if TYPE_CHECKING:
    from gitmcp.config import ServerConfig

logger = logging.getLogger(__name__)

_TAG_REF_PREFIX = "refs/tags/"


def list_remote_tags(url: str, *, git: str = "git", timeout: float = 60.0) -> list[str]:
    """Return the tag names advertised by the remote at *url*, unsorted.

    Raises:
        UpstreamError: If git cannot be run, times out, or exits non-zero.
    """
    if url.startswith("-"):
        raise UpstreamError(f"Invalid repository URL: {url}")

    try:
        proc = subprocess.run(
            [git, "ls-remote", "--tags", "--refs", url],
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise UpstreamError(f"git ls-remote timed out after {timeout}s") from exc
    except OSError as exc:
        raise UpstreamError(str(exc)) from exc

    if proc.returncode != 0:
        detail = proc.stderr.decode(errors="replace").strip()
        raise UpstreamError(detail or f"git ls-remote exited with status {proc.returncode}")

    try:
        output = proc.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise UpstreamError(str(exc)) from exc

    return [_tag_name(line) for line in output.splitlines() if line.strip()]


def _tag_name(line: str) -> str:
    _, _, ref = line.partition("\t")
    return ref.removeprefix(_TAG_REF_PREFIX)


def _parse_version(tag: str) -> semver.Version | None:
    try:
        return semver.Version.parse(tag.lstrip("v"))
    except ValueError:
        return None


def sort_tags(tags: Iterable[str]) -> list[str]:
    """Order tags newest first.

    Tags that parse as semantic versions (leading ``v`` ignored) come first,
    highest version first. The rest follow in reverse lexical order.
    """
    versioned: list[tuple[semver.Version, str]] = []
    plain: list[str] = []
    for tag in tags:
        version = _parse_version(tag)
        if version is None:
            plain.append(tag)
        else:
            versioned.append((version, tag))

    versioned.sort(key=lambda item: item[0], reverse=True)
    plain.sort(reverse=True)
    return [tag for _, tag in versioned] + plain


def get_tags(config: ServerConfig, arguments: dict[str, Any]) -> dict[str, Any]:
    """Provider for ``get_tags``."""
    require("get_tags", arguments, "url")
    url: str = arguments["url"]
    limit: int | None = arguments.get("limit")
    logger.debug("Fetching tags for %s (limit: %s)", url, limit)

    with upstream_errors("get_tags"):
        tags = sort_tags(
            list_remote_tags(url, git=config.git_executable, timeout=config.git_timeout)
        )

    total = len(tags)
    if limit is not None and limit < total:
        tags = tags[:limit]

    return {
        "repository": url,
        "count": len(tags),
        "total_count": total,
        "limit_applied": limit,
        "is_truncated": len(tags) < total,
        "tags": tags,
    }

