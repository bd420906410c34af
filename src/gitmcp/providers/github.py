"""GitHubClient — thin synchronous wrapper over the GitHub REST API.

Every method raises :class:`~gitmcp.protocol.errors.UpstreamError` on
transport failures, non-2xx statuses, and undecodable bodies; the message
carries the upstream status where there is one.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from gitmcp.protocol.errors import UpstreamError

if TYPE_CHECKING:
    from gitmcp.config import ServerConfig

_GITHUB_URL = re.compile(r"github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$")

ACCEPT_JSON = "application/vnd.github+json"
ACCEPT_RAW = "application/vnd.github.raw"
API_VERSION = "2022-11-28"


def parse_github_url(url: str) -> tuple[str, str]:
    """Split ``https://github.com/<owner>/<repo>[.git]`` into owner and repo."""
    match = _GITHUB_URL.search(url.strip())
    if match is None:
        raise UpstreamError("Invalid GitHub URL")
    return match.group(1), match.group(2)


def _status(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


class GitHubClient:
    """Issues one request per call against ``config.api_base``.

    Usage::

        with GitHubClient(config) as gh:
            text = gh.readme("octocat", "hello-world")
    """

    def __init__(self, config: ServerConfig) -> None:
        self._config = config
        headers = {
            "User-Agent": config.user_agent,
            "Accept": ACCEPT_JSON,
            "X-GitHub-Api-Version": API_VERSION,
        }
        if config.github_token:
            headers["Authorization"] = f"Bearer {config.github_token}"
        self._http = httpx.Client(
            base_url=config.api_base,
            headers=headers,
            timeout=config.http_timeout,
            follow_redirects=True,
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # -- endpoints ---------------------------------------------------------

    def compare(self, owner: str, repo: str, base: str, head: str) -> dict[str, Any]:
        """``GET /repos/{owner}/{repo}/compare/{base}...{head}``."""
        path = f"/repos/{owner}/{repo}/compare/{quote(base, safe='/')}...{quote(head, safe='/')}"
        response = self._get(path)
        if not response.is_success:
            raise UpstreamError(f"GitHub API Error: {_status(response)}", response.status_code)
        return self._json(response)

    def readme(self, owner: str, repo: str) -> str:
        """``GET /repos/{owner}/{repo}/readme`` as raw text."""
        response = self._get(f"/repos/{owner}/{repo}/readme", accept=ACCEPT_RAW)
        if not response.is_success:
            raise UpstreamError(
                f"Failed to fetch README (Status: {_status(response)}). "
                "Make sure the repo is public/exist.",
                response.status_code,
            )
        return response.text

    def tree(self, owner: str, repo: str, ref: str) -> dict[str, Any]:
        """``GET /repos/{owner}/{repo}/git/trees/{ref}?recursive=1``."""
        response = self._get(
            f"/repos/{owner}/{repo}/git/trees/{quote(ref, safe='/')}",
            params={"recursive": "1"},
        )
        if not response.is_success:
            raise UpstreamError(
                f"Failed to fetch Tree (Status: {_status(response)}). "
                "Check if repo/branch is valid.",
                response.status_code,
            )
        return self._json(response)

    def file_content(self, owner: str, repo: str, path: str, ref: str) -> str:
        """``GET /repos/{owner}/{repo}/contents/{path}?ref={ref}`` as raw text."""
        response = self._get(
            f"/repos/{owner}/{repo}/contents/{quote(path, safe='/')}",
            params={"ref": ref},
            accept=ACCEPT_RAW,
        )
        if not response.is_success:
            raise UpstreamError(
                f"Failed to read file '{path}'. Status: {_status(response)}. "
                "Make sure the path is correct and not a folder.",
                response.status_code,
            )
        return response.text

    def search_code(self, owner: str, repo: str, query: str, limit: int) -> dict[str, Any]:
        """``GET /search/code?q={query}+repo:{owner}/{repo}``."""
        response = self._get(
            "/search/code",
            params={"q": f"{query} repo:{owner}/{repo}", "per_page": str(limit)},
        )
        if not response.is_success:
            raise UpstreamError(
                f"Code search failed (Status: {_status(response)}). "
                "GitHub code search requires an authenticated token.",
                response.status_code,
            )
        return self._json(response)

    # -- helpers -----------------------------------------------------------

    def _get(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        headers = {"Accept": accept} if accept else None
        try:
            return self._http.get(path, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except (ValueError, RecursionError) as exc:
            raise UpstreamError(f"Invalid JSON from GitHub: {exc}") from exc
        if not isinstance(data, dict):
            raise UpstreamError("Unexpected response shape from GitHub")
        return data
