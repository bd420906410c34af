"""Tests for GitHubClient and URL parsing."""

from __future__ import annotations

import httpx
import pytest

from gitmcp.config import ServerConfig
from gitmcp.protocol.errors import UpstreamError
from gitmcp.providers.github import GitHubClient, parse_github_url


class TestParseGithubUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://github.com/psf/requests", ("psf", "requests")),
            ("https://github.com/psf/requests.git", ("psf", "requests")),
            ("https://github.com/psf/requests/", ("psf", "requests")),
            ("git@github.com/psf/requests.git", ("psf", "requests")),
            ("github.com/encode/httpx", ("encode", "httpx")),
        ],
    )
    def test_valid(self, url: str, expected: tuple[str, str]) -> None:
        assert parse_github_url(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://gitlab.com/a/b",
            "https://github.com/only-owner",
            "https://github.com/a/b/tree/main",
        ],
    )
    def test_invalid(self, url: str) -> None:
        with pytest.raises(UpstreamError, match="Invalid GitHub URL"):
            parse_github_url(url)


class TestGitHubClient:
    def test_headers_without_token(self, config: ServerConfig, github_api) -> None:
        seen = github_api(lambda request: httpx.Response(200, text="# Title"))
        with GitHubClient(config) as gh:
            assert gh.readme("a", "b") == "# Title"
        request = seen[0]
        assert str(request.url) == "https://api.github.test/repos/a/b/readme"
        assert request.headers["Accept"] == "application/vnd.github.raw"
        assert request.headers["User-Agent"].startswith("git-mcp/")
        assert "Authorization" not in request.headers

    def test_token_sent_as_bearer(self, github_api) -> None:
        seen = github_api(lambda request: httpx.Response(200, json={"commits": []}))
        config = ServerConfig(github_token="ghp_secret")
        with GitHubClient(config) as gh:
            gh.compare("a", "b", "v1.0.0", "v1.1.0")
        assert seen[0].headers["Authorization"] == "Bearer ghp_secret"
        assert seen[0].headers["Accept"] == "application/vnd.github+json"
        assert seen[0].url.path == "/repos/a/b/compare/v1.0.0...v1.1.0"

    def test_token_not_in_repr(self) -> None:
        assert "ghp_secret" not in repr(ServerConfig(github_token="ghp_secret"))

    def test_status_in_error_message(self, config: ServerConfig, github_api) -> None:
        github_api(lambda request: httpx.Response(404))
        with GitHubClient(config) as gh, pytest.raises(UpstreamError) as excinfo:
            gh.compare("a", "b", "v1", "v2")
        assert str(excinfo.value) == "GitHub API Error: 404 Not Found"
        assert excinfo.value.status_code == 404

    def test_transport_error(self, config: ServerConfig, github_api) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        github_api(boom)
        with GitHubClient(config) as gh, pytest.raises(UpstreamError, match="connection refused"):
            gh.readme("a", "b")

    def test_invalid_json(self, config: ServerConfig, github_api) -> None:
        github_api(lambda request: httpx.Response(200, text="<html>"))
        with GitHubClient(config) as gh, pytest.raises(UpstreamError, match="Invalid JSON"):
            gh.tree("a", "b", "HEAD")

    def test_non_object_json(self, config: ServerConfig, github_api) -> None:
        github_api(lambda request: httpx.Response(200, json=[1, 2]))
        with GitHubClient(config) as gh, pytest.raises(UpstreamError, match="Unexpected"):
            gh.search_code("a", "b", "foo", 5)

    def test_file_content_query(self, config: ServerConfig, github_api) -> None:
        seen = github_api(lambda request: httpx.Response(200, text="print('hi')"))
        with GitHubClient(config) as gh:
            assert gh.file_content("a", "b", "src/my file.py", "v1.0.0") == "print('hi')"
        assert seen[0].url.path == "/repos/a/b/contents/src/my file.py"
        assert seen[0].url.params["ref"] == "v1.0.0"

    def test_search_query(self, config: ServerConfig, github_api) -> None:
        seen = github_api(
            lambda request: httpx.Response(200, json={"total_count": 0, "items": []})
        )
        with GitHubClient(config) as gh:
            gh.search_code("a", "b", "Client(", 10)
        assert seen[0].url.path == "/search/code"
        assert seen[0].url.params["q"] == "Client( repo:a/b"
        assert seen[0].url.params["per_page"] == "10"
