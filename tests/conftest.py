"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from issuefetcher.github import GitHubClient


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


class FakeGitHub:
    """In-memory stand-in for the GitHub REST and GraphQL endpoints.

    REST routes are keyed by (method, path). GraphQL requests go to a single
    handler receiving the decoded ``variables``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response | Exception] = {}
        self.graphql_handler: Callable[[dict[str, Any]], httpx.Response] | None = None
        self.requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        json_body: Any = None,
        status: int = 200,
        method: str = "GET",
    ) -> None:
        self.routes[(method, path)] = httpx.Response(status, json=json_body)

    def fail(self, path: str, error: Exception, method: str = "GET") -> None:
        self.routes[(method, path)] = error

    def on_graphql(self, handler: Callable[[dict[str, Any]], httpx.Response]) -> None:
        self.graphql_handler = handler

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/graphql":
            if self.graphql_handler is None:
                return httpx.Response(200, json={"data": {}})
            body = json.loads(request.content)
            return self.graphql_handler(body.get("variables") or {})

        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def github() -> FakeGitHub:
    """Create a fake GitHub API."""
    return FakeGitHub()


@pytest.fixture
def github_client(github: FakeGitHub) -> GitHubClient:
    """Create a GitHubClient talking to the fake GitHub API."""
    return GitHubClient("test-token", transport=github.transport)


@pytest.fixture
def make_issue() -> Callable[..., dict[str, Any]]:
    """Factory for REST issue payloads."""

    def _make_issue(number: int, **overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "number": number,
            "title": f"Issue {number}",
            "state": "open",
            "html_url": f"https://github.com/owner/repo/issues/{number}",
            "user": {"login": "octocat"},
            "created_at": "2024-05-01T12:00:00Z",
            "labels": [{"name": "bug", "color": "d73a4a"}],
            "body": f"Body of issue {number}",
        }
        payload.update(overrides)
        return payload

    return _make_issue


@pytest.fixture
def card_url() -> Callable[[int], str]:
    """Build the content_url a classic card uses to reference an issue."""

    def _card_url(number: int) -> str:
        return f"https://api.github.com/repos/owner/repo/issues/{number}"

    return _card_url
