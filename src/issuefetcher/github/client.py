"""GitHubClient - Authenticated access to the GitHub REST and GraphQL APIs."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from issuefetcher.config import GitHubSettings
from issuefetcher.github.exceptions import GraphqlError, HttpError, error_for_status
from issuefetcher.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("issuefetcher.github.client")


class GitHubClient:
    """Async client for the GitHub APIs used by the fetchers.

    REST calls send ``Authorization: token <token>``; GraphQL calls send
    ``Authorization: bearer <token>``. Non-successful responses raise
    ``HttpError`` subclasses (REST) or ``GraphqlError`` (GraphQL).
    """

    def __init__(
        self,
        token: str,
        settings: GitHubSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub personal access token
            settings: Endpoint/header configuration (defaults to github.com)
            transport: Optional httpx transport (for testing)
        """
        self.token = token
        self.settings = settings or GitHubSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.settings.user_agent},
                timeout=self.settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.close()

    def rest_headers(self, accept: str | None = None) -> dict[str, str]:
        """Headers for a REST call, optionally with a non-default media type."""
        return {
            "Authorization": f"token {self.token}",
            "Accept": accept or self.settings.rest_accept,
            "X-GitHub-Api-Version": self.settings.api_version,
        }

    def graphql_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"bearer {self.token}",
            "Content-Type": "application/json",
        }

    def api_url(self, path: str) -> str:
        return f"{self.settings.api_url.rstrip('/')}/{path.lstrip('/')}"

    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            HttpError: On a non-2xx status (status-specific subclass where one
                exists), a transport failure (status 0) or a body that
                is not JSON
        """
        logger.debug("%s %s", method, url)
        try:
            response = await self.client.request(
                method, url, headers=headers, params=params, json=json
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Request to %s failed: %s", url, sanitize_for_log(str(e), (self.token,))
            )
            raise HttpError(0, str(e), url) from e

        logger.debug("Response status for %s: %d", url, response.status_code)
        if not response.is_success:
            raise error_for_status(response.status_code, _error_message(response), url)

        try:
            return response.json()
        except ValueError as e:
            raise HttpError(response.status_code, "response body was not valid JSON", url) from e

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        accept: str | None = None,
    ) -> Any:
        """GET a REST resource relative to the API root."""
        return await self.request(
            self.api_url(path), headers=self.rest_headers(accept), params=params
        )

    async def get_classic_projects(self, path: str) -> Any:
        """GET a classic projects resource, which requires the preview media type."""
        return await self.get(path, accept=self.settings.projects_preview_accept)

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query.

        Returns:
            The ``data`` member of the response

        Raises:
            GraphqlError: On a non-2xx status, an ``errors`` array, or a
                transport failure
        """
        payload: dict[str, Any] = {"query": query, "variables": variables or {}}
        try:
            response = await self.client.post(
                self.settings.graphql_url, json=payload, headers=self.graphql_headers()
            )
        except httpx.HTTPError as e:
            raise GraphqlError(f"GraphQL request failed: {e}") from e

        if not response.is_success:
            raise GraphqlError(
                f"GraphQL request failed: {response.status_code} - "
                f"{truncate_output(response.text, 500)}",
                status=response.status_code,
            )

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise GraphqlError("GraphQL response was not valid JSON") from e
        if not isinstance(data, dict):
            raise GraphqlError(
                "GraphQL response was not a JSON object", status=response.status_code
            )

        if data.get("errors"):
            raise GraphqlError(
                f"GraphQL errors: {data['errors']}",
                status=response.status_code,
                errors=list(data["errors"]),
            )

        return dict(data.get("data") or {})


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's ``message`` from an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or "")
    return ""
