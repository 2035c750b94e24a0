"""Unit tests for GitHubClient."""

import httpx
import pytest

from issuefetcher.config import PROJECTS_PREVIEW_ACCEPT, GitHubSettings
from issuefetcher.github import (
    AuthError,
    ForbiddenError,
    GitHubClient,
    GraphqlError,
    HttpError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.unit
class TestRestRequests:
    """Tests for REST GETs."""

    @pytest.mark.asyncio
    async def test_get_returns_json(self, github, github_client: GitHubClient) -> None:
        """Decoded JSON body is returned."""
        github.add("/repos/owner/repo/issues", [{"number": 1}])

        data = await github_client.get("/repos/owner/repo/issues")

        assert data == [{"number": 1}]

    @pytest.mark.asyncio
    async def test_rest_uses_token_auth_header(self, github, github_client: GitHubClient) -> None:
        """REST calls send 'token' authorization and the v3 media type."""
        github.add("/repos/owner/repo/issues", [])

        await github_client.get("/repos/owner/repo/issues")

        request = github.requests[0]
        assert request.headers["Authorization"] == "token test-token"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"

    @pytest.mark.asyncio
    async def test_classic_projects_use_preview_accept(
        self, github, github_client: GitHubClient
    ) -> None:
        """Classic project calls send the preview media type."""
        github.add("/projects/1/columns", [])

        await github_client.get_classic_projects("/projects/1/columns")

        assert github.requests[0].headers["Accept"] == PROJECTS_PREVIEW_ACCEPT

    @pytest.mark.asyncio
    async def test_query_params_are_sent(self, github, github_client: GitHubClient) -> None:
        """Params end up in the query string."""
        github.add("/repos/owner/repo/issues", [])

        await github_client.get("/repos/owner/repo/issues", params={"state": "all", "per_page": 5})

        assert github.requests[0].url.params["state"] == "all"
        assert github.requests[0].url.params["per_page"] == "5"

    @pytest.mark.parametrize(
        ("status", "error_class"),
        [
            (401, AuthError),
            (403, ForbiddenError),
            (404, NotFoundError),
            (422, ValidationError),
        ],
    )
    @pytest.mark.asyncio
    async def test_status_maps_to_error_class(
        self, github, github_client: GitHubClient, status: int, error_class: type
    ) -> None:
        """Known failure statuses raise their own HttpError subclass."""
        github.add("/repos/owner/repo/issues", {"message": "nope"}, status=status)

        with pytest.raises(error_class) as exc_info:
            await github_client.get("/repos/owner/repo/issues")

        assert exc_info.value.status == status
        assert exc_info.value.message == "nope"

    @pytest.mark.asyncio
    async def test_other_status_raises_plain_http_error(
        self, github, github_client: GitHubClient
    ) -> None:
        """Unmapped statuses raise HttpError itself."""
        github.add("/repos/owner/repo/issues", {"message": "boom"}, status=500)

        with pytest.raises(HttpError) as exc_info:
            await github_client.get("/repos/owner/repo/issues")

        assert type(exc_info.value) is HttpError
        assert str(exc_info.value) == "HTTP 500 - boom"

    @pytest.mark.asyncio
    async def test_transport_failure_raises_status_zero(
        self, github, github_client: GitHubClient
    ) -> None:
        """A connection failure surfaces as HttpError with status 0."""
        github.fail("/repos/owner/repo/issues", httpx.ConnectError("unreachable"))

        with pytest.raises(HttpError) as exc_info:
            await github_client.get("/repos/owner/repo/issues")

        assert exc_info.value.status == 0

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises_http_error(
        self, github, github_client: GitHubClient
    ) -> None:
        """A 2xx body that is not JSON surfaces as HttpError with that status."""
        github.routes[("GET", "/repos/owner/repo/issues")] = httpx.Response(
            200, text="<html>maintenance</html>"
        )

        with pytest.raises(HttpError) as exc_info:
            await github_client.get("/repos/owner/repo/issues")

        assert type(exc_info.value) is HttpError
        assert exc_info.value.status == 200
        assert "not valid JSON" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_custom_api_url(self, github) -> None:
        """Requests go to the configured API root."""
        settings = GitHubSettings(api_url="https://github.example.com/api/v3")
        client = GitHubClient("t", settings=settings, transport=github.transport)
        github.add("/api/v3/repos/owner/repo/issues", [])

        await client.get("/repos/owner/repo/issues")
        await client.close()

        assert github.requests[0].url.host == "github.example.com"


@pytest.mark.unit
class TestGraphql:
    """Tests for GraphQL calls."""

    @pytest.mark.asyncio
    async def test_graphql_returns_data(self, github, github_client: GitHubClient) -> None:
        """The data member is returned."""
        github.on_graphql(lambda variables: httpx.Response(200, json={"data": {"ok": True}}))

        data = await github_client.graphql("query { ok }")

        assert data == {"ok": True}

    @pytest.mark.asyncio
    async def test_graphql_uses_bearer_auth(self, github, github_client: GitHubClient) -> None:
        """GraphQL calls send 'bearer' authorization."""
        github.on_graphql(lambda variables: httpx.Response(200, json={"data": {}}))

        await github_client.graphql("query { ok }", {"a": 1})

        request = github.requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "bearer test-token"

    @pytest.mark.asyncio
    async def test_graphql_errors_array_raises(self, github, github_client: GitHubClient) -> None:
        """A response with errors raises GraphqlError carrying them."""
        github.on_graphql(
            lambda variables: httpx.Response(
                200, json={"data": None, "errors": [{"message": "bad field"}]}
            )
        )

        with pytest.raises(GraphqlError) as exc_info:
            await github_client.graphql("query { bad }")

        assert exc_info.value.errors == [{"message": "bad field"}]

    @pytest.mark.asyncio
    async def test_graphql_non_object_body_raises(
        self, github, github_client: GitHubClient
    ) -> None:
        """A JSON body that is not an object raises GraphqlError."""
        github.on_graphql(lambda variables: httpx.Response(200, json=["unexpected"]))

        with pytest.raises(GraphqlError):
            await github_client.graphql("query { ok }")

    @pytest.mark.asyncio
    async def test_graphql_non_success_status_raises(
        self, github, github_client: GitHubClient
    ) -> None:
        """A non-2xx GraphQL response raises GraphqlError with the status."""
        github.on_graphql(lambda variables: httpx.Response(502, text="bad gateway"))

        with pytest.raises(GraphqlError) as exc_info:
            await github_client.graphql("query { ok }")

        assert exc_info.value.status == 502


@pytest.mark.unit
class TestLifecycle:
    """Tests for client lifecycle."""

    @pytest.mark.asyncio
    async def test_close_resets_client(self, github_client: GitHubClient) -> None:
        """close() drops the underlying client so it can be recreated."""
        _ = github_client.client
        await github_client.close()

        assert github_client._client is None

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self, github) -> None:
        """Leaving the context closes the client."""
        github.add("/rate_limit", {})
        async with GitHubClient("t", transport=github.transport) as client:
            await client.get("/rate_limit")

        assert client._client is None
