"""Custom exceptions for the GitHub fetchers."""

from __future__ import annotations

from typing import Any


class GitHubError(Exception):
    """Base exception for GitHub fetcher errors."""


class HttpError(GitHubError):
    """A GitHub request answered with a non-successful status.

    A status of 0 means the request never got a response (transport failure).
    """

    user_message = "Error fetching issues. Please check your credentials and try again."

    def __init__(self, status: int, message: str = "", url: str = "") -> None:
        self.status = status
        self.message = message
        self.url = url
        detail = f" - {message}" if message else ""
        super().__init__(f"HTTP {status}{detail}")


# Public name for the single fatal failure of the fetch pipeline
FetchError = HttpError


class AuthError(HttpError):
    """401: the access token was rejected."""

    user_message = "Invalid access token. Please check your GitHub personal access token."


class ForbiddenError(HttpError):
    """403: missing permission or rate limit exceeded."""

    user_message = "Access forbidden. Please check your token permissions or rate limits."


class NotFoundError(HttpError):
    """404: repository (or path) does not exist or is not visible."""

    user_message = "Repository not found. Please check the repository URL."


class ValidationError(HttpError):
    """422: GitHub rejected the repository identifier."""

    user_message = "Invalid repository format. Please check the repository URL."


_STATUS_ERRORS: dict[int, type[HttpError]] = {
    401: AuthError,
    403: ForbiddenError,
    404: NotFoundError,
    422: ValidationError,
}


def error_for_status(status: int, message: str = "", url: str = "") -> HttpError:
    """Build the HttpError subclass matching an HTTP status."""
    error_class = _STATUS_ERRORS.get(status, HttpError)
    return error_class(status, message, url)


class GraphqlError(GitHubError):
    """A GraphQL request failed or returned an ``errors`` array."""

    def __init__(
        self, message: str, status: int | None = None, errors: list[Any] | None = None
    ) -> None:
        self.status = status
        self.errors = errors or []
        super().__init__(message)
