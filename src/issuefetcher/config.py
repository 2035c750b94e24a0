"""Configuration for issuefetcher.

Settings come from environment variables; GitHub endpoint details live in
``GitHubSettings`` so tests and GitHub Enterprise installs can swap them.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

DEFAULT_PER_PAGE = 10
MIN_PER_PAGE = 1
MAX_PER_PAGE = 100
DEFAULT_DB_PATH = "issuefetcher.db"

# Classic projects endpoints only answer with the "inertia" preview media type
PROJECTS_PREVIEW_ACCEPT = "application/vnd.github.inertia+json"

_REPOSITORY_PATTERN = re.compile(
    r"^(?:(?:https?://)?(?:www\.)?github\.com/)?"
    r"(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True)
class GitHubSettings:
    """Endpoint and header configuration for the GitHub APIs."""

    api_url: str = "https://api.github.com"
    graphql_url: str = "https://api.github.com/graphql"
    rest_accept: str = "application/vnd.github.v3+json"
    projects_preview_accept: str = PROJECTS_PREVIEW_ACCEPT
    api_version: str = "2022-11-28"
    user_agent: str = "issuefetcher"
    timeout: float = 30.0
    v2_projects_first: int = 20


@dataclass
class FetcherSettings:
    """Default repository, credential and storage settings."""

    repository_url: str = ""
    access_token: str = ""
    per_page: int = DEFAULT_PER_PAGE
    db_path: str = DEFAULT_DB_PATH

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of error messages."""
        errors: list[str] = []

        if not self.repository_url:
            errors.append("Repository URL is required")
        else:
            try:
                parse_repository(self.repository_url)
            except ValueError as e:
                errors.append(str(e))

        if not self.access_token:
            errors.append("GitHub access token is required")

        if not MIN_PER_PAGE <= self.per_page <= MAX_PER_PAGE:
            errors.append(f"Issues per page must be between {MIN_PER_PAGE} and {MAX_PER_PAGE}")

        return errors

    @property
    def has_credentials(self) -> bool:
        return bool(self.repository_url and self.access_token)


def normalize_per_page(value: object) -> int:
    """Coerce a page size into 1-100, falling back to the default."""
    try:
        per_page = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return DEFAULT_PER_PAGE
    if MIN_PER_PAGE <= per_page <= MAX_PER_PAGE:
        return per_page
    return DEFAULT_PER_PAGE


def parse_repository(value: str) -> tuple[str, str]:
    """Split a repository URL or ``owner/repo`` string into its parts.

    Args:
        value: e.g. "https://github.com/octocat/Hello-World" or "octocat/Hello-World"

    Returns:
        Tuple of (owner, repo)

    Raises:
        ValueError: If the value does not name a GitHub repository
    """
    match = _REPOSITORY_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid GitHub repository: '{value}'. Expected owner/repo")
    return match.group("owner"), match.group("repo")


def load_settings() -> FetcherSettings:
    """Load settings from the environment.

    Reads ISSUEFETCHER_REPOSITORY_URL, ISSUEFETCHER_TOKEN (or GITHUB_TOKEN),
    ISSUEFETCHER_PER_PAGE and ISSUEFETCHER_DB_PATH. Missing values fall back to
    defaults; call ``validate()`` to check completeness.
    """
    token = os.environ.get("ISSUEFETCHER_TOKEN") or os.environ.get("GITHUB_TOKEN", "")
    return FetcherSettings(
        repository_url=os.environ.get("ISSUEFETCHER_REPOSITORY_URL", ""),
        access_token=token.strip(),
        per_page=normalize_per_page(os.environ.get("ISSUEFETCHER_PER_PAGE", DEFAULT_PER_PAGE)),
        db_path=os.environ.get("ISSUEFETCHER_DB_PATH", DEFAULT_DB_PATH),
    )
