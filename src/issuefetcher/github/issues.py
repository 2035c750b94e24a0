"""Issue listing for a repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from issuefetcher.config import MAX_PER_PAGE, MIN_PER_PAGE
from issuefetcher.github.models import Issue

if TYPE_CHECKING:
    from issuefetcher.github.client import GitHubClient

logger = logging.getLogger("issuefetcher.github.issues")


async def fetch_issues(client: GitHubClient, owner: str, repo: str, per_page: int) -> list[Issue]:
    """Fetch one page of issues (open and closed) for a repository.

    Args:
        client: Authenticated GitHub client
        owner: Repository owner (user or organization)
        repo: Repository name
        per_page: Page size, 1-100

    Returns:
        Issues in the order GitHub returned them

    Raises:
        ValueError: If per_page is out of range
        HttpError: If the request fails; AuthError, ForbiddenError,
            NotFoundError and ValidationError identify the common causes
    """
    if not MIN_PER_PAGE <= per_page <= MAX_PER_PAGE:
        raise ValueError(f"per_page must be between {MIN_PER_PAGE} and {MAX_PER_PAGE}")

    logger.info("Fetching issues for %s/%s (per_page=%d)", owner, repo, per_page)
    payload = await client.get(
        f"/repos/{owner}/{repo}/issues",
        params={"state": "all", "per_page": per_page},
    )
    issues = [Issue.from_payload(item) for item in payload or []]
    logger.info("Fetched %d issue(s) for %s/%s", len(issues), owner, repo)
    return issues
