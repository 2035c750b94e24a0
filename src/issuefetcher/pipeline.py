"""Fetch-and-enrich pipeline: issues, project boards, snapshot."""

from __future__ import annotations

import logging

from issuefetcher.config import GitHubSettings
from issuefetcher.enrichment import enrich_classic, enrich_projects_v2
from issuefetcher.github.client import GitHubClient
from issuefetcher.github.exceptions import GitHubError
from issuefetcher.github.issues import fetch_issues
from issuefetcher.github.models import Project, ProjectSummary
from issuefetcher.github.projects import ClassicProjectFetcher
from issuefetcher.github.projects_v2 import fetch_repository_projects
from issuefetcher.snapshot.builder import build_snapshot
from issuefetcher.snapshot.models import Snapshot

logger = logging.getLogger("issuefetcher.pipeline")


async def fetch_and_enrich_issues(
    owner: str,
    repo: str,
    token: str,
    per_page: int,
    *,
    settings: GitHubSettings | None = None,
    client: GitHubClient | None = None,
) -> Snapshot:
    """Fetch a repository's issues, tag them with project board data, and
    return a snapshot ready to be saved.

    Classic project boards are tried first. Only when the repository has no
    classic boards are Projects v2 boards listed and each issue looked up
    over GraphQL. Board lookups never fail the run; they just leave issues
    without project data.

    Args:
        owner: Repository owner
        repo: Repository name
        token: GitHub access token (ignored when ``client`` is given)
        per_page: Number of issues to fetch, 1-100
        settings: GitHub endpoint configuration
        client: Existing client to reuse; the caller keeps ownership

    Returns:
        The new snapshot. Nothing is persisted here.

    Raises:
        FetchError: If the issue list cannot be fetched (AuthError,
            ForbiddenError, NotFoundError, ValidationError, or HttpError)
        ValueError: If per_page is out of range
    """
    owns_client = client is None
    if client is None:
        client = GitHubClient(token, settings)

    try:
        issues = await fetch_issues(client, owner, repo, per_page)

        projects, classic_failed = await _fetch_classic_projects(client, owner, repo)
        enriched = enrich_classic(issues, projects)
        summaries: list[ProjectSummary] = [project.summary() for project in projects]

        if not projects and not classic_failed:
            logger.info("No classic projects for %s/%s, trying Projects v2", owner, repo)
            summaries = await _fetch_v2_summaries(client, owner, repo)
            if enriched:
                enriched = await enrich_projects_v2(client, owner, repo, enriched)

        snapshot = build_snapshot(owner, repo, enriched, summaries)
        in_projects = sum(1 for item in snapshot.issues if item.project_data.in_projects)
        logger.info(
            "Built snapshot of %s: %d issue(s), %d on a project board",
            snapshot.repository,
            snapshot.total_count,
            in_projects,
        )
        return snapshot
    finally:
        if owns_client:
            await client.close()


async def _fetch_classic_projects(
    client: GitHubClient, owner: str, repo: str
) -> tuple[list[Project], bool]:
    """Returns the populated classic projects and whether the listing failed."""
    try:
        return await ClassicProjectFetcher(client).fetch_projects(owner, repo), False
    except (GitHubError, AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Project fetching failed for %s/%s, continuing without: %s", owner, repo, e)
        return [], True


async def _fetch_v2_summaries(client: GitHubClient, owner: str, repo: str) -> list[ProjectSummary]:
    try:
        boards = await fetch_repository_projects(client, owner, repo)
    except (GitHubError, AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Projects v2 listing failed for %s/%s: %s", owner, repo, e)
        return []
    return [board.summary() for board in boards]
