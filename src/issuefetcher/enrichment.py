"""Attach project board memberships to fetched issues."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from issuefetcher.github.models import EnrichedIssue, ProjectData, ProjectMembership
from issuefetcher.github.projects_v2 import fetch_issue_project_data
from issuefetcher.settle import gather_settled

if TYPE_CHECKING:
    from issuefetcher.github.client import GitHubClient
    from issuefetcher.github.models import Issue, Project

logger = logging.getLogger("issuefetcher.enrichment")


def join_issue(issue: Issue, projects: list[Project]) -> ProjectData:
    """Find every classic card that references an issue.

    A card matches when its ``content_url`` contains ``/issues/<number>``.
    Matches are kept in project, column, card order without de-duplication,
    so the first match becomes the issue's project status.
    """
    memberships = [
        ProjectMembership(
            project_id=project.id,
            project_name=project.name,
            project_url=project.html_url,
            column_id=column.id,
            column_name=column.name,
            card_id=card.id,
            note=card.note,
        )
        for project in projects
        for column in project.columns
        for card in column.cards
        if card.references_issue(issue.number)
    ]
    return ProjectData.from_memberships(memberships)


def enrich_classic(issues: list[Issue], projects: list[Project]) -> list[EnrichedIssue]:
    """Join every issue against the classic boards."""
    return [
        EnrichedIssue(issue=issue, project_data=join_issue(issue, projects)) for issue in issues
    ]


async def enrich_projects_v2(
    client: GitHubClient,
    owner: str,
    repo: str,
    issues: list[EnrichedIssue],
) -> list[EnrichedIssue]:
    """Look up each issue's Projects v2 memberships concurrently.

    An issue whose lookup fails keeps the project data it already had.
    """
    outcomes = await gather_settled(
        fetch_issue_project_data(client, owner, repo, enriched.number) for enriched in issues
    )

    result: list[EnrichedIssue] = []
    failures = 0
    for enriched, outcome in zip(issues, outcomes, strict=True):
        if outcome.ok:
            project_data = outcome.value_or(ProjectData())
            result.append(EnrichedIssue(issue=enriched.issue, project_data=project_data))
        else:
            failures += 1
            logger.warning(
                "Projects v2 enrichment failed for issue #%d: %s", enriched.number, outcome.error
            )
            result.append(enriched)

    if failures:
        logger.info("Projects v2 enrichment failed for %d of %d issue(s)", failures, len(issues))
    return result
