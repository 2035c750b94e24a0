"""Assemble a snapshot from enriched issues."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from issuefetcher.github.models import EnrichedIssue, ProjectSummary
from issuefetcher.snapshot.models import Snapshot


def build_snapshot(
    owner: str,
    repo: str,
    issues: Iterable[EnrichedIssue],
    projects: Iterable[ProjectSummary] = (),
    now: datetime | None = None,
) -> Snapshot:
    """Wrap enriched issues with the repository identity and a timestamp.

    Issues keep the order they were fetched in; nothing is de-duplicated or
    sorted.
    """
    return Snapshot(
        repository=f"{owner}/{repo}",
        issues=list(issues),
        last_updated=now or datetime.now(UTC),
        projects=list(projects),
    )
