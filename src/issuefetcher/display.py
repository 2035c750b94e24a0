"""Select the issues a listing shows: state and board filters, then pagination."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from issuefetcher.github.models import EnrichedIssue
    from issuefetcher.snapshot.models import Snapshot

BODY_SUMMARY_WORDS = 30


class DisplayOptions(BaseModel):
    """What a listing wants to see from the stored snapshot."""

    state: Literal["all", "open", "closed"] = "all"
    project: str = ""
    column: str = ""
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1, le=100)
    layout: Literal["list", "grid"] = "list"
    show_labels: bool = True
    show_author: bool = True
    show_date: bool = True
    show_body: bool = True


@dataclass
class IssuePage:
    """One page of filtered issues."""

    items: list[EnrichedIssue]
    page: int
    per_page: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def _on_board(issue: EnrichedIssue, needle: str, attribute: str) -> bool:
    needle = needle.lower()
    return any(
        needle in getattr(membership, attribute).lower()
        for membership in issue.project_data.in_projects
    )


def filter_issues(issues: list[EnrichedIssue], options: DisplayOptions) -> list[EnrichedIssue]:
    """Apply the state, project-name and column-name filters in that order.

    Project and column filters are case-insensitive substring matches against
    any of the issue's memberships; issues on no board never match them.
    """
    selected = issues
    if options.state != "all":
        selected = [item for item in selected if item.issue.state == options.state]
    if options.project:
        selected = [item for item in selected if _on_board(item, options.project, "project_name")]
    if options.column:
        selected = [item for item in selected if _on_board(item, options.column, "column_name")]
    return selected


def paginate(issues: list[EnrichedIssue], page: int, per_page: int) -> IssuePage:
    """Slice out one page; out-of-range pages are clamped to the last page."""
    total = len(issues)
    total_pages = math.ceil(total / per_page) if total else 0
    page = max(1, min(page, total_pages or 1))
    offset = (page - 1) * per_page
    return IssuePage(
        items=issues[offset : offset + per_page],
        page=page,
        per_page=per_page,
        total=total,
    )


def select_issues(snapshot: Snapshot, options: DisplayOptions) -> IssuePage:
    """Filter and paginate a snapshot's issues for display."""
    return paginate(filter_issues(snapshot.issues, options), options.page, options.per_page)


def summarize_body(body: str | None, words: int = BODY_SUMMARY_WORDS) -> str:
    """First ``words`` words of an issue body, with "..." when cut short."""
    if not body:
        return ""
    parts = body.split()
    if len(parts) <= words:
        return " ".join(parts)
    return " ".join(parts[:words]) + "..."


def present_issue(item: EnrichedIssue, options: DisplayOptions) -> dict[str, Any]:
    """Serialize one issue with only the details the listing asks for.

    Hidden author, date and labels are left out of the result. A shown body
    is shortened with ``summarize_body``; a hidden or empty one becomes None.
    """
    data = item.to_dict()
    if not options.show_author:
        data.pop("author", None)
    if not options.show_date:
        data.pop("created_at", None)
    if not options.show_labels:
        data.pop("labels", None)
    data["body"] = (summarize_body(data.get("body")) or None) if options.show_body else None
    return data
