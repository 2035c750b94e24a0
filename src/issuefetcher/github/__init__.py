"""GitHub access - issues, classic project boards and Projects v2."""

from issuefetcher.github.client import GitHubClient
from issuefetcher.github.exceptions import (
    AuthError,
    FetchError,
    ForbiddenError,
    GitHubError,
    GraphqlError,
    HttpError,
    NotFoundError,
    ValidationError,
)
from issuefetcher.github.issues import fetch_issues
from issuefetcher.github.models import (
    Card,
    Column,
    EnrichedIssue,
    Issue,
    IssueState,
    Label,
    Project,
    ProjectData,
    ProjectKind,
    ProjectMembership,
    ProjectStatus,
    ProjectSummary,
    ProjectV2,
)
from issuefetcher.github.projects import ClassicProjectFetcher
from issuefetcher.github.projects_v2 import (
    fetch_issue_project_data,
    fetch_repository_projects,
    resolve_status_label,
)

__all__ = [
    "AuthError",
    "Card",
    "ClassicProjectFetcher",
    "Column",
    "EnrichedIssue",
    "FetchError",
    "ForbiddenError",
    "GitHubClient",
    "GitHubError",
    "GraphqlError",
    "HttpError",
    "Issue",
    "IssueState",
    "Label",
    "NotFoundError",
    "Project",
    "ProjectData",
    "ProjectKind",
    "ProjectMembership",
    "ProjectStatus",
    "ProjectSummary",
    "ProjectV2",
    "ValidationError",
    "fetch_issue_project_data",
    "fetch_issues",
    "fetch_repository_projects",
    "resolve_status_label",
]
