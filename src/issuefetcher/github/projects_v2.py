"""Projects v2 lookups over GraphQL.

Projects v2 boards have no columns or cards. An issue's board position is the
value of a field on its project item, usually the single-select "Status".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from issuefetcher.github.models import (
    DEFAULT_V2_PROJECT_NAME,
    UNSPECIFIED_STATUS,
    ProjectData,
    ProjectMembership,
    ProjectV2,
)

if TYPE_CHECKING:
    from issuefetcher.github.client import GitHubClient

logger = logging.getLogger("issuefetcher.github.projects_v2")

SINGLE_SELECT_VALUE = "ProjectV2ItemFieldSingleSelectValue"
TEXT_VALUE = "ProjectV2ItemFieldTextValue"
STATUS_FIELD = "status"

REPOSITORY_PROJECTS_QUERY = """
query($owner: String!, $repo: String!, $first: Int!) {
    repository(owner: $owner, name: $repo) {
        projectsV2(first: $first) {
            nodes {
                id
                title
                url
                fields(first: 50) {
                    nodes {
                        ... on ProjectV2FieldCommon {
                            id
                            name
                            dataType
                        }
                    }
                }
            }
        }
    }
}
"""

ISSUE_PROJECT_ITEMS_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
    repository(owner: $owner, name: $repo) {
        issue(number: $number) {
            projectItems(first: 20) {
                nodes {
                    project {
                        title
                        url
                    }
                    fieldValues(first: 50) {
                        nodes {
                            __typename
                            ... on ProjectV2ItemFieldTextValue {
                                field { ... on ProjectV2FieldCommon { name } }
                                text
                            }
                            ... on ProjectV2ItemFieldSingleSelectValue {
                                field { ... on ProjectV2FieldCommon { name } }
                                name
                            }
                            ... on ProjectV2ItemFieldNumberValue {
                                field { ... on ProjectV2FieldCommon { name } }
                                number
                            }
                            ... on ProjectV2ItemFieldIterationValue {
                                field { ... on ProjectV2FieldCommon { name } }
                                title
                            }
                            ... on ProjectV2ItemFieldDateValue {
                                field { ... on ProjectV2FieldCommon { name } }
                                date
                            }
                        }
                    }
                }
            }
        }
    }
}
"""


def _field_name(value: dict[str, Any]) -> str:
    return str((value.get("field") or {}).get("name") or "")


def resolve_status_label(field_values: list[dict[str, Any]]) -> str:
    """Pick the status label for one project item.

    A field named "Status" (any case) wins, read from its select name, text
    or iteration title. Otherwise the first single-select value is used, then
    the first text value. Returns "Unspecified" when nothing applies.
    """
    values = [v for v in field_values if isinstance(v, dict) and v]

    status = next((v for v in values if _field_name(v).lower() == STATUS_FIELD), None)
    if status is not None:
        label = status.get("name") or status.get("text") or status.get("title") or ""
    else:
        single = next((v for v in values if v.get("__typename") == SINGLE_SELECT_VALUE), None)
        text = next((v for v in values if v.get("__typename") == TEXT_VALUE), None)
        label = (single and single.get("name")) or (text and text.get("text")) or ""

    return str(label) or UNSPECIFIED_STATUS


def project_data_from_items(nodes: list[dict[str, Any]]) -> ProjectData:
    """Turn ``projectItems`` nodes into memberships, first node first."""
    memberships: list[ProjectMembership] = []
    for node in nodes:
        if not isinstance(node, dict):
            continue
        project = node.get("project") or {}
        field_values = (node.get("fieldValues") or {}).get("nodes") or []
        memberships.append(
            ProjectMembership(
                project_name=project.get("title") or DEFAULT_V2_PROJECT_NAME,
                project_url=project.get("url") or "",
                column_name=resolve_status_label(field_values),
            )
        )
    return ProjectData.from_memberships(memberships)


async def fetch_repository_projects(
    client: GitHubClient, owner: str, repo: str, first: int | None = None
) -> list[ProjectV2]:
    """List the Projects v2 boards linked to a repository.

    Only identifies the boards; it says nothing about where any issue sits.

    Raises:
        GraphqlError: If the query fails
    """
    data = await client.graphql(
        REPOSITORY_PROJECTS_QUERY,
        {"owner": owner, "repo": repo, "first": first or client.settings.v2_projects_first},
    )
    nodes = ((data.get("repository") or {}).get("projectsV2") or {}).get("nodes") or []
    projects = [ProjectV2.from_payload(node) for node in nodes if isinstance(node, dict)]
    logger.info("Found %d Projects v2 board(s) for %s/%s", len(projects), owner, repo)
    return projects


async def fetch_issue_project_data(
    client: GitHubClient, owner: str, repo: str, number: int
) -> ProjectData:
    """Fetch the Projects v2 memberships and status of one issue.

    Raises:
        GraphqlError: If the query fails
    """
    data = await client.graphql(
        ISSUE_PROJECT_ITEMS_QUERY, {"owner": owner, "repo": repo, "number": number}
    )
    issue = (data.get("repository") or {}).get("issue") or {}
    nodes = (issue.get("projectItems") or {}).get("nodes") or []
    logger.debug("Issue #%d has %d Projects v2 item(s)", number, len(nodes))
    return project_data_from_items(nodes)
