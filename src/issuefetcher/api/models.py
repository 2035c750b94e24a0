"""Pydantic models for the REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Fetch models


class FetchRequest(BaseModel):
    """Request model for fetching issues.

    The repository comes from ``owner``/``repo``, else ``repository_url``,
    else the configured default. Token and page size fall back to settings too.
    """

    repository_url: str | None = Field(default=None, max_length=500)
    owner: str | None = Field(default=None, max_length=100)
    repo: str | None = Field(default=None, max_length=100)
    access_token: str | None = None
    per_page: int | None = Field(default=None, ge=1, le=100)


# Snapshot models


class LabelModel(BaseModel):
    name: str
    color: str = ""


class ProjectMembershipModel(BaseModel):
    project_id: int | str = ""
    project_name: str
    project_url: str = ""
    column_id: int | str = ""
    column_name: str
    card_id: int | str = ""
    note: str | None = ""


class ProjectStatusModel(BaseModel):
    project_name: str
    column_name: str
    column_id: int | str = ""


class ProjectDataModel(BaseModel):
    in_projects: list[ProjectMembershipModel] = Field(default_factory=list)
    project_status: ProjectStatusModel | None = None


class IssueModel(BaseModel):
    """An issue with its project board data."""

    number: int
    title: str
    state: str = Field(pattern=r"^(open|closed)$")
    html_url: str = ""
    author: str = ""
    created_at: datetime | None = None
    labels: list[LabelModel] = Field(default_factory=list)
    body: str | None = None
    project_data: ProjectDataModel = Field(default_factory=ProjectDataModel)


class ProjectSummaryModel(BaseModel):
    id: int | str
    name: str
    url: str = ""
    kind: str = Field(default="classic", pattern=r"^(classic|v2)$")
    field_names: list[str] = Field(default_factory=list)


class SnapshotModel(BaseModel):
    """A stored (or about to be stored) snapshot."""

    repository: str = Field(..., max_length=255)
    issues: list[IssueModel] = Field(default_factory=list)
    last_updated: datetime | None = None
    total_count: int = 0
    projects: list[ProjectSummaryModel] = Field(default_factory=list)


def snapshot_to_response(snapshot: Any) -> SnapshotModel:
    """Convert a Snapshot to SnapshotModel."""
    return SnapshotModel.model_validate(snapshot.to_dict())


class IssuePageResponse(BaseModel):
    """One page of filtered issues from the stored snapshot."""

    repository: str
    last_updated: datetime | None
    items: list[IssueModel]
    layout: str = Field(default="list", pattern=r"^(list|grid)$")
    page: int
    per_page: int
    total: int
    total_pages: int


class SaveResultResponse(BaseModel):
    """Response model for a save."""

    message: str
    count: int
    repository: str
