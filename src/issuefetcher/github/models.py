"""Data models for GitHub issues and project boards.

Raw JSON is converted with ``from_payload`` at the API boundary; ``to_dict``
produces the shape stored in a snapshot and ``from_dict`` reads it back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

UNSPECIFIED_STATUS = "Unspecified"
DEFAULT_V2_PROJECT_NAME = "Project"


class IssueState(StrEnum):
    """Issue state as reported by GitHub."""

    OPEN = "open"
    CLOSED = "closed"


class ProjectKind(StrEnum):
    """Which GitHub project model a board belongs to."""

    CLASSIC = "classic"
    V2 = "v2"


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class Label:
    """An issue label."""

    name: str
    color: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Label:
        return cls(name=str(payload.get("name", "")), color=str(payload.get("color") or ""))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "color": self.color}


@dataclass(frozen=True)
class Issue:
    """A repository issue, immutable once fetched."""

    number: int
    title: str
    state: IssueState
    html_url: str
    author: str
    created_at: datetime | None
    labels: list[Label] = field(default_factory=list)
    body: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Issue:
        """Build an Issue from a REST ``/issues`` entry."""
        user = payload.get("user") or {}
        return cls(
            number=int(payload["number"]),
            title=str(payload.get("title", "")),
            state=IssueState(payload.get("state", IssueState.OPEN)),
            html_url=str(payload.get("html_url", "")),
            author=str(user.get("login", "")),
            created_at=_parse_timestamp(payload.get("created_at")),
            labels=[Label.from_payload(label) for label in payload.get("labels") or []],
            body=payload.get("body"),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        """Build an Issue from its stored form."""
        return cls(
            number=int(data["number"]),
            title=data.get("title", ""),
            state=IssueState(data.get("state", IssueState.OPEN)),
            html_url=data.get("html_url", ""),
            author=data.get("author", ""),
            created_at=_parse_timestamp(data.get("created_at")),
            labels=[Label.from_payload(label) for label in data.get("labels") or []],
            body=data.get("body"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "state": self.state.value,
            "html_url": self.html_url,
            "author": self.author,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "labels": [label.to_dict() for label in self.labels],
            "body": self.body,
        }


@dataclass
class Card:
    """A classic project card; ``content_url`` points at an issue when set."""

    id: int
    note: str | None = None
    content_url: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Card:
        return cls(
            id=payload["id"],
            note=payload.get("note"),
            content_url=payload.get("content_url"),
        )

    def references_issue(self, number: int) -> bool:
        """Whether this card points at the issue with the given number."""
        if not self.content_url:
            return False
        return f"/issues/{number}" in self.content_url


@dataclass
class Column:
    """A classic project column."""

    id: int
    name: str
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Column:
        return cls(id=payload["id"], name=str(payload.get("name", "")))


@dataclass
class ProjectSummary:
    """Lightweight identity of a discovered project board.

    ``field_names`` lists a Projects v2 board's fields (e.g. "Status"); classic
    boards have none.
    """

    id: int | str
    name: str
    url: str
    kind: ProjectKind
    field_names: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectSummary:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            url=data.get("url", ""),
            kind=ProjectKind(data.get("kind", ProjectKind.CLASSIC)),
            field_names=[str(name) for name in data.get("field_names") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "kind": self.kind.value,
            "field_names": list(self.field_names),
        }


@dataclass
class Project:
    """A classic project board."""

    id: int
    name: str
    html_url: str = ""
    columns: list[Column] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Project:
        return cls(
            id=payload["id"],
            name=str(payload.get("name", "")),
            html_url=str(payload.get("html_url", "")),
        )

    def summary(self) -> ProjectSummary:
        return ProjectSummary(
            id=self.id, name=self.name, url=self.html_url, kind=ProjectKind.CLASSIC
        )


@dataclass
class ProjectV2:
    """A Projects v2 board. Columns are not exposed; status comes from fields."""

    id: str
    title: str
    url: str = ""
    field_names: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ProjectV2:
        fields = (payload.get("fields") or {}).get("nodes") or []
        return cls(
            id=str(payload.get("id", "")),
            title=str(payload.get("title", "")),
            url=str(payload.get("url") or ""),
            field_names=[
                str(f["name"]) for f in fields if isinstance(f, dict) and f.get("name")
            ],
        )

    def summary(self) -> ProjectSummary:
        return ProjectSummary(
            id=self.id,
            name=self.title,
            url=self.url,
            kind=ProjectKind.V2,
            field_names=list(self.field_names),
        )


@dataclass(frozen=True)
class ProjectStatus:
    """The primary board position of an issue."""

    project_name: str
    column_name: str
    column_id: int | str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_name": self.project_name,
            "column_name": self.column_name,
            "column_id": self.column_id,
        }


@dataclass(frozen=True)
class ProjectMembership:
    """One place an issue sits on a board.

    Projects v2 memberships carry empty ids; ``column_name`` holds the
    resolved status label.
    """

    project_name: str
    project_url: str = ""
    column_name: str = UNSPECIFIED_STATUS
    project_id: int | str = ""
    column_id: int | str = ""
    card_id: int | str = ""
    note: str | None = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectMembership:
        return cls(
            project_name=data.get("project_name", ""),
            project_url=data.get("project_url", ""),
            column_name=data.get("column_name") or UNSPECIFIED_STATUS,
            project_id=data.get("project_id", ""),
            column_id=data.get("column_id", ""),
            card_id=data.get("card_id", ""),
            note=data.get("note", ""),
        )

    def summary(self) -> ProjectStatus:
        return ProjectStatus(
            project_name=self.project_name,
            column_name=self.column_name,
            column_id=self.column_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "project_name": self.project_name,
            "project_url": self.project_url,
            "column_id": self.column_id,
            "column_name": self.column_name,
            "card_id": self.card_id,
            "note": self.note,
        }


@dataclass(frozen=True)
class ProjectData:
    """Board memberships of one issue.

    ``project_status`` is always the summary of the first membership, so it is
    derived rather than stored separately.
    """

    in_projects: tuple[ProjectMembership, ...] = ()

    @classmethod
    def from_memberships(cls, memberships: list[ProjectMembership]) -> ProjectData:
        return cls(in_projects=tuple(memberships))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ProjectData:
        if not data:
            return cls()
        return cls.from_memberships(
            [ProjectMembership.from_dict(m) for m in data.get("in_projects") or []]
        )

    @property
    def project_status(self) -> ProjectStatus | None:
        if not self.in_projects:
            return None
        return self.in_projects[0].summary()

    def to_dict(self) -> dict[str, Any]:
        status = self.project_status
        return {
            "in_projects": [m.to_dict() for m in self.in_projects],
            "project_status": status.to_dict() if status else None,
        }


@dataclass(frozen=True)
class EnrichedIssue:
    """An issue together with its board memberships."""

    issue: Issue
    project_data: ProjectData = field(default_factory=ProjectData)

    @property
    def number(self) -> int:
        return self.issue.number

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EnrichedIssue:
        return cls(
            issue=Issue.from_dict(data),
            project_data=ProjectData.from_dict(data.get("project_data")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {**self.issue.to_dict(), "project_data": self.project_data.to_dict()}
