"""Snapshot value type and its SQLAlchemy record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from issuefetcher.github.models import EnrichedIssue, ProjectSummary

# The store keeps exactly one snapshot, under this key
SNAPSHOT_KEY = "issues"


@dataclass
class Snapshot:
    """The persisted result of one fetch-and-enrich run."""

    repository: str
    issues: list[EnrichedIssue] = field(default_factory=list)
    last_updated: datetime | None = None
    projects: list[ProjectSummary] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.issues)

    @property
    def is_empty(self) -> bool:
        return not self.issues

    @classmethod
    def empty(cls) -> Snapshot:
        """The default returned when nothing has been saved."""
        return cls(repository="")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        last_updated = data.get("last_updated")
        return cls(
            repository=data.get("repository", ""),
            issues=[EnrichedIssue.from_dict(item) for item in data.get("issues") or []],
            last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
            projects=[ProjectSummary.from_dict(p) for p in data.get("projects") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository": self.repository,
            "issues": [issue.to_dict() for issue in self.issues],
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "total_count": self.total_count,
            "projects": [p.to_dict() for p in self.projects],
        }


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class SnapshotRecord(Base):
    """Stored snapshot row. Issues and projects are kept as JSON text."""

    __tablename__ = "snapshots"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    repository: Mapped[str] = mapped_column(String(255), nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    total_count: Mapped[int] = mapped_column(Integer, nullable=False)
    last_updated: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __init__(
        self,
        repository: str,
        payload: str,
        total_count: int,
        last_updated: datetime | None = None,
        key: str = SNAPSHOT_KEY,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.key = key
        self.repository = repository
        self.payload = payload
        self.total_count = total_count
        self.last_updated = _to_naive_utc(last_updated)

    def __repr__(self) -> str:
        return (
            f"<SnapshotRecord(key={self.key!r}, repository={self.repository!r}, "
            f"total_count={self.total_count!r})>"
        )


def _to_naive_utc(value: datetime | None) -> datetime | None:
    # SQLite DateTime columns drop tzinfo; store UTC and re-attach on load
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
