"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Protocol

from fastapi import Depends

from issuefetcher.config import FetcherSettings, GitHubSettings, load_settings
from issuefetcher.pipeline import fetch_and_enrich_issues
from issuefetcher.snapshot import SnapshotStore

if TYPE_CHECKING:
    from issuefetcher.snapshot import Snapshot


class IssueFetcher(Protocol):
    """Interface for the fetch-and-enrich pipeline."""

    async def __call__(self, owner: str, repo: str, token: str, per_page: int) -> Snapshot:
        """Fetch and enrich a repository's issues."""
        ...


class PipelineFetcher:
    """IssueFetcher backed by the GitHub pipeline."""

    def __init__(self, settings: GitHubSettings | None = None) -> None:
        self.settings = settings or GitHubSettings()

    async def __call__(self, owner: str, repo: str, token: str, per_page: int) -> Snapshot:
        return await fetch_and_enrich_issues(owner, repo, token, per_page, settings=self.settings)


# Global SnapshotStore instance (initialized on app startup)
_snapshot_store: SnapshotStore | None = None


def init_snapshot_store(db_path: str = "issuefetcher.db") -> SnapshotStore:
    """Initialize the global SnapshotStore instance."""
    global _snapshot_store  # noqa: PLW0603
    _snapshot_store = SnapshotStore(db_path)
    return _snapshot_store


def close_snapshot_store() -> None:
    """Close the global SnapshotStore instance."""
    global _snapshot_store  # noqa: PLW0603
    if _snapshot_store is not None:
        _snapshot_store.close()
        _snapshot_store = None


def get_snapshot_store() -> Generator[SnapshotStore, None, None]:
    """Dependency that provides the SnapshotStore instance."""
    if _snapshot_store is None:
        raise RuntimeError("SnapshotStore not initialized. Call init_snapshot_store() first.")
    yield _snapshot_store


# Type alias for dependency injection
SnapshotStoreDep = Annotated[SnapshotStore, Depends(get_snapshot_store)]

# Global settings (initialized on app startup)
_settings: FetcherSettings | None = None


def init_settings(settings: FetcherSettings | None = None) -> FetcherSettings:
    """Initialize the global settings, reading the environment by default."""
    global _settings  # noqa: PLW0603
    _settings = settings or load_settings()
    return _settings


def get_settings() -> FetcherSettings:
    """Dependency that provides the settings."""
    if _settings is None:
        return init_settings()
    return _settings


SettingsDep = Annotated[FetcherSettings, Depends(get_settings)]

# Global fetcher (initialized on app startup)
_fetcher: IssueFetcher | None = None


def init_fetcher(fetcher: IssueFetcher | None = None) -> IssueFetcher:
    """Initialize the global IssueFetcher instance."""
    global _fetcher  # noqa: PLW0603
    _fetcher = fetcher or PipelineFetcher()
    return _fetcher


def close_fetcher() -> None:
    """Close the global IssueFetcher instance."""
    global _fetcher  # noqa: PLW0603
    _fetcher = None


def get_fetcher() -> IssueFetcher:
    """Dependency that provides the IssueFetcher instance."""
    if _fetcher is None:
        raise RuntimeError("IssueFetcher not initialized. Call init_fetcher() first.")
    return _fetcher


FetcherDep = Annotated[IssueFetcher, Depends(get_fetcher)]
