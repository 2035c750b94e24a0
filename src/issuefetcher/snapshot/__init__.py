"""Snapshot - The persisted result of a fetch-and-enrich run."""

from issuefetcher.snapshot.builder import build_snapshot
from issuefetcher.snapshot.exceptions import CorruptSnapshotError, SnapshotStoreError
from issuefetcher.snapshot.models import Snapshot, SnapshotRecord
from issuefetcher.snapshot.store import SnapshotStore

__all__ = [
    "CorruptSnapshotError",
    "Snapshot",
    "SnapshotRecord",
    "SnapshotStore",
    "SnapshotStoreError",
    "build_snapshot",
]
