"""Custom exceptions for the snapshot store."""


class SnapshotStoreError(Exception):
    """Base exception for snapshot store errors."""


class CorruptSnapshotError(SnapshotStoreError):
    """The stored snapshot payload cannot be decoded."""
