"""SnapshotStore - Saves and loads the single persisted issue snapshot."""

from __future__ import annotations

import json
import logging
from datetime import UTC

from issuefetcher.snapshot.database import Database
from issuefetcher.snapshot.exceptions import CorruptSnapshotError
from issuefetcher.snapshot.models import SNAPSHOT_KEY, Snapshot, SnapshotRecord

logger = logging.getLogger("issuefetcher.snapshot")


class SnapshotStore:
    """Persistence for the latest snapshot.

    There is one snapshot at a time. ``save`` replaces it wholesale and the
    last writer wins.
    """

    def __init__(self, db_path: str = "issuefetcher.db") -> None:
        """Initialize the store, creating the database and tables if needed.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def save(self, snapshot: Snapshot) -> Snapshot:
        """Replace the stored snapshot.

        Returns:
            The snapshot as it was stored
        """
        data = snapshot.to_dict()
        payload = json.dumps({"issues": data["issues"], "projects": data["projects"]})

        with self._db.session_scope() as session:
            record = session.get(SnapshotRecord, SNAPSHOT_KEY)
            if record is not None:
                session.delete(record)
                session.flush()
            session.add(
                SnapshotRecord(
                    repository=snapshot.repository,
                    payload=payload,
                    total_count=snapshot.total_count,
                    last_updated=snapshot.last_updated,
                )
            )

        logger.info(
            "Saved snapshot of %s with %d issue(s)", snapshot.repository, snapshot.total_count
        )
        return snapshot

    def load(self) -> Snapshot:
        """Load the stored snapshot.

        Returns:
            The stored snapshot, or ``Snapshot.empty()`` if none was saved

        Raises:
            CorruptSnapshotError: If the stored payload cannot be decoded
        """
        with self._db.session_scope() as session:
            record = session.get(SnapshotRecord, SNAPSHOT_KEY)
            if record is None:
                return Snapshot.empty()
            repository = record.repository
            payload = record.payload
            last_updated = record.last_updated

        try:
            data = json.loads(payload)
            return Snapshot.from_dict(
                {
                    "repository": repository,
                    "issues": data.get("issues"),
                    "projects": data.get("projects"),
                    "last_updated": (
                        last_updated.replace(tzinfo=UTC).isoformat() if last_updated else None
                    ),
                }
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise CorruptSnapshotError(f"Stored snapshot could not be decoded: {e}") from e

    def delete(self) -> bool:
        """Delete the stored snapshot.

        Returns:
            True if a snapshot existed
        """
        with self._db.session_scope() as session:
            record = session.get(SnapshotRecord, SNAPSHOT_KEY)
            if record is None:
                return False
            session.delete(record)
        logger.info("Deleted stored snapshot")
        return True
