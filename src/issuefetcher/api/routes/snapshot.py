"""Stored snapshot endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, status

from issuefetcher.api.dependencies import SnapshotStoreDep
from issuefetcher.api.models import (
    APIResponse,
    SaveResultResponse,
    SnapshotModel,
    snapshot_to_response,
)
from issuefetcher.snapshot import Snapshot

router = APIRouter(prefix="/snapshot", tags=["snapshot"])


@router.get("", response_model=APIResponse[SnapshotModel])
def get_snapshot(store: SnapshotStoreDep) -> APIResponse[SnapshotModel]:
    """Get the stored snapshot (empty when nothing was saved)."""
    return APIResponse(data=snapshot_to_response(store.load()))


@router.put("", response_model=APIResponse[SaveResultResponse])
def save_snapshot(
    snapshot: SnapshotModel, store: SnapshotStoreDep
) -> APIResponse[SaveResultResponse]:
    """Replace the stored snapshot with the given one."""
    data = snapshot.model_dump(mode="json")
    data["last_updated"] = datetime.now(UTC).isoformat()
    saved = store.save(Snapshot.from_dict(data))
    return APIResponse(
        data=SaveResultResponse(
            message="Issues saved successfully",
            count=saved.total_count,
            repository=saved.repository,
        )
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_snapshot(store: SnapshotStoreDep) -> None:
    """Delete the stored snapshot."""
    store.delete()
