"""REST API for issuefetcher."""

from issuefetcher.api.app import app, create_app, register_exception_handlers
from issuefetcher.api.models import APIResponse, FetchRequest, SnapshotModel

__all__ = [
    "APIResponse",
    "FetchRequest",
    "SnapshotModel",
    "app",
    "create_app",
    "register_exception_handlers",
]
