"""Issue fetch and listing endpoints."""

import logging

from fastapi import APIRouter, Query

from issuefetcher.api.dependencies import FetcherDep, SettingsDep, SnapshotStoreDep
from issuefetcher.api.models import (
    APIResponse,
    FetchRequest,
    IssueModel,
    IssuePageResponse,
    SnapshotModel,
    snapshot_to_response,
)
from issuefetcher.config import FetcherSettings, normalize_per_page, parse_repository
from issuefetcher.display import DisplayOptions, present_issue, select_issues

logger = logging.getLogger("issuefetcher.api")

router = APIRouter(prefix="/issues", tags=["issues"])


def _resolve_target(request: FetchRequest, settings: FetcherSettings) -> tuple[str, str, str, int]:
    """Work out owner, repo, token and page size for a fetch.

    Raises:
        ValueError: If no repository or no access token is available
    """
    if request.owner and request.repo:
        owner, repo = request.owner, request.repo
    elif request.repository_url:
        owner, repo = parse_repository(request.repository_url)
    elif settings.repository_url:
        owner, repo = parse_repository(settings.repository_url)
    else:
        raise ValueError("Please enter a valid GitHub repository URL.")

    token = request.access_token or settings.access_token
    if not token:
        raise ValueError("A GitHub personal access token is required.")

    per_page = request.per_page or normalize_per_page(settings.per_page)
    return owner, repo, token, per_page


@router.post("/fetch", response_model=APIResponse[SnapshotModel])
async def fetch_issues(
    request: FetchRequest, settings: SettingsDep, fetcher: FetcherDep
) -> APIResponse[SnapshotModel]:
    """Fetch and enrich issues without saving them."""
    owner, repo, token, per_page = _resolve_target(request, settings)
    snapshot = await fetcher(owner, repo, token, per_page)
    return APIResponse(data=snapshot_to_response(snapshot))


@router.post("/refresh", response_model=APIResponse[SnapshotModel])
async def refresh_issues(
    request: FetchRequest,
    settings: SettingsDep,
    fetcher: FetcherDep,
    store: SnapshotStoreDep,
) -> APIResponse[SnapshotModel]:
    """Fetch and enrich issues, then replace the stored snapshot."""
    owner, repo, token, per_page = _resolve_target(request, settings)
    snapshot = await fetcher(owner, repo, token, per_page)
    saved = store.save(snapshot)
    return APIResponse(data=snapshot_to_response(saved))


@router.get("", response_model=APIResponse[IssuePageResponse])
def list_issues(
    store: SnapshotStoreDep,
    state: str = Query(default="all", pattern=r"^(all|open|closed)$"),
    project: str = Query(default="", description="Project name contains"),
    column: str = Query(default="", description="Column or status name contains"),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=10, ge=1, le=100),
    layout: str = Query(default="list", pattern=r"^(list|grid)$"),
    show_labels: bool = True,
    show_author: bool = True,
    show_date: bool = True,
    show_body: bool = True,
) -> APIResponse[IssuePageResponse]:
    """List stored issues with filters, pagination and per-issue detail toggles.

    Hidden details come back as their empty defaults; shown bodies are
    shortened to a summary.
    """
    snapshot = store.load()
    options = DisplayOptions(
        state=state,
        project=project,
        column=column,
        page=page,
        per_page=per_page,
        layout=layout,
        show_labels=show_labels,
        show_author=show_author,
        show_date=show_date,
        show_body=show_body,
    )
    selected = select_issues(snapshot, options)
    return APIResponse(
        data=IssuePageResponse(
            repository=snapshot.repository,
            last_updated=snapshot.last_updated,
            items=[
                IssueModel.model_validate(present_issue(item, options)) for item in selected.items
            ],
            layout=options.layout,
            page=selected.page,
            per_page=selected.per_page,
            total=selected.total,
            total_pages=selected.total_pages,
        )
    )
