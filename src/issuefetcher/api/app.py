"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from issuefetcher.api.dependencies import (
    close_fetcher,
    close_snapshot_store,
    init_fetcher,
    init_settings,
    init_snapshot_store,
)
from issuefetcher.api.models import APIResponse
from issuefetcher.api.routes import issues, snapshot
from issuefetcher.github import (
    AuthError,
    ForbiddenError,
    HttpError,
    NotFoundError,
    ValidationError,
)
from issuefetcher.snapshot import SnapshotStoreError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger("issuefetcher.api")

_HTTP_ERROR_STATUSES: dict[type[HttpError], int] = {
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = init_settings()
    if settings.has_credentials:
        logger.info("Default repository: %s", settings.repository_url)
    else:
        logger.info("No default repository and token configured; requests must supply them")
    db_path = app.state.db_path if hasattr(app.state, "db_path") else settings.db_path
    init_snapshot_store(db_path)
    init_fetcher()

    yield

    close_fetcher()
    close_snapshot_store()


def create_app(db_path: str | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="issuefetcher API",
        description="Fetch GitHub issues with project board status and serve stored snapshots",
        version="0.1.0",
        lifespan=lifespan,
    )

    if db_path is not None:
        app.state.db_path = db_path

    register_exception_handlers(app)

    app.include_router(issues.router, prefix="/api/v1")
    app.include_router(snapshot.router, prefix="/api/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map fetch and storage failures onto the response envelope."""

    @app.exception_handler(HttpError)
    async def github_http_error_handler(_request: Request, exc: HttpError) -> JSONResponse:
        logger.warning("Issue fetch failed: %s", exc)
        return JSONResponse(
            status_code=_HTTP_ERROR_STATUSES.get(type(exc), status.HTTP_502_BAD_GATEWAY),
            content=APIResponse[None](data=None, error=exc.user_message).model_dump(),
        )

    @app.exception_handler(ValueError)
    async def invalid_request_handler(_request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(SnapshotStoreError)
    async def snapshot_store_error_handler(
        _request: Request, exc: SnapshotStoreError
    ) -> JSONResponse:
        logger.error("Snapshot store error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )


# Default app instance
app = create_app()
