"""Classic project boards: projects, their columns, and the cards in each column."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from issuefetcher.github.exceptions import HttpError
from issuefetcher.github.models import Card, Column, Project
from issuefetcher.settle import gather_settled

if TYPE_CHECKING:
    from issuefetcher.github.client import GitHubClient

logger = logging.getLogger("issuefetcher.github.projects")

# Statuses on the projects listing that mean "this repository has no classic boards"
NO_PROJECTS_STATUSES = frozenset({404, 410})


class ClassicProjectFetcher:
    """Fetches classic project boards for a repository.

    Each level tolerates failure on its own: a project whose columns cannot
    be listed keeps an empty column list, and a column whose cards cannot be
    listed keeps an empty card list.
    """

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    async def list_projects(self, owner: str, repo: str) -> list[Project]:
        """List classic projects for a repository.

        A 404 (or 410 once classic projects are switched off) means the
        repository has no classic projects, or the token cannot see them, and
        yields an empty list. Other failures propagate.
        """
        try:
            payload = await self.client.get_classic_projects(f"/repos/{owner}/{repo}/projects")
        except HttpError as e:
            if e.status not in NO_PROJECTS_STATUSES:
                raise
            logger.info("No classic projects found for %s/%s", owner, repo)
            return []
        projects = [Project.from_payload(item) for item in payload or []]
        logger.info("Found %d classic project(s) for %s/%s", len(projects), owner, repo)
        return projects

    async def list_columns(self, project_id: int) -> list[Column]:
        payload = await self.client.get_classic_projects(f"/projects/{project_id}/columns")
        return [Column.from_payload(item) for item in payload or []]

    async def list_cards(self, column_id: int) -> list[Card]:
        payload = await self.client.get_classic_projects(f"/projects/columns/{column_id}/cards")
        return [Card.from_payload(item) for item in payload or []]

    async def fetch_projects(self, owner: str, repo: str) -> list[Project]:
        """List projects and populate every column with its cards.

        Columns are fetched concurrently per project and cards concurrently
        per column; result order matches GitHub's order at every level.
        """
        projects = await self.list_projects(owner, repo)
        if not projects:
            return []

        outcomes = await gather_settled(self._with_columns(project) for project in projects)
        populated: list[Project] = []
        for project, outcome in zip(projects, outcomes, strict=True):
            if not outcome.ok:
                logger.warning(
                    "Could not fetch columns for project %s: %s", project.name, outcome.error
                )
            populated.append(outcome.value_or(replace(project, columns=[])))
        return populated

    async def _with_columns(self, project: Project) -> Project:
        columns = await self.list_columns(project.id)
        logger.debug("Columns found for %s: %d", project.name, len(columns))

        outcomes = await gather_settled(self.list_cards(column.id) for column in columns)
        populated: list[Column] = []
        for column, outcome in zip(columns, outcomes, strict=True):
            if not outcome.ok:
                logger.warning(
                    "Could not fetch cards for column %s: %s", column.name, outcome.error
                )
            populated.append(replace(column, cards=outcome.value_or([])))
        return replace(project, columns=populated)
