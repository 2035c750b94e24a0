"""Unit tests for selecting issues to display."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from issuefetcher.display import (
    DisplayOptions,
    filter_issues,
    paginate,
    present_issue,
    select_issues,
    summarize_body,
)
from issuefetcher.github import (
    EnrichedIssue,
    Issue,
    IssueState,
    Label,
    ProjectData,
    ProjectMembership,
)
from issuefetcher.snapshot import Snapshot


def _enriched(number: int, state: str = "open", boards: tuple = ()) -> EnrichedIssue:
    issue = Issue(
        number=number,
        title=f"Issue {number}",
        state=IssueState(state),
        html_url="",
        author="octocat",
        created_at=None,
    )
    memberships = [
        ProjectMembership(project_name=project, column_name=column) for project, column in boards
    ]
    return EnrichedIssue(issue=issue, project_data=ProjectData.from_memberships(memberships))


@pytest.fixture
def issues() -> list[EnrichedIssue]:
    return [
        _enriched(1, boards=(("Roadmap", "In Progress"),)),
        _enriched(2, state="closed", boards=(("Roadmap", "Done"),)),
        _enriched(3),
        _enriched(4, boards=(("Bugs", "Triage"), ("Roadmap", "Backlog"))),
        _enriched(5, state="closed"),
    ]


@pytest.mark.unit
class TestDisplayOptions:
    """Tests for DisplayOptions validation."""

    def test_defaults(self) -> None:
        options = DisplayOptions()

        assert options.state == "all"
        assert options.per_page == 10
        assert options.layout == "list"
        assert options.show_body

    @pytest.mark.parametrize(
        "kwargs", [{"state": "merged"}, {"page": 0}, {"per_page": 101}, {"layout": "table"}]
    )
    def test_rejects_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError):
            DisplayOptions(**kwargs)


@pytest.mark.unit
class TestFilterIssues:
    """Tests for filter_issues."""

    def test_all_keeps_everything(self, issues: list[EnrichedIssue]) -> None:
        assert filter_issues(issues, DisplayOptions()) == issues

    def test_state_filter(self, issues: list[EnrichedIssue]) -> None:
        selected = filter_issues(issues, DisplayOptions(state="closed"))

        assert [e.number for e in selected] == [2, 5]

    def test_project_filter_is_case_insensitive_substring(
        self, issues: list[EnrichedIssue]
    ) -> None:
        selected = filter_issues(issues, DisplayOptions(project="road"))

        assert [e.number for e in selected] == [1, 2, 4]

    def test_column_filter_checks_every_membership(self, issues: list[EnrichedIssue]) -> None:
        selected = filter_issues(issues, DisplayOptions(column="BACKLOG"))

        assert [e.number for e in selected] == [4]

    def test_filters_combine(self, issues: list[EnrichedIssue]) -> None:
        options = DisplayOptions(state="open", project="roadmap", column="progress")

        assert [e.number for e in filter_issues(issues, options)] == [1]

    def test_issues_off_board_never_match_board_filters(
        self, issues: list[EnrichedIssue]
    ) -> None:
        selected = filter_issues(issues, DisplayOptions(project="a"))

        assert [e.number for e in selected] == [1, 2, 4]


@pytest.mark.unit
class TestPaginate:
    """Tests for paginate."""

    def test_first_page(self, issues: list[EnrichedIssue]) -> None:
        page = paginate(issues, page=1, per_page=2)

        assert [e.number for e in page.items] == [1, 2]
        assert page.total == 5
        assert page.total_pages == 3
        assert page.has_next
        assert not page.has_previous

    def test_last_page_is_partial(self, issues: list[EnrichedIssue]) -> None:
        page = paginate(issues, page=3, per_page=2)

        assert [e.number for e in page.items] == [5]
        assert not page.has_next
        assert page.has_previous

    def test_out_of_range_page_is_clamped(self, issues: list[EnrichedIssue]) -> None:
        page = paginate(issues, page=9, per_page=2)

        assert page.page == 3
        assert [e.number for e in page.items] == [5]

    def test_empty(self) -> None:
        page = paginate([], page=4, per_page=10)

        assert page.items == []
        assert page.page == 1
        assert page.total_pages == 0
        assert not page.has_next


@pytest.mark.unit
def test_select_issues_filters_then_paginates(issues: list[EnrichedIssue]) -> None:
    snapshot = Snapshot(repository="owner/repo", issues=issues)

    page = select_issues(snapshot, DisplayOptions(project="roadmap", page=2, per_page=2))

    assert [e.number for e in page.items] == [4]
    assert page.total == 3


@pytest.mark.unit
class TestSummarizeBody:
    """Tests for summarize_body."""

    def test_empty_body(self) -> None:
        assert summarize_body(None) == ""
        assert summarize_body("") == ""

    def test_short_body_kept(self) -> None:
        assert summarize_body("Fix   the\nbug") == "Fix the bug"

    def test_long_body_cut_with_ellipsis(self) -> None:
        body = " ".join(f"w{i}" for i in range(40))

        assert summarize_body(body) == " ".join(f"w{i}" for i in range(30)) + "..."
        assert summarize_body(body, words=2) == "w0 w1..."


@pytest.mark.unit
class TestPresentIssue:
    """Tests for per-issue detail toggles."""

    @pytest.fixture
    def item(self) -> EnrichedIssue:
        issue = Issue(
            number=7,
            title="Crash on start",
            state=IssueState.OPEN,
            html_url="https://github.com/owner/repo/issues/7",
            author="octocat",
            created_at=datetime(2024, 6, 1, tzinfo=UTC),
            labels=[Label(name="bug", color="d73a4a")],
            body=" ".join(f"w{i}" for i in range(40)),
        )
        return EnrichedIssue(issue=issue, project_data=ProjectData())

    def test_everything_shown_by_default(self, item: EnrichedIssue) -> None:
        data = present_issue(item, DisplayOptions())

        assert data["author"] == "octocat"
        assert data["created_at"] == "2024-06-01T00:00:00+00:00"
        assert data["labels"] == [{"name": "bug", "color": "d73a4a"}]
        assert data["body"].endswith("w29...")

    def test_hidden_details_are_left_out(self, item: EnrichedIssue) -> None:
        options = DisplayOptions(show_author=False, show_date=False, show_labels=False)

        data = present_issue(item, options)

        assert "author" not in data
        assert "created_at" not in data
        assert "labels" not in data
        assert data["number"] == 7
        assert data["title"] == "Crash on start"

    def test_hidden_body_is_none(self, item: EnrichedIssue) -> None:
        assert present_issue(item, DisplayOptions(show_body=False))["body"] is None

    def test_empty_body_is_none(self, item: EnrichedIssue) -> None:
        item = EnrichedIssue(issue=replace(item.issue, body=""), project_data=item.project_data)

        assert present_issue(item, DisplayOptions())["body"] is None
