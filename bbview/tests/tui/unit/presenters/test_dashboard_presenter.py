"""Unit tests for the dashboard presenter.

This module tests:
- Badge, duration, relative time and branch colour helpers
- List windows with loading, empty and overflow markers
- Pane titles and the status line
- The commits view with its diff column
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from bbview.constants.enums import Pane, ResourceKind, Severity, StatusTag, View
from bbview.constants.values import BRANCH_COLOR_PALETTE, TRACKED_BRANCH_COLORS
from bbview.core.result_cache import record_changes, record_diff
from bbview.models.core.domain import Commit, CommitChange, Pipeline, PullRequest, Repository
from bbview.models.state.app_state import AppState, Selection, StatusMessage
from bbview.screens.dashboard.config import (
    DIFF_UNAVAILABLE_TEXT,
    FILTER_PROMPT,
    MORE_ABOVE_TEXT,
    MORE_BELOW_TEXT,
    NO_TRACKED_PIPELINES_TEXT,
    REPO_HELP,
)
from bbview.screens.dashboard.presenter import (
    branch_color,
    commit_columns,
    detail_title,
    diff_line_tag,
    fnv1a_32,
    pipeline_duration,
    pipeline_result_badge,
    pipeline_state_badge,
    pull_request_badge,
    render,
    short_timestamp,
    status_row,
    time_ago,
    truncate,
)

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _sized(width: int = 120, height: int = 30) -> AppState:
    return replace(AppState(), width=width, height=height)


def _detail(view: View, **selection: object) -> AppState:
    return replace(
        _sized(),
        pane=Pane.DETAIL,
        view=view,
        selection=Selection(repo_name="API", repo_slug="api", **selection),
    )


# =============================================================================
# Helpers
# =============================================================================


class TestBadges:
    """Tests for state and result badges."""

    def test_draft_open_pull_request(self) -> None:
        assert pull_request_badge("OPEN", draft=True).text == "[DRAFT]"
        assert pull_request_badge("MERGED", draft=True).text == "[MERGED]"

    def test_running_states_share_badge(self) -> None:
        assert pipeline_state_badge("IN_PROGRESS").text == "[RUNNING]"
        assert pipeline_state_badge("RUNNING").tag is StatusTag.STATE_RUNNING

    def test_missing_result(self) -> None:
        badge = pipeline_result_badge("")
        assert (badge.text, badge.tag) == ("[N/A]", StatusTag.RESULT_NONE)

    def test_unknown_value_is_upper_cased_plain(self) -> None:
        badge = pipeline_state_badge("halted")
        assert (badge.text, badge.tag) == ("[HALTED]", StatusTag.PLAIN)


class TestTimes:
    """Tests for durations and relative times."""

    @pytest.mark.parametrize(
        ("started", "completed", "expected"),
        [
            ("2024-05-01T11:59:15Z", "2024-05-01T11:59:59Z", "44s"),
            ("2024-05-01T11:00:00Z", "2024-05-01T11:42:30Z", "42m"),
            ("2024-05-01T09:00:00Z", "2024-05-01T11:05:00Z", "2h5m"),
            ("", "2024-05-01T11:05:00Z", ""),
            ("2024-05-01T11:05:00Z", "2024-05-01T11:00:00Z", ""),
        ],
    )
    def test_pipeline_duration(self, started: str, completed: str, expected: str) -> None:
        assert pipeline_duration(started, completed, NOW) == expected

    def test_running_duration_measures_to_now(self) -> None:
        assert pipeline_duration("2024-05-01T11:58:00Z", "", NOW) == "2m"

    @pytest.mark.parametrize(
        ("completed", "expected"),
        [
            ("2024-05-01T11:59:30Z", "just now"),
            ("2024-05-01T11:59:00Z", "1 min ago"),
            ("2024-05-01T11:30:00Z", "30 mins ago"),
            ("2024-05-01T09:00:00Z", "3 hrs ago"),
            ("2024-04-30T11:00:00Z", "1 day ago"),
            ("", ""),
        ],
    )
    def test_time_ago(self, completed: str, expected: str) -> None:
        assert time_ago(completed, NOW) == expected

    def test_short_timestamp_empty_and_unparsable(self) -> None:
        assert short_timestamp("") == "-"
        assert short_timestamp("yesterday") == "yesterday"


class TestBranchColor:
    """Tests for branch column colours."""

    def test_fnv1a_reference_values(self) -> None:
        assert fnv1a_32(b"") == 0x811C9DC5
        assert fnv1a_32(b"a") == 0xE40C292C

    def test_tracked_branch_has_fixed_colour(self) -> None:
        assert branch_color("main") == TRACKED_BRANCH_COLORS["main"]

    def test_other_branches_are_stable_palette_colours(self) -> None:
        colour = branch_color("feature/login")
        assert colour in BRANCH_COLOR_PALETTE
        assert colour == branch_color("feature/login")


class TestTextHelpers:
    """Tests for truncation, diff tags and column split."""

    def test_truncate(self) -> None:
        assert truncate("short", 10) == "short"
        assert truncate("a long commit message", 10) == "a long ..."

    @pytest.mark.parametrize(
        ("line", "tag"),
        [
            ("@@ -1,2 +1,3 @@", StatusTag.DIFF_HUNK),
            ("+added", StatusTag.DIFF_ADDED),
            ("+++ b/file", StatusTag.PLAIN),
            ("-removed", StatusTag.DIFF_REMOVED),
            ("--- a/file", StatusTag.PLAIN),
            (" context", StatusTag.PLAIN),
        ],
    )
    def test_diff_line_tag(self, line: str, tag: StatusTag) -> None:
        assert diff_line_tag(line) is tag

    def test_commit_columns_wide(self) -> None:
        list_width, details_width = commit_columns(200)
        assert list_width == 110
        assert details_width == 89

    def test_commit_columns_narrow_keeps_minimums(self) -> None:
        list_width, details_width = commit_columns(70)
        assert details_width >= 30
        assert list_width >= 30
        assert list_width + details_width + 1 == 70


# =============================================================================
# render()
# =============================================================================


class TestRender:
    """Tests for the full layout."""

    def test_placeholder_before_first_resize(self) -> None:
        layout = render(AppState())
        assert layout.placeholder == "Loading..."
        assert layout.repo_pane is None and layout.detail_pane is None

    def test_repo_list_loading(self) -> None:
        state = _sized().update_list(ResourceKind.REPOSITORIES, pending_request=1)
        pane = render(state).repo_pane
        assert [row.text for row in pane.rows] == ["", "Loading..."]

    def test_repo_list_cursor_marker(self) -> None:
        repos = (Repository(name="api", slug="api"), Repository(name="web", slug="web"))
        state = _sized().update_list(ResourceKind.REPOSITORIES, items=repos, cursor=1)
        rows = [row.text for row in render(state).repo_pane.rows]
        assert rows == ["", "  api", "> web"]

    def test_long_list_shows_more_markers(self) -> None:
        repos = tuple(Repository(name=f"repo-{i}", slug=f"r{i}") for i in range(100))
        state = _sized(height=20).update_list(ResourceKind.REPOSITORIES, items=repos, cursor=50)
        rows = render(state).repo_pane.rows
        assert rows[0].text == MORE_ABOVE_TEXT
        assert rows[-1].text == MORE_BELOW_TEXT
        assert any(row.text == "> repo-50" for row in rows)

    def test_filtered_repo_title(self) -> None:
        state = _sized().update_list(ResourceKind.REPOSITORIES, query="ap")
        assert render(state).repo_pane.title.text == "Repositories [/ap]"

    def test_no_tracked_pipelines(self) -> None:
        state = _detail(View.PIPELINES).update_list(
            ResourceKind.PIPELINES,
            items=(Pipeline(uuid="{p}", build_number=1, branch_name="feature/x"),),
        )
        rows = render(state, NOW).detail_pane.rows
        assert rows[-1].text == NO_TRACKED_PIPELINES_TEXT

    def test_pipeline_row(self) -> None:
        pipeline = Pipeline(
            uuid="{p}",
            build_number=7,
            state="COMPLETED",
            result="SUCCESSFUL",
            branch_name="main",
            created_on="2024-05-01T11:00:00Z",
            started_on="2024-05-01T11:00:00Z",
            completed_on="2024-05-01T11:03:00Z",
        )
        state = _detail(View.PIPELINES).update_list(ResourceKind.PIPELINES, items=(pipeline,))
        row = render(state, NOW).detail_pane.rows[1]

        assert row.text.startswith("> #7 main")
        assert "[COMPLETED] [SUCCESS]" in row.text
        assert "duration: 3m" in row.text
        assert "completed: 57 mins ago" in row.text
        branch_cell = row.cells[2]
        assert branch_cell.style == TRACKED_BRANCH_COLORS["main"]

    def test_pull_request_row(self) -> None:
        pull_request = PullRequest(id=4, title="Add cache", state="OPEN", author="Ann")
        state = _detail(View.PULL_REQUESTS).update_list(
            ResourceKind.PULL_REQUESTS, items=(pull_request,)
        )
        pane = render(state).detail_pane
        assert pane.rows[1].text == "> #4 [OPEN] @Ann Add cache"
        assert [tab.tag for tab in pane.tabs] == [
            StatusTag.TAB_ACTIVE,
            StatusTag.TAB_INACTIVE,
            StatusTag.TAB_INACTIVE,
        ]

    def test_detail_titles(self) -> None:
        assert detail_title(_detail(View.BRANCHES)) == "Branches (API) (esc: back)"
        assert (
            detail_title(_detail(View.PIPELINES))
            == "Pipelines (API) [develop/staging/main/master] (esc: back)"
        )
        log_state = _detail(View.PIPELINE_STEP_LOG, pipeline_ref="#3", step_name="Build")
        assert detail_title(log_state) == "Pipeline Logs (API) #3 - Build (esc: back)"


class TestCommitsView:
    """Tests for the commits list and its diff column."""

    def _state(self) -> AppState:
        commits = (Commit(hash="abcdef1234567890", message="Fix\nbody", author="Ann"),)
        return _detail(
            View.PULL_REQUEST_COMMITS,
            pull_request_id=9,
            pull_request_title="Fix it",
            commit_hash="abcdef1234567890",
        ).update_list(ResourceKind.PULL_REQUEST_COMMITS, items=commits)

    def test_commit_row_and_title(self) -> None:
        pane = render(self._state()).detail_pane
        assert pane.title.text == "PR #9 commits (Fix it) (esc: back)"
        assert pane.rows[1].text == "Commits"
        assert pane.rows[3].text == "> abcdef12 @Ann Fix"

    def test_diff_unavailable_when_nothing_cached(self) -> None:
        side = render(self._state()).detail_pane.side
        assert side.rows[-1].text == DIFF_UNAVAILABLE_TEXT

    def test_diff_lines_are_tagged(self) -> None:
        state = self._state()
        cache = record_changes(state.cache, "abcdef1234567890", (CommitChange(new_path="a"),))
        cache = record_diff(cache, "abcdef1234567890", "@@ -1 +1 @@\n-old\n+new")
        side = render(replace(state, cache=cache)).detail_pane.side

        texts = [row.text for row in side.rows]
        assert texts[:4] == ["", "commit abcdef123456", "files changed: 1", ""]
        assert [row.cells[0].tag for row in side.rows[4:]] == [
            StatusTag.DIFF_HUNK,
            StatusTag.DIFF_REMOVED,
            StatusTag.DIFF_ADDED,
        ]


class TestStatusRow:
    """Tests for the status line priority."""

    def test_filter_prompt_first(self) -> None:
        state = replace(_sized(), filter_mode=True, status=StatusMessage("x")).update_list(
            ResourceKind.REPOSITORIES, query="ab"
        )
        row = status_row(state)
        assert row.text == FILTER_PROMPT.format(query="ab")
        assert row.cells[0].tag is StatusTag.FILTER

    def test_error_status(self) -> None:
        state = replace(_sized(), status=StatusMessage("boom", Severity.ERROR))
        assert status_row(state).cells[0].tag is StatusTag.ERROR

    def test_help_for_repo_list(self) -> None:
        assert status_row(_sized()).text == REPO_HELP
