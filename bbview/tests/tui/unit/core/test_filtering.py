"""Unit tests for the filter and window engine."""

from __future__ import annotations

from dataclasses import replace

import pytest

from bbview.constants.enums import ResourceKind
from bbview.core.filtering import (
    PIPELINE_FIELDS,
    REPOSITORY_FIELDS,
    clamp_cursor,
    filter_items,
    filter_pipelines,
    hovered_item,
    is_tracked_branch,
    normalize_branch_name,
    visible_items,
    window,
)
from bbview.models.core.domain import Pipeline, Repository
from bbview.models.state.app_state import AppState

TRACKED = ("develop", "staging", "main", "master")


def _repos(*names: str) -> tuple[Repository, ...]:
    return tuple(Repository(name=name, slug=name.lower()) for name in names)


def _pipeline(number: int, branch: str, state: str = "COMPLETED", result: str = "SUCCESSFUL") -> Pipeline:
    return Pipeline(
        uuid=f"{{p-{number}}}",
        build_number=number,
        state=state,
        result=result,
        branch_name=branch,
    )


# =============================================================================
# filter_items
# =============================================================================


class TestFilterItems:
    """Tests for case-insensitive substring filtering."""

    def test_empty_query_returns_everything(self) -> None:
        repos = _repos("Api", "Web")
        assert filter_items(repos, "", REPOSITORY_FIELDS) == repos

    def test_match_is_case_insensitive(self) -> None:
        repos = _repos("Api-Gateway", "Web")
        assert filter_items(repos, "GATE", REPOSITORY_FIELDS) == repos[:1]

    def test_any_field_can_match(self) -> None:
        repo = Repository(name="Display Name", slug="hidden-slug")
        assert filter_items((repo,), "hidden", REPOSITORY_FIELDS) == (repo,)

    def test_result_is_ordered_subsequence(self) -> None:
        repos = _repos("alpha", "beta", "alphabet", "gamma")
        result = filter_items(repos, "alpha", REPOSITORY_FIELDS)
        assert [repo.name for repo in result] == ["alpha", "alphabet"]

    def test_no_match_returns_empty(self) -> None:
        assert filter_items(_repos("alpha"), "zzz", REPOSITORY_FIELDS) == ()

    def test_pipeline_build_number_is_searchable(self) -> None:
        pipelines = (_pipeline(41, "main"), _pipeline(42, "main"))
        assert filter_items(pipelines, "42", PIPELINE_FIELDS) == pipelines[1:]


# =============================================================================
# Tracked branch rule
# =============================================================================


class TestPipelineFilter:
    """Tests for the tracked-branch override rule."""

    def test_empty_query_keeps_only_tracked_branches(self) -> None:
        pipelines = (_pipeline(1, "main"), _pipeline(2, "feature/x"), _pipeline(3, "develop"))
        result = filter_pipelines(pipelines, "", TRACKED)
        assert [p.build_number for p in result] == [1, 3]

    def test_any_query_drops_branch_restriction(self) -> None:
        pipelines = (_pipeline(1, "main"), _pipeline(2, "feature/x"))
        result = filter_pipelines(pipelines, "feature", TRACKED)
        assert [p.build_number for p in result] == [2]

    def test_query_matching_everything_includes_untracked(self) -> None:
        pipelines = (_pipeline(1, "main"), _pipeline(2, "feature/x"))
        assert filter_pipelines(pipelines, "successful", TRACKED) == pipelines

    def test_tracked_check_normalizes_ref_prefix(self) -> None:
        assert is_tracked_branch("refs/heads/main", TRACKED)
        assert is_tracked_branch("MAIN", TRACKED)
        assert not is_tracked_branch("", TRACKED)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("refs/heads/develop", "develop"), ("/main", "main"), ("", "-"), ("  ", "-")],
    )
    def test_normalize_branch_name(self, raw: str, expected: str) -> None:
        assert normalize_branch_name(raw) == expected


# =============================================================================
# Window math
# =============================================================================


class TestWindow:
    """Tests for the scroll window around the cursor."""

    def test_everything_fits(self) -> None:
        assert window(3, 5, 10) == (0, 5)

    def test_window_is_centred_on_cursor(self) -> None:
        assert window(10, 30, 5) == (8, 13)

    def test_window_clamps_at_start(self) -> None:
        assert window(1, 30, 5) == (0, 5)

    def test_window_clamps_at_end(self) -> None:
        assert window(29, 30, 5) == (25, 30)

    def test_even_height_rounds_toward_earlier_index(self) -> None:
        assert window(10, 30, 4) == (8, 12)

    def test_zero_height(self) -> None:
        assert window(0, 10, 0) == (0, 0)

    def test_cursor_always_inside_window(self) -> None:
        for total in range(1, 25):
            for height in range(1, 12):
                for cursor in range(total):
                    start, end = window(cursor, total, height)
                    assert start <= cursor < end
                    assert end - start == min(total, height)

    def test_clamp_cursor(self) -> None:
        assert clamp_cursor(-1, 5) == 0
        assert clamp_cursor(9, 5) == 4
        assert clamp_cursor(3, 0) == 0


# =============================================================================
# State helpers
# =============================================================================


class TestVisibleItems:
    """Tests for per-list filtering from a state snapshot."""

    def test_repositories_use_their_query(self) -> None:
        state = AppState().update_list(
            ResourceKind.REPOSITORIES, items=_repos("api", "web"), query="we"
        )
        assert [repo.name for repo in visible_items(state, ResourceKind.REPOSITORIES)] == ["web"]

    def test_pipelines_use_state_tracked_branches(self) -> None:
        state = replace(AppState(), tracked_branches=("release",)).update_list(
            ResourceKind.PIPELINES,
            items=(_pipeline(1, "main"), _pipeline(2, "release")),
        )
        assert [p.build_number for p in visible_items(state, ResourceKind.PIPELINES)] == [2]

    def test_hovered_item_follows_filtered_cursor(self) -> None:
        state = AppState().update_list(
            ResourceKind.REPOSITORIES,
            items=_repos("api", "web", "webhooks"),
            query="web",
            cursor=1,
        )
        assert hovered_item(state, ResourceKind.REPOSITORIES).name == "webhooks"

    def test_hovered_item_none_when_empty(self) -> None:
        assert hovered_item(AppState(), ResourceKind.BRANCHES) is None
