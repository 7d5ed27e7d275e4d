"""Unit tests for fetch orchestration."""

from __future__ import annotations

from dataclasses import replace

from bbview.constants.enums import Pane, ResourceKind, View
from bbview.core.events import FetchSucceeded
from bbview.core.fetching import apply_success, begin_fetch
from bbview.core.polling import is_running, poll_target
from bbview.models.core.domain import Pipeline, Repository
from bbview.models.state.app_state import AppState, Selection


class TestBeginFetch:
    """Tests for starting a list fetch."""

    def test_marks_list_loading_and_advances_request_id(self) -> None:
        state = AppState().update_list(ResourceKind.BRANCHES, items=("x",), cursor=3, query="ma")
        state, command = begin_fetch(state, ResourceKind.BRANCHES, repo_slug="api")

        branches = state.list_state(ResourceKind.BRANCHES)
        assert branches.items == ()
        assert branches.cursor == 0
        assert branches.query == ""
        assert branches.pending_request == command.request.request_id
        assert state.next_request_id == command.request.request_id + 1
        assert command.request.repo_slug == "api"

    def test_keep_query(self) -> None:
        state = AppState().update_list(ResourceKind.BRANCHES, query="ma")
        state, _ = begin_fetch(state, ResourceKind.BRANCHES, reset_query=False)
        assert state.list_state(ResourceKind.BRANCHES).query == "ma"

    def test_log_fetch_clears_log_text(self) -> None:
        state = replace(AppState(), step_log="old")
        state, _ = begin_fetch(state, ResourceKind.PIPELINE_STEP_LOG)
        assert state.step_log == ""


class TestApplySuccess:
    """Tests for applying list results."""

    def test_repository_refresh_clamps_cursor(self) -> None:
        state = AppState().update_list(ResourceKind.REPOSITORIES, cursor=4)
        state, command = begin_fetch(state, ResourceKind.REPOSITORIES, reset_query=False)
        state = state.update_list(ResourceKind.REPOSITORIES, cursor=4)
        repos = (Repository(name="a", slug="a"), Repository(name="b", slug="b"))

        state, _ = apply_success(state, FetchSucceeded(command.request, repos))
        assert state.list_state(ResourceKind.REPOSITORIES).cursor == 1


class TestPollTarget:
    """Tests for the live-candidate predicate."""

    def _state(self, pipeline: Pipeline) -> AppState:
        return replace(
            AppState(),
            pane=Pane.DETAIL,
            view=View.PIPELINES,
            selection=Selection(repo_slug="api"),
        ).update_list(ResourceKind.PIPELINES, items=(pipeline,))

    def test_running_states(self) -> None:
        assert is_running(Pipeline(state="IN_PROGRESS"))
        assert is_running(Pipeline(state=" running "))
        assert not is_running(Pipeline(state="PENDING"))

    def test_hovered_running_pipeline_is_target(self) -> None:
        pipeline = Pipeline(uuid="{p}", state="IN_PROGRESS", branch_name="main")
        assert poll_target(self._state(pipeline)) == pipeline

    def test_pipeline_without_uuid_is_not_target(self) -> None:
        pipeline = Pipeline(state="IN_PROGRESS", branch_name="main")
        assert poll_target(self._state(pipeline)) is None

    def test_other_view_has_no_target(self) -> None:
        pipeline = Pipeline(uuid="{p}", state="IN_PROGRESS", branch_name="main")
        state = replace(self._state(pipeline), view=View.BRANCHES)
        assert poll_target(state) is None
