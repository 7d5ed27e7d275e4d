"""View/selection state machine.

``handle(state, event)`` is the single entry point of the dashboard core. It is
a pure function: every effect comes back as a command for the caller to run,
and every async completion comes back in as an event.

Navigation is table driven. ``PARENT_VIEW`` is the reachability tree used by
"escape", ``SIBLING_VIEWS`` the lateral tab order, ``DRILLS`` the forward
"enter" transitions and ``REFRESHERS`` the "r" reload of each view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from bbview.constants.enums import Pane, ResourceKind, Severity, View
from bbview.constants.limits import SHORT_HASH_LENGTH
from bbview.constants.values import DEFAULT_DIFF_TITLE, DEFAULT_LOG_TITLE, NO_LOG_OUTPUT, WEB_BASE_URL
from bbview.core import polling
from bbview.core.commands import (
    Command,
    OpenInExternalViewer,
    OpenURL,
    Quit,
)
from bbview.core.errors import EmptyIdentityError
from bbview.core.events import (
    Event,
    FetchFailed,
    FetchSucceeded,
    KeyPressed,
    LaunchCompleted,
    PollDue,
    Resized,
)
from bbview.core.fetching import (
    apply_failure,
    apply_success,
    begin_fetch,
    error_status,
    sync_commit_details,
)
from bbview.core.filtering import UNFILTERED_KINDS, clamp_cursor, hovered_item, visible_items
from bbview.models.state.app_state import AppState, ListState, StatusMessage

logger = logging.getLogger(__name__)

Transition = tuple[AppState, list[Command]]
KeyHandler = Callable[[AppState], Transition]

VIEW_LIST_KIND: dict[View, ResourceKind] = {
    View.NONE: ResourceKind.REPOSITORIES,
    View.BRANCHES: ResourceKind.BRANCHES,
    View.PULL_REQUESTS: ResourceKind.PULL_REQUESTS,
    View.PIPELINES: ResourceKind.PIPELINES,
    View.PIPELINE_STEPS: ResourceKind.PIPELINE_STEPS,
    View.PIPELINE_STEP_LOG: ResourceKind.PIPELINE_STEP_LOG,
    View.PULL_REQUEST_COMMITS: ResourceKind.PULL_REQUEST_COMMITS,
}

# None marks the root; View.NONE means "back to the repository list".
PARENT_VIEW: dict[View, View | None] = {
    View.NONE: None,
    View.BRANCHES: View.NONE,
    View.PULL_REQUESTS: View.NONE,
    View.PIPELINES: View.NONE,
    View.PIPELINE_STEPS: View.PIPELINES,
    View.PIPELINE_STEP_LOG: View.PIPELINE_STEPS,
    View.PULL_REQUEST_COMMITS: View.PULL_REQUESTS,
}

SIBLING_VIEWS: tuple[View, ...] = (View.PULL_REQUESTS, View.BRANCHES, View.PIPELINES)

NEXT_KEYS = frozenset({"j", "down"})
PREVIOUS_KEYS = frozenset({"k", "up"})


def start(
    workspace: str = "",
    *,
    poll_interval: float | None = None,
    tracked_branches: tuple[str, ...] | None = None,
) -> Transition:
    """Initial state with the repository list loading."""
    state = AppState(workspace=workspace)
    if poll_interval is not None:
        state = replace(state, poll_interval=poll_interval)
    if tracked_branches is not None:
        state = replace(state, tracked_branches=tuple(tracked_branches))
    state, command = begin_fetch(state, ResourceKind.REPOSITORIES)
    return state, [command]


def active_list_kind(state: AppState) -> ResourceKind:
    if state.pane is Pane.REPO_LIST:
        return ResourceKind.REPOSITORIES
    return VIEW_LIST_KIND[state.view]


# =============================================================================
# Hooks run after the hovered item may have changed
# =============================================================================


def _after_hover_change(state: AppState) -> Transition:
    if state.pane is not Pane.DETAIL:
        return state, []
    if state.view is View.PIPELINES:
        return polling.ensure_poll(state)
    if state.view is View.PULL_REQUEST_COMMITS:
        return sync_commit_details(state)
    return state, []


# =============================================================================
# Forward navigation
# =============================================================================


def _open_view(state: AppState, view: View) -> Transition:
    """Enter a sibling view of the selected repository and load it."""
    state = replace(state, view=view, pane=Pane.DETAIL)
    state, command = begin_fetch(
        state,
        VIEW_LIST_KIND[view],
        repo_slug=state.selection.repo_slug,
    )
    return state, [command]


def _select_repo(view: View) -> KeyHandler:
    def handler(state: AppState) -> Transition:
        if state.pane is not Pane.REPO_LIST:
            return state, []
        repo = hovered_item(state, ResourceKind.REPOSITORIES)
        if repo is None:
            return state, []
        if not repo.slug:
            raise EmptyIdentityError(f"Repository {repo.name or '?'} has no slug")
        selection = replace(state.selection, repo_name=repo.name, repo_slug=repo.slug)
        return _open_view(replace(state, selection=selection), view)

    return handler


def _drill_pipeline_steps(state: AppState) -> Transition:
    pipeline = hovered_item(state, ResourceKind.PIPELINES)
    if pipeline is None:
        return state, []
    if not pipeline.uuid:
        raise EmptyIdentityError("Selected pipeline has no UUID")
    selection = replace(
        state.selection,
        pipeline_ref=f"#{pipeline.build_number}",
        pipeline_uuid=pipeline.uuid,
    )
    state = replace(state, selection=selection, view=View.PIPELINE_STEPS)
    state, command = begin_fetch(
        state,
        ResourceKind.PIPELINE_STEPS,
        repo_slug=selection.repo_slug,
        pipeline_uuid=pipeline.uuid,
    )
    return state, [command]


def _drill_step_log(state: AppState) -> Transition:
    step = hovered_item(state, ResourceKind.PIPELINE_STEPS)
    if step is None or not state.selection.pipeline_uuid:
        return state, []
    if not step.uuid:
        raise EmptyIdentityError("Selected step has no UUID")
    selection = replace(state.selection, step_name=step.name or step.uuid, step_uuid=step.uuid)
    state = replace(state, selection=selection, view=View.PIPELINE_STEP_LOG)
    state, command = begin_fetch(
        state,
        ResourceKind.PIPELINE_STEP_LOG,
        repo_slug=selection.repo_slug,
        pipeline_uuid=selection.pipeline_uuid,
        step_uuid=step.uuid,
    )
    return state, [command]


def _drill_pull_request_commits(state: AppState) -> Transition:
    pull_request = hovered_item(state, ResourceKind.PULL_REQUESTS)
    if pull_request is None:
        return state, []
    if pull_request.id <= 0:
        raise EmptyIdentityError("Selected pull request has no ID")
    selection = replace(
        state.selection,
        pull_request_id=pull_request.id,
        pull_request_title=pull_request.title,
        commit_hash="",
    )
    state = replace(state, selection=selection, view=View.PULL_REQUEST_COMMITS)
    state, command = begin_fetch(
        state,
        ResourceKind.PULL_REQUEST_COMMITS,
        repo_slug=selection.repo_slug,
        pull_request_id=pull_request.id,
    )
    return state, [command]


DRILLS: dict[View, KeyHandler] = {
    View.PIPELINES: _drill_pipeline_steps,
    View.PIPELINE_STEPS: _drill_step_log,
    View.PULL_REQUESTS: _drill_pull_request_commits,
}


def _on_enter(state: AppState) -> Transition:
    if state.pane is Pane.REPO_LIST:
        return _select_repo(View.PULL_REQUESTS)(state)
    drill = DRILLS.get(state.view)
    if drill is None:
        return state, []
    return drill(state)


# =============================================================================
# Lateral and backward navigation
# =============================================================================


def _drop_list(state: AppState, view: View) -> AppState:
    """Forget the list of a view being left.

    A late result for it no longer has a pending request to match and is
    discarded.
    """
    state = state.with_list(VIEW_LIST_KIND[view], ListState())
    if view is View.PIPELINE_STEP_LOG:
        state = replace(state, step_log="")
    return state


def _lateral(step: int) -> KeyHandler:
    def handler(state: AppState) -> Transition:
        if (
            state.pane is not Pane.DETAIL
            or state.view not in SIBLING_VIEWS
            or not state.selection.repo_slug
        ):
            return state, []
        index = SIBLING_VIEWS.index(state.view)
        target = SIBLING_VIEWS[(index + step) % len(SIBLING_VIEWS)]
        return _open_view(_drop_list(state, state.view), target)

    return handler


def _on_escape(state: AppState) -> Transition:
    if state.pane is not Pane.DETAIL:
        return state, []
    parent = PARENT_VIEW[state.view]
    if parent is None:
        return state, []
    state = _drop_list(state, state.view)
    if parent is View.NONE:
        return replace(state, pane=Pane.REPO_LIST, view=View.NONE), []
    return _after_hover_change(replace(state, view=parent))


# =============================================================================
# Cursor movement
# =============================================================================


def _move_cursor(step: int) -> KeyHandler:
    def handler(state: AppState) -> Transition:
        kind = active_list_kind(state)
        total = len(visible_items(state, kind))
        cursor = state.list_state(kind).cursor
        moved = clamp_cursor(cursor + step, total)
        if moved == cursor:
            return state, []
        return _after_hover_change(state.update_list(kind, cursor=moved))

    return handler


# =============================================================================
# Actions
# =============================================================================


def _refresh_repositories(state: AppState) -> Transition:
    state, command = begin_fetch(state, ResourceKind.REPOSITORIES, reset_query=False)
    return state, [command]


def _refresh_sibling(state: AppState) -> Transition:
    state, command = begin_fetch(
        state,
        VIEW_LIST_KIND[state.view],
        reset_query=False,
        repo_slug=state.selection.repo_slug,
    )
    return state, [command]


def _refresh_steps(state: AppState) -> Transition:
    if not state.selection.pipeline_uuid:
        return state, []
    state, command = begin_fetch(
        state,
        ResourceKind.PIPELINE_STEPS,
        repo_slug=state.selection.repo_slug,
        pipeline_uuid=state.selection.pipeline_uuid,
    )
    return state, [command]


def _refresh_step_log(state: AppState) -> Transition:
    if not state.selection.step_uuid:
        return state, []
    state, command = begin_fetch(
        state,
        ResourceKind.PIPELINE_STEP_LOG,
        repo_slug=state.selection.repo_slug,
        pipeline_uuid=state.selection.pipeline_uuid,
        step_uuid=state.selection.step_uuid,
    )
    return state, [command]


def _refresh_commits(state: AppState) -> Transition:
    if state.selection.pull_request_id <= 0:
        return state, []
    state, command = begin_fetch(
        state,
        ResourceKind.PULL_REQUEST_COMMITS,
        reset_query=False,
        repo_slug=state.selection.repo_slug,
        pull_request_id=state.selection.pull_request_id,
    )
    return state, [command]


REFRESHERS: dict[View, KeyHandler] = {
    View.BRANCHES: _refresh_sibling,
    View.PULL_REQUESTS: _refresh_sibling,
    View.PIPELINES: _refresh_sibling,
    View.PIPELINE_STEPS: _refresh_steps,
    View.PIPELINE_STEP_LOG: _refresh_step_log,
    View.PULL_REQUEST_COMMITS: _refresh_commits,
}


def _on_refresh(state: AppState) -> Transition:
    if state.pane is Pane.REPO_LIST:
        return _refresh_repositories(state)
    if not state.selection.repo_slug:
        return state, []
    refresher = REFRESHERS.get(state.view)
    if refresher is None:
        return state, []
    return refresher(state)


def pull_request_url(state: AppState) -> str:
    """Browser URL of the hovered pull request, or ``""`` when none can be built."""
    pull_request = hovered_item(state, ResourceKind.PULL_REQUESTS)
    if pull_request is None:
        return ""
    url = pull_request.url.strip()
    if url.startswith(("https://", "http://")):
        return url
    if pull_request.id > 0 and state.workspace and state.selection.repo_slug:
        return (
            f"{WEB_BASE_URL}/{state.workspace}/{state.selection.repo_slug}"
            f"/pull-requests/{pull_request.id}"
        )
    return ""


def _on_open(state: AppState) -> Transition:
    if state.pane is not Pane.DETAIL or state.view is not View.PULL_REQUESTS:
        return state, []
    if hovered_item(state, ResourceKind.PULL_REQUESTS) is None:
        return state, []
    url = pull_request_url(state)
    if not url:
        raise EmptyIdentityError("Selected PR has no URL")
    return state, [OpenURL(url)]


def _viewer_title(name: str, fallback: str) -> str:
    title = name.strip().replace(" ", "-")
    return title or fallback


def _on_view_external(state: AppState) -> Transition:
    if state.pane is not Pane.DETAIL:
        return state, []
    if state.view is View.PIPELINE_STEP_LOG:
        if state.list_state(ResourceKind.PIPELINE_STEP_LOG).loading:
            return state, []
        text = state.step_log if state.step_log.strip() else NO_LOG_OUTPUT
        title = _viewer_title(state.selection.step_name, DEFAULT_LOG_TITLE)
        return state, [OpenInExternalViewer(text=text, title=title)]
    if state.view is View.PULL_REQUEST_COMMITS:
        commit_hash = state.selection.commit_hash
        if not commit_hash:
            return state, []
        details = state.cache.get(commit_hash)
        if details is None or details.diff is None:
            return replace(state, status=StatusMessage("Diff is still loading")), []
        title = _viewer_title(f"commit-{commit_hash[:SHORT_HASH_LENGTH]}", DEFAULT_DIFF_TITLE)
        return state, [OpenInExternalViewer(text=details.diff, title=title)]
    return state, []


def _on_filter(state: AppState) -> Transition:
    if active_list_kind(state) in UNFILTERED_KINDS:
        return state, []
    return replace(state, filter_mode=True), []


def _on_quit(state: AppState) -> Transition:
    return state, [Quit()]


NAVIGATION_KEYS: dict[str, KeyHandler] = {
    "enter": _on_enter,
    "p": _select_repo(View.PULL_REQUESTS),
    "b": _select_repo(View.BRANCHES),
    "l": _lateral(1),
    "h": _lateral(-1),
    "escape": _on_escape,
    "/": _on_filter,
    "r": _on_refresh,
    "o": _on_open,
    "v": _on_view_external,
    "q": _on_quit,
    "ctrl+c": _on_quit,
    **{key: _move_cursor(1) for key in NEXT_KEYS},
    **{key: _move_cursor(-1) for key in PREVIOUS_KEYS},
}


# =============================================================================
# Filter sub-mode
# =============================================================================


def _set_query(state: AppState, query: str) -> Transition:
    kind = active_list_kind(state)
    state = state.update_list(kind, query=query, cursor=0)
    return _after_hover_change(state)


def _handle_filter_key(state: AppState, key: str) -> Transition:
    kind = active_list_kind(state)
    query = state.list_state(kind).query
    if key == "escape":
        return _set_query(replace(state, filter_mode=False), "")
    if key == "enter":
        return replace(state, filter_mode=False), []
    if key == "backspace":
        if not query:
            return state, []
        return _set_query(state, query[:-1])
    if len(key) == 1 and key.isprintable():
        return _set_query(state, query + key)
    return state, []


# =============================================================================
# Entry point
# =============================================================================


def _handle_key(state: AppState, key: str) -> Transition:
    state = replace(state, status=None)
    if state.filter_mode:
        return _handle_filter_key(state, key)
    handler = NAVIGATION_KEYS.get(key)
    if handler is None:
        return state, []
    try:
        return handler(state)
    except EmptyIdentityError as err:
        logger.debug("Drill refused: %s", err)
        return replace(state, status=error_status(str(err), err)), []


def _handle_launch(state: AppState, event: LaunchCompleted) -> Transition:
    if event.error is not None:
        prefix = "Open URL error" if event.action == "url" else "Viewer error"
        return replace(state, status=error_status(f"{prefix}: {event.error}", event.error)), []
    text = "Opened PR in browser" if event.action == "url" else "Closed viewer"
    return replace(state, status=StatusMessage(text, Severity.INFO)), []


def handle(state: AppState, event: Event) -> Transition:
    """Apply one event and return the next state plus the commands to run."""
    if isinstance(event, KeyPressed):
        return _handle_key(state, event.key)
    if isinstance(event, FetchSucceeded):
        return apply_success(state, event)
    if isinstance(event, FetchFailed):
        return apply_failure(state, event)
    if isinstance(event, PollDue):
        return polling.on_poll_due(state, event.ticket)
    if isinstance(event, Resized):
        return replace(state, width=event.width, height=event.height), []
    if isinstance(event, LaunchCompleted):
        return _handle_launch(state, event)
    raise TypeError(f"Unhandled event: {event!r}")


__all__ = [
    "DRILLS",
    "NAVIGATION_KEYS",
    "PARENT_VIEW",
    "REFRESHERS",
    "SIBLING_VIEWS",
    "VIEW_LIST_KIND",
    "active_list_kind",
    "handle",
    "pull_request_url",
    "start",
]
