"""Data fetch orchestration.

Issues one provider request per forward transition and applies results back
onto the list that asked for them. A result is applied only when its request
id is still the list's pending request and the identity it was issued for is
still selected; anything else is stale and dropped.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from bbview.constants.enums import Pane, ResourceKind, Severity, View
from bbview.constants.values import NO_LOG_OUTPUT
from bbview.core import polling, result_cache
from bbview.core.commands import Command, Fetch, FetchRequest
from bbview.core.events import FetchFailed, FetchSucceeded
from bbview.core.filtering import clamp_cursor, hovered_item, visible_items
from bbview.models.state.app_state import LIST_KINDS, AppState, StatusMessage

logger = logging.getLogger(__name__)

Transition = tuple[AppState, list[Command]]

# Lists whose cursor returns to the top when fresh items arrive.
_RESET_CURSOR_KINDS = frozenset(
    {
        ResourceKind.BRANCHES,
        ResourceKind.PULL_REQUESTS,
        ResourceKind.PIPELINE_STEPS,
        ResourceKind.PIPELINE_STEP_LOG,
        ResourceKind.PULL_REQUEST_COMMITS,
    }
)


def error_status(text: str, error: BaseException) -> StatusMessage:
    return StatusMessage(text, Severity.ERROR, type(error))


def begin_fetch(
    state: AppState,
    kind: ResourceKind,
    *,
    reset_query: bool = True,
    **identity: Any,
) -> tuple[AppState, Fetch]:
    """Clear ``kind``'s list, mark it loading and build the one fetch for it."""
    request_id = state.next_request_id
    request = FetchRequest(kind=kind, request_id=request_id, **identity)
    changes: dict[str, Any] = {"items": (), "cursor": 0, "pending_request": request_id}
    if reset_query:
        changes["query"] = ""
    state = replace(state.update_list(kind, **changes), next_request_id=request_id + 1)
    if kind is ResourceKind.PIPELINE_STEP_LOG:
        state = replace(state, step_log="")
    logger.debug("Request %d: %s %s", request_id, kind.value, identity)
    return state, Fetch(request)


def _matches_selection(state: AppState, request: FetchRequest) -> bool:
    selection = state.selection
    kind = request.kind
    if kind is ResourceKind.REPOSITORIES:
        return True
    if request.repo_slug != selection.repo_slug:
        return False
    if kind in (ResourceKind.PIPELINE_STEPS, ResourceKind.PIPELINE_STEP_LOG):
        if request.pipeline_uuid != selection.pipeline_uuid:
            return False
    if kind is ResourceKind.PIPELINE_STEP_LOG and request.step_uuid != selection.step_uuid:
        return False
    if kind is ResourceKind.PULL_REQUEST_COMMITS:
        return request.pull_request_id == selection.pull_request_id
    return True


def _is_current(state: AppState, request: FetchRequest) -> bool:
    pending = state.list_state(request.kind).pending_request
    if pending is None or pending != request.request_id:
        return False
    return _matches_selection(state, request)


def sync_commit_details(state: AppState) -> Transition:
    """Track the hovered commit and make sure its details are cached or coming."""
    if state.pane is not Pane.DETAIL or state.view is not View.PULL_REQUEST_COMMITS:
        return state, []
    commit = hovered_item(state, ResourceKind.PULL_REQUEST_COMMITS)
    commit_hash = commit.hash.strip() if commit is not None else ""
    state = replace(state, selection=replace(state.selection, commit_hash=commit_hash))
    if not commit_hash or not state.selection.repo_slug:
        return state, []
    cache, _, commands = result_cache.get_or_fetch(
        state.cache,
        state.selection.repo_slug,
        commit_hash,
    )
    return replace(state, cache=cache), list(commands)


def _apply_list(state: AppState, kind: ResourceKind, payload: Any) -> AppState:
    list_state = state.list_state(kind)
    if kind is ResourceKind.PIPELINE_STEP_LOG:
        text = payload or ""
        lines = tuple(text.split("\n")) if text.strip() else (NO_LOG_OUTPUT,)
        state = replace(state, step_log=text)
        return state.update_list(kind, items=lines, cursor=0, pending_request=None)

    state = state.update_list(kind, items=tuple(payload), pending_request=None)
    if kind in _RESET_CURSOR_KINDS:
        return state.update_list(kind, cursor=0)
    total = len(visible_items(state, kind))
    return state.update_list(kind, cursor=clamp_cursor(list_state.cursor, total))


def apply_success(state: AppState, event: FetchSucceeded) -> Transition:
    request = event.request
    kind = request.kind

    if kind is ResourceKind.PIPELINE:
        return polling.apply_poll_result(state, request, event.payload)
    if kind is ResourceKind.COMMIT_CHANGES:
        cache = result_cache.record_changes(state.cache, request.commit_hash, event.payload)
        return replace(state, cache=cache), []
    if kind is ResourceKind.COMMIT_DIFF:
        cache = result_cache.record_diff(state.cache, request.commit_hash, event.payload)
        return replace(state, cache=cache), []

    if kind not in LIST_KINDS:
        raise ValueError(f"Unhandled resource kind: {kind}")
    if not _is_current(state, request):
        logger.debug("Dropping stale %s result for request %d", kind.value, request.request_id)
        return state, []

    state = _apply_list(state, kind, event.payload)
    if kind is ResourceKind.PIPELINES:
        # Polls issued against the previous list are superseded by this one.
        return polling.restart_poll(state)
    if kind is ResourceKind.PULL_REQUEST_COMMITS:
        return sync_commit_details(state)
    return state, []


def apply_failure(state: AppState, event: FetchFailed) -> Transition:
    request = event.request
    kind = request.kind
    error = event.error

    if kind is ResourceKind.PIPELINE:
        return polling.apply_poll_failure(state, request, error)
    if kind in (ResourceKind.COMMIT_CHANGES, ResourceKind.COMMIT_DIFF):
        logger.warning("Loading %s for %s failed: %s", kind.label, request.commit_hash, error)
        state = replace(
            state,
            cache=result_cache.record_failure(state.cache, request.commit_hash, kind),
        )
        if request.commit_hash == state.selection.commit_hash:
            state = replace(state, status=error_status(f"Error loading {kind.label}: {error}", error))
        return state, []

    if not _is_current(state, request):
        logger.debug("Dropping stale %s failure for request %d", kind.value, request.request_id)
        return state, []

    logger.warning("Loading %s failed: %s", kind.label, error)
    state = state.update_list(kind, pending_request=None)
    return replace(state, status=error_status(f"Error loading {kind.label}: {error}", error)), []


__all__ = [
    "apply_failure",
    "apply_success",
    "begin_fetch",
    "error_status",
    "sync_commit_details",
]
