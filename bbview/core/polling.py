"""Live poll scheduler for the hovered running pipeline.

At most one poll ticket exists at a time. A ticket is rechecked against the
live-candidate predicate when its timer fires and again when its fetch
resolves; the first recheck that fails drops the ticket, which is the only way
polling stops. Loading a fresh pipeline list retires the ticket, so an older
poll snapshot can never overwrite newer list data.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from bbview.constants.enums import Pane, ResourceKind, Severity, View
from bbview.constants.values import RUNNING_PIPELINE_STATES
from bbview.core.commands import Command, Fetch, FetchRequest, SchedulePoll
from bbview.core.errors import BBViewError
from bbview.core.filtering import clamp_cursor, hovered_item, visible_items
from bbview.models.core.domain import Pipeline
from bbview.models.state.app_state import AppState, PollTicket, StatusMessage

logger = logging.getLogger(__name__)

Transition = tuple[AppState, list[Command]]


def is_running(pipeline: Pipeline) -> bool:
    return pipeline.state.strip().lower() in RUNNING_PIPELINE_STATES


def poll_target(state: AppState) -> Pipeline | None:
    """The pipeline satisfying the live-candidate predicate right now, if any."""
    if state.pane is not Pane.DETAIL or state.view is not View.PIPELINES:
        return None
    pipeline = hovered_item(state, ResourceKind.PIPELINES)
    if pipeline is None or not is_running(pipeline) or not pipeline.uuid:
        return None
    return pipeline


def ensure_poll(state: AppState) -> Transition:
    """Schedule a poll for the current target unless one is already pending for it."""
    target = poll_target(state)
    if target is None:
        return state, []
    repo_slug = state.selection.repo_slug
    if (
        state.poll is not None
        and state.poll.repo_slug == repo_slug
        and state.poll.pipeline_uuid == target.uuid
    ):
        return state, []
    ticket = PollTicket(
        token=state.next_poll_token,
        repo_slug=repo_slug,
        pipeline_uuid=target.uuid,
    )
    logger.debug("Scheduling poll %d for pipeline %s", ticket.token, ticket.pipeline_uuid)
    state = replace(state, poll=ticket, next_poll_token=ticket.token + 1)
    return state, [SchedulePoll(ticket=ticket, delay=state.poll_interval)]


def _still_targeted(state: AppState, ticket: PollTicket) -> bool:
    target = poll_target(state)
    return (
        target is not None
        and target.uuid == ticket.pipeline_uuid
        and state.selection.repo_slug == ticket.repo_slug
    )


def on_poll_due(state: AppState, ticket: PollTicket) -> Transition:
    """Timer fired: fetch the pipeline if it is still the live candidate."""
    if state.poll != ticket:
        logger.debug("Ignoring superseded poll %d", ticket.token)
        return state, []
    if not _still_targeted(state, ticket):
        logger.debug("Stopping poll %d: pipeline no longer live", ticket.token)
        return replace(state, poll=None), []
    request = FetchRequest(
        kind=ResourceKind.PIPELINE,
        repo_slug=ticket.repo_slug,
        pipeline_uuid=ticket.pipeline_uuid,
        poll_token=ticket.token,
    )
    return state, [Fetch(request)]


def _replace_pipeline(state: AppState, pipeline: Pipeline) -> AppState:
    """Merge ``pipeline`` by identity; the cursor stays inside the filtered list."""
    pipelines = state.list_state(ResourceKind.PIPELINES).items
    if not any(item.uuid == pipeline.uuid for item in pipelines):
        return state
    updated = tuple(pipeline if item.uuid == pipeline.uuid else item for item in pipelines)
    state = state.update_list(ResourceKind.PIPELINES, items=updated)
    cursor = state.list_state(ResourceKind.PIPELINES).cursor
    total = len(visible_items(state, ResourceKind.PIPELINES))
    return state.update_list(ResourceKind.PIPELINES, cursor=clamp_cursor(cursor, total))


def _is_current(state: AppState, request: FetchRequest) -> bool:
    return state.poll is not None and state.poll.token == request.poll_token


def _drop_stale(state: AppState, request: FetchRequest) -> AppState | None:
    """``None`` when ``request`` still belongs to the live ticket, else the state to keep."""
    if not _is_current(state, request):
        logger.debug("Dropping superseded poll %d", request.poll_token)
        return state
    if request.repo_slug != state.selection.repo_slug:
        logger.debug("Dropping poll %d for repo %s", request.poll_token, request.repo_slug)
        return replace(state, poll=None)
    return None


def restart_poll(state: AppState) -> Transition:
    """Retire the current ticket and schedule a fresh one if a target remains."""
    return ensure_poll(replace(state, poll=None))


def apply_poll_result(state: AppState, request: FetchRequest, pipeline: Pipeline) -> Transition:
    """Merge a polled pipeline by identity and decide whether to keep polling."""
    stale = _drop_stale(state, request)
    if stale is not None:
        return stale, []
    return restart_poll(_replace_pipeline(state, pipeline))


def apply_poll_failure(state: AppState, request: FetchRequest, error: BBViewError) -> Transition:
    """Report a failed poll; keep polling while the last known state is running."""
    stale = _drop_stale(state, request)
    if stale is not None:
        return stale, []
    logger.warning("Polling pipeline %s failed: %s", request.pipeline_uuid, error)
    state = replace(
        state,
        status=StatusMessage(
            f"Error polling pipeline: {error}",
            Severity.ERROR,
            type(error),
        ),
    )
    return restart_poll(state)


__all__ = [
    "apply_poll_failure",
    "apply_poll_result",
    "ensure_poll",
    "is_running",
    "on_poll_due",
    "poll_target",
    "restart_poll",
]
