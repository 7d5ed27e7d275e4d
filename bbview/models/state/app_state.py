"""Dashboard state snapshot.

The whole dashboard is one immutable ``AppState`` value. The reducer in
``bbview.core.transitions`` produces a new snapshot for every event; nothing
mutates a snapshot after it has been built.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from bbview.constants.defaults import POLL_INTERVAL_DEFAULT, TRACKED_BRANCHES_DEFAULT
from bbview.constants.enums import Pane, ResourceKind, Severity, View
from bbview.models.cache.commit_cache import CommitCache

LIST_KINDS: tuple[ResourceKind, ...] = (
    ResourceKind.REPOSITORIES,
    ResourceKind.BRANCHES,
    ResourceKind.PULL_REQUESTS,
    ResourceKind.PIPELINES,
    ResourceKind.PIPELINE_STEPS,
    ResourceKind.PIPELINE_STEP_LOG,
    ResourceKind.PULL_REQUEST_COMMITS,
)


@dataclass(frozen=True)
class ListState:
    """Items of one resource list plus its cursor and filter.

    ``cursor`` indexes the *filtered* items. ``pending_request`` is the id of
    the fetch whose result this list is waiting for.
    """

    items: tuple[Any, ...] = ()
    cursor: int = 0
    query: str = ""
    pending_request: int | None = None

    @property
    def loading(self) -> bool:
        return self.pending_request is not None


@dataclass(frozen=True)
class Selection:
    """Identities chosen on forward navigation."""

    repo_name: str = ""
    repo_slug: str = ""
    pipeline_ref: str = ""
    pipeline_uuid: str = ""
    step_name: str = ""
    step_uuid: str = ""
    pull_request_id: int = 0
    pull_request_title: str = ""
    commit_hash: str = ""


@dataclass(frozen=True)
class PollTicket:
    """The single scheduled live refresh of one pipeline."""

    token: int
    repo_slug: str
    pipeline_uuid: str


@dataclass(frozen=True)
class StatusMessage:
    """Transient status line text, cleared by the next keypress."""

    text: str
    severity: Severity = Severity.INFO
    error_type: type[BaseException] | None = None


def _empty_lists() -> dict[ResourceKind, ListState]:
    return {kind: ListState() for kind in LIST_KINDS}


@dataclass(frozen=True)
class AppState:
    """Complete dashboard state."""

    workspace: str = ""
    view: View = View.NONE
    pane: Pane = Pane.REPO_LIST
    filter_mode: bool = False
    lists: dict[ResourceKind, ListState] = field(default_factory=_empty_lists)
    selection: Selection = field(default_factory=Selection)
    cache: CommitCache = field(default_factory=CommitCache)
    poll: PollTicket | None = None
    status: StatusMessage | None = None
    step_log: str = ""
    width: int = 0
    height: int = 0
    next_request_id: int = 1
    next_poll_token: int = 1
    poll_interval: float = POLL_INTERVAL_DEFAULT
    tracked_branches: tuple[str, ...] = TRACKED_BRANCHES_DEFAULT

    def list_state(self, kind: ResourceKind) -> ListState:
        return self.lists[kind]

    def with_list(self, kind: ResourceKind, list_state: ListState) -> AppState:
        lists = dict(self.lists)
        lists[kind] = list_state
        return replace(self, lists=lists)

    def update_list(self, kind: ResourceKind, **changes: Any) -> AppState:
        return self.with_list(kind, replace(self.lists[kind], **changes))


__all__ = [
    "LIST_KINDS",
    "AppState",
    "ListState",
    "PollTicket",
    "Selection",
    "StatusMessage",
]
