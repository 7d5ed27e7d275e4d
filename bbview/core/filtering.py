"""Filter and window engine.

Pure functions: substring filtering per resource kind and the viewport math
used to scroll long lists around the cursor.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from operator import attrgetter
from typing import TYPE_CHECKING, Any

from bbview.constants.enums import ResourceKind

if TYPE_CHECKING:
    from bbview.models.state.app_state import AppState

Selector = Callable[[Any], str]

REPOSITORY_FIELDS: tuple[Selector, ...] = (attrgetter("name"), attrgetter("slug"))
BRANCH_FIELDS: tuple[Selector, ...] = (attrgetter("name"),)
PULL_REQUEST_FIELDS: tuple[Selector, ...] = (
    attrgetter("title"),
    attrgetter("author"),
    attrgetter("source_branch"),
)
PIPELINE_FIELDS: tuple[Selector, ...] = (
    attrgetter("state"),
    attrgetter("result"),
    lambda pipeline: str(pipeline.build_number),
    attrgetter("branch_name"),
)
COMMIT_FIELDS: tuple[Selector, ...] = (
    attrgetter("hash"),
    attrgetter("message"),
    attrgetter("author"),
)

FIELD_SELECTORS: dict[ResourceKind, tuple[Selector, ...]] = {
    ResourceKind.REPOSITORIES: REPOSITORY_FIELDS,
    ResourceKind.BRANCHES: BRANCH_FIELDS,
    ResourceKind.PULL_REQUESTS: PULL_REQUEST_FIELDS,
    ResourceKind.PIPELINES: PIPELINE_FIELDS,
    ResourceKind.PULL_REQUEST_COMMITS: COMMIT_FIELDS,
}

# Lists without a filter; their query is never editable.
UNFILTERED_KINDS = frozenset({ResourceKind.PIPELINE_STEPS, ResourceKind.PIPELINE_STEP_LOG})


def filter_items(
    items: Iterable[Any],
    query: str,
    selectors: Sequence[Selector],
) -> tuple[Any, ...]:
    """Return the items where any selected field contains ``query``.

    Matching is case-insensitive and keeps the original order. An empty query
    returns every item.
    """
    items = tuple(items)
    if not query:
        return items
    needle = query.lower()
    return tuple(
        item
        for item in items
        if any(needle in (selector(item) or "").lower() for selector in selectors)
    )


def normalize_branch_name(branch_name: str) -> str:
    """Strip ``refs/heads/`` and leading slashes; ``-`` for an empty branch."""
    branch = branch_name.strip().removeprefix("refs/heads/").removeprefix("/")
    return branch or "-"


def is_tracked_branch(branch_name: str, tracked_branches: Iterable[str]) -> bool:
    branch = normalize_branch_name(branch_name).lower()
    return branch in {name.lower() for name in tracked_branches}


def filter_pipelines(
    items: Iterable[Any],
    query: str,
    tracked_branches: Iterable[str],
) -> tuple[Any, ...]:
    """Filter pipelines with the tracked-branch override rule.

    With an empty query only pipelines on tracked branches are shown. As soon
    as any query text is present the branch restriction is dropped and the
    whole list is searched.
    """
    items = tuple(items)
    if not query:
        tracked = tuple(tracked_branches)
        return tuple(item for item in items if is_tracked_branch(item.branch_name, tracked))
    return filter_items(items, query, PIPELINE_FIELDS)


def window(cursor: int, total: int, height: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of a list to show around ``cursor``.

    When everything fits the full range is returned. Otherwise a window of
    ``height`` rows is centred on the cursor (rounding toward the earlier
    index) and clamped to the sequence boundaries.
    """
    if total <= height:
        return 0, total
    if height <= 0:
        return 0, 0
    start = cursor - height // 2
    start = max(0, min(start, total - height))
    return start, start + height


def clamp_cursor(cursor: int, total: int) -> int:
    if total <= 0:
        return 0
    return max(0, min(cursor, total - 1))


def visible_items(state: AppState, kind: ResourceKind) -> tuple[Any, ...]:
    """Items of ``kind`` after applying that list's query."""
    list_state = state.list_state(kind)
    if kind is ResourceKind.PIPELINES:
        return filter_pipelines(list_state.items, list_state.query, state.tracked_branches)
    if kind in UNFILTERED_KINDS:
        return list_state.items
    return filter_items(list_state.items, list_state.query, FIELD_SELECTORS[kind])


def hovered_item(state: AppState, kind: ResourceKind) -> Any | None:
    """The item under the cursor of ``kind``'s filtered list, if any."""
    items = visible_items(state, kind)
    cursor = state.list_state(kind).cursor
    if 0 <= cursor < len(items):
        return items[cursor]
    return None


__all__ = [
    "FIELD_SELECTORS",
    "UNFILTERED_KINDS",
    "clamp_cursor",
    "filter_items",
    "filter_pipelines",
    "hovered_item",
    "is_tracked_branch",
    "normalize_branch_name",
    "visible_items",
    "window",
]
