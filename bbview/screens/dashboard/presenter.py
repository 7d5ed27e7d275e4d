"""Dashboard presenter - pure rendering of dashboard state into tagged rows.

``render(state)`` never touches Textual. It returns a ``DashboardLayout`` of
plain-text cells, each carrying a semantic ``StatusTag``; the screen maps tags
onto rich styles. The formatting helpers (badges, durations, relative times,
branch colours) live here too so they can be tested on their own.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from bbview.constants.enums import Pane, ResourceKind, Severity, StatusTag, View
from bbview.constants.limits import (
    CHROME_HEIGHT,
    COMMIT_DETAILS_MIN_WIDTH,
    COMMIT_LIST_MIN_WIDTH,
    COMMIT_LIST_PREFERRED_WIDTH,
    COMMIT_LIST_WIDTH_RATIO,
    COMMIT_MESSAGE_MIN_WIDTH,
    DETAIL_HASH_LENGTH,
    DETAIL_PANE_MIN_WIDTH,
    PANE_MIN_HEIGHT,
    REPO_PANE_MIN_WIDTH,
    SHORT_HASH_LENGTH,
)
from bbview.constants.values import BRANCH_COLOR_PALETTE, TRACKED_BRANCH_COLORS
from bbview.core.filtering import normalize_branch_name, visible_items, window
from bbview.core.transitions import SIBLING_VIEWS, VIEW_LIST_KIND, active_list_kind
from bbview.models.core.domain import (
    Branch,
    Commit,
    Pipeline,
    PipelineStep,
    PullRequest,
    Repository,
)
from bbview.models.state.app_state import AppState
from bbview.screens.dashboard.config import (
    BACK_HINT,
    BRANCH_COLUMN_WIDTH,
    COMMIT_DETAILS_CHROME,
    COMMIT_DETAILS_HEADER,
    COMMIT_LIST_HEADER,
    COMMIT_ROW_PADDING,
    DIFF_LINE_MIN_WIDTH,
    DIFF_UNAVAILABLE_TEXT,
    ELLIPSIS,
    EMPTY_LIST_TEXT,
    FILTER_PROMPT,
    HELP_TEXT,
    LOADING_DIFF_TEXT,
    LOADING_TEXT,
    MORE_ABOVE_TEXT,
    MORE_BELOW_TEXT,
    NO_DIFF_TEXT,
    NO_MATCHES_TEXT,
    NO_TRACKED_PIPELINES_TEXT,
    PULL_REQUEST_ROW_PADDING,
    REPO_HELP,
    REPO_PANE_TITLE,
    SELECT_COMMIT_TEXT,
    TAB_FOR_VIEW,
    TAB_LABELS,
    UNKNOWN_AUTHOR,
)

# Horizontal space the terminal frame takes around each pane.
_REPO_PANE_MARGIN = 10
_DETAIL_PANE_MARGIN = 4

# ============================================================================
# Layout value types
# ============================================================================


@dataclass(frozen=True)
class Cell:
    """A run of text with one semantic tag.

    ``style`` is an explicit rich style for values that are data driven (the
    pipeline branch colour) and overrides the tag's style when set.
    """

    text: str
    tag: StatusTag = StatusTag.PLAIN
    style: str = ""


@dataclass(frozen=True)
class Row:
    """One line of a pane."""

    cells: tuple[Cell, ...] = ()

    @property
    def text(self) -> str:
        return "".join(cell.text for cell in self.cells)

    @classmethod
    def of(cls, text: str, tag: StatusTag = StatusTag.PLAIN) -> Row:
        return cls((Cell(text, tag),))


BLANK_ROW = Row()


@dataclass(frozen=True)
class PaneLayout:
    """A titled pane. ``side`` is the commit details column of the commits view."""

    title: Cell
    rows: tuple[Row, ...]
    width: int
    height: int
    tabs: tuple[Cell, ...] = ()
    side: PaneLayout | None = None


@dataclass(frozen=True)
class DashboardLayout:
    """Everything the screen draws for one state snapshot.

    Before the first resize ``placeholder`` is set and no pane is present.
    """

    status: Row
    repo_pane: PaneLayout | None = None
    detail_pane: PaneLayout | None = None
    placeholder: str = ""


# ============================================================================
# Formatting helpers
# ============================================================================

_PULL_REQUEST_BADGES: dict[str, tuple[str, StatusTag]] = {
    "open": ("[OPEN]", StatusTag.PR_OPEN),
    "merged": ("[MERGED]", StatusTag.PR_MERGED),
    "declined": ("[DECLINED]", StatusTag.PR_DECLINED),
    "superseded": ("[SUPERSEDED]", StatusTag.PR_SUPERSEDED),
}

_PIPELINE_STATE_BADGES: dict[str, tuple[str, StatusTag]] = {
    "completed": ("[COMPLETED]", StatusTag.STATE_COMPLETED),
    "in_progress": ("[RUNNING]", StatusTag.STATE_RUNNING),
    "running": ("[RUNNING]", StatusTag.STATE_RUNNING),
    "pending": ("[PENDING]", StatusTag.STATE_PENDING),
    "paused": ("[PAUSED]", StatusTag.STATE_PAUSED),
    "error": ("[ERROR]", StatusTag.STATE_ERROR),
}

_PIPELINE_RESULT_BADGES: dict[str, tuple[str, StatusTag]] = {
    "successful": ("[SUCCESS]", StatusTag.RESULT_SUCCESS),
    "success": ("[SUCCESS]", StatusTag.RESULT_SUCCESS),
    "failed": ("[FAILED]", StatusTag.RESULT_FAILED),
    "error": ("[FAILED]", StatusTag.RESULT_FAILED),
    "stopped": ("[STOPPED]", StatusTag.RESULT_STOPPED),
    "expired": ("[EXPIRED]", StatusTag.RESULT_EXPIRED),
    "": ("[N/A]", StatusTag.RESULT_NONE),
}


def _badge(value: str, table: dict[str, tuple[str, StatusTag]]) -> Cell:
    known = table.get(value.strip().lower())
    if known is None:
        return Cell(f"[{value.upper()}]")
    return Cell(*known)


def pull_request_badge(state: str, draft: bool = False) -> Cell:
    if draft and state.strip().lower() == "open":
        return Cell("[DRAFT]", StatusTag.PR_DRAFT)
    return _badge(state, _PULL_REQUEST_BADGES)


def pipeline_state_badge(state: str) -> Cell:
    return _badge(state, _PIPELINE_STATE_BADGES)


def pipeline_result_badge(result: str) -> Cell:
    return _badge(result, _PIPELINE_RESULT_BADGES)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp; ``None`` when empty or malformed."""
    value = value.strip()
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def short_timestamp(value: str) -> str:
    """``YYYY-MM-DD HH:MM`` in local time, ``-`` when empty, raw text when unparsable."""
    if not value:
        return "-"
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M")


def pipeline_duration(started_on: str, completed_on: str, now: datetime | None = None) -> str:
    """Elapsed run time as ``Ns``, ``Nm`` or ``XhYm``.

    A run without a completion time is measured up to ``now``. Returns ``""``
    when the start is unknown or after the end.
    """
    start = parse_timestamp(started_on)
    if start is None:
        return ""
    end = parse_timestamp(completed_on) or now or datetime.now(timezone.utc)
    if end < start:
        return ""
    seconds = int((end - start).total_seconds())
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    return f"{seconds // 3600}h{seconds // 60 % 60}m"


def _plural(count: int, unit: str, plural_unit: str) -> str:
    if count == 1:
        return f"1 {unit} ago"
    return f"{count} {plural_unit} ago"


def time_ago(completed_on: str, now: datetime | None = None) -> str:
    completed = parse_timestamp(completed_on)
    if completed is None:
        return ""
    elapsed = int(((now or datetime.now(timezone.utc)) - completed).total_seconds())
    if elapsed < 60:
        return "just now"
    if elapsed < 3600:
        return _plural(elapsed // 60, "min", "mins")
    if elapsed < 86400:
        return _plural(elapsed // 3600, "hr", "hrs")
    return _plural(elapsed // 86400, "day", "days")


def fnv1a_32(data: bytes) -> int:
    value = 0x811C9DC5
    for byte in data:
        value ^= byte
        value = (value * 0x01000193) & 0xFFFFFFFF
    return value


def branch_color(branch: str) -> str:
    """Fixed colour for tracked branches, a stable palette colour otherwise."""
    fixed = TRACKED_BRANCH_COLORS.get(branch.strip().lower())
    if fixed is not None:
        return fixed
    return BRANCH_COLOR_PALETTE[fnv1a_32(branch.encode("utf-8")) % len(BRANCH_COLOR_PALETTE)]


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS


def diff_line_tag(line: str) -> StatusTag:
    if line.startswith("@@"):
        return StatusTag.DIFF_HUNK
    if line.startswith("+") and not line.startswith("+++"):
        return StatusTag.DIFF_ADDED
    if line.startswith("-") and not line.startswith("---"):
        return StatusTag.DIFF_REMOVED
    return StatusTag.PLAIN


# ============================================================================
# Pane geometry
# ============================================================================


def available_height(state: AppState) -> int:
    return max(state.height - CHROME_HEIGHT, PANE_MIN_HEIGHT)


def repo_pane_width(state: AppState) -> int:
    return max((state.width - _REPO_PANE_MARGIN) // 3, REPO_PANE_MIN_WIDTH)


def detail_pane_width(state: AppState) -> int:
    return max(state.width - _DETAIL_PANE_MARGIN, DETAIL_PANE_MIN_WIDTH)


def commit_columns(pane_width: int) -> tuple[int, int]:
    """Split the commits view into list and details widths."""
    list_width = max(int(pane_width * COMMIT_LIST_WIDTH_RATIO), COMMIT_LIST_PREFERRED_WIDTH)
    details_width = pane_width - list_width - 1
    if details_width < COMMIT_DETAILS_MIN_WIDTH:
        details_width = COMMIT_DETAILS_MIN_WIDTH
        list_width = pane_width - details_width - 1
        if list_width < COMMIT_LIST_MIN_WIDTH:
            list_width = COMMIT_LIST_MIN_WIDTH
            details_width = pane_width - list_width - 1
    return list_width, details_width


# ============================================================================
# Row formatters
# ============================================================================

RowFormatter = Callable[[Any], Sequence[Cell]]


def _repository_cells(repo: Repository) -> Sequence[Cell]:
    return (Cell(repo.name),)


def _branch_cells(branch: Branch) -> Sequence[Cell]:
    return (Cell(branch.name),)


def _pull_request_formatter(pane_width: int) -> RowFormatter:
    def cells(pull_request: PullRequest) -> Sequence[Cell]:
        max_title = max(
            pane_width - PULL_REQUEST_ROW_PADDING - len(pull_request.author),
            COMMIT_MESSAGE_MIN_WIDTH,
        )
        return (
            Cell(f"#{pull_request.id} "),
            pull_request_badge(pull_request.state, pull_request.draft),
            Cell(" "),
            Cell(f"@{pull_request.author}", StatusTag.AUTHOR),
            Cell(" "),
            Cell(truncate(pull_request.title, max_title)),
        )

    return cells


def _pipeline_formatter(now: datetime | None) -> RowFormatter:
    def cells(pipeline: Pipeline) -> Sequence[Cell]:
        branch = normalize_branch_name(pipeline.branch_name)
        details = f" created: {short_timestamp(pipeline.created_on)}"
        duration = pipeline_duration(pipeline.started_on, pipeline.completed_on, now)
        if duration:
            details += f" duration: {duration}"
        ago = time_ago(pipeline.completed_on, now)
        if ago:
            details += f" completed: {ago}"
        return (
            Cell(f"#{pipeline.build_number} "),
            Cell(branch.ljust(BRANCH_COLUMN_WIDTH), StatusTag.BRANCH, branch_color(branch)),
            Cell(" "),
            pipeline_state_badge(pipeline.state),
            Cell(" "),
            pipeline_result_badge(pipeline.result),
            Cell(details),
        )

    return cells


def _step_formatter(now: datetime | None) -> RowFormatter:
    def cells(step: PipelineStep) -> Sequence[Cell]:
        name = step.name
        duration = pipeline_duration(step.started_on, step.completed_on, now)
        if duration:
            name = f"{name} ({duration})"
        return (
            pipeline_state_badge(step.state),
            Cell(" "),
            pipeline_result_badge(step.result),
            Cell(" "),
            Cell(name),
        )

    return cells


def _log_line_cells(line: str) -> Sequence[Cell]:
    return (Cell(line),)


def _commit_formatter(list_width: int) -> RowFormatter:
    def cells(commit: Commit) -> Sequence[Cell]:
        author = commit.author.strip() or UNKNOWN_AUTHOR
        message = commit.message.split("\n", 1)[0]
        max_message = max(list_width - COMMIT_ROW_PADDING - len(author), COMMIT_MESSAGE_MIN_WIDTH)
        return (
            Cell(f"{commit.hash[:SHORT_HASH_LENGTH]} "),
            Cell(f"@{author}", StatusTag.AUTHOR),
            Cell(" "),
            Cell(truncate(message, max_message)),
        )

    return cells


# ============================================================================
# Panes
# ============================================================================


def _list_rows(
    state: AppState,
    kind: ResourceKind,
    height: int,
    format_row: RowFormatter,
    empty_text: str,
    *,
    focused: bool = True,
    no_match_text: str = NO_MATCHES_TEXT,
) -> list[Row]:
    """Windowed rows for one list, starting with the separator row.

    The separator turns into a "more" marker when rows are hidden above the
    window; a trailing marker is added when rows are hidden below it.
    """
    list_state = state.list_state(kind)
    if list_state.loading:
        return [BLANK_ROW, Row.of(LOADING_TEXT, StatusTag.LOADING)]
    if not list_state.items:
        return [BLANK_ROW, Row.of(empty_text, StatusTag.MUTED)]
    items = visible_items(state, kind)
    if not items:
        return [BLANK_ROW, Row.of(no_match_text, StatusTag.MUTED)]

    start, end = window(list_state.cursor, len(items), height)
    rows = [Row.of(MORE_ABOVE_TEXT, StatusTag.MUTED) if start > 0 else BLANK_ROW]
    for index in range(start, end):
        if focused and index == list_state.cursor:
            cursor = Cell("> ", StatusTag.CURSOR)
        else:
            cursor = Cell("  ")
        rows.append(Row((cursor, *format_row(items[index]))))
    if end < len(items):
        rows.append(Row.of(MORE_BELOW_TEXT, StatusTag.MUTED))
    return rows


def _repo_pane(state: AppState) -> PaneLayout:
    height = available_height(state)
    query = state.list_state(ResourceKind.REPOSITORIES).query
    title = f"{REPO_PANE_TITLE} [/{query}]" if query else REPO_PANE_TITLE
    focused = state.pane is Pane.REPO_LIST
    rows = _list_rows(
        state,
        ResourceKind.REPOSITORIES,
        height - 2,
        _repository_cells,
        EMPTY_LIST_TEXT[View.NONE],
        focused=focused,
    )
    title_tag = StatusTag.TITLE_ACTIVE if focused else StatusTag.TITLE_INACTIVE
    return PaneLayout(
        title=Cell(title, title_tag),
        rows=tuple(rows),
        width=repo_pane_width(state),
        height=height,
    )


def _tabs(view: View) -> tuple[Cell, ...]:
    active = TAB_FOR_VIEW.get(view)
    return tuple(
        Cell(
            f"  {TAB_LABELS[sibling]}  ",
            StatusTag.TAB_ACTIVE if sibling is active else StatusTag.TAB_INACTIVE,
        )
        for sibling in SIBLING_VIEWS
    )


def detail_title(state: AppState) -> str:
    selection = state.selection
    view = state.view
    query = state.list_state(VIEW_LIST_KIND[view]).query
    repo = f" ({selection.repo_name})" if selection.repo_name else ""

    if view is View.BRANCHES:
        title = f"Branches [/{query}]" if query else f"Branches{repo}"
    elif view is View.PULL_REQUESTS:
        title = f"Pull Requests [/{query}]" if query else f"Pull Requests{repo}"
    elif view is View.PIPELINES:
        title = f"Pipelines{repo}"
        if query:
            title += f" [/{query}]"
        else:
            title += f" [{'/'.join(state.tracked_branches)}]"
    elif view is View.PIPELINE_STEPS:
        title = f"Pipeline Steps{repo}"
        if selection.pipeline_ref:
            title += f" {selection.pipeline_ref}"
    elif view is View.PIPELINE_STEP_LOG:
        title = f"Pipeline Logs{repo}"
        if selection.pipeline_ref:
            title += f" {selection.pipeline_ref}"
        if selection.step_name:
            title += f" - {selection.step_name}"
    elif view is View.PULL_REQUEST_COMMITS:
        title = f"PR #{selection.pull_request_id} commits"
        if selection.pull_request_title.strip():
            title += f" ({selection.pull_request_title})"
        if query:
            title += f" [/{query}]"
    else:
        return ""
    return f"{title} {BACK_HINT}"


def _commit_detail_rows(state: AppState, details_width: int) -> list[Row]:
    commit_hash = state.selection.commit_hash
    rows = [BLANK_ROW]
    if not commit_hash:
        rows.append(Row.of(SELECT_COMMIT_TEXT, StatusTag.MUTED))
        return rows

    rows.append(Row.of(f"commit {commit_hash[:DETAIL_HASH_LENGTH]}"))
    details = state.cache.get(commit_hash)
    if details is not None and details.changes is not None:
        rows.append(Row.of(f"files changed: {len(details.changes)}"))
    rows.append(BLANK_ROW)

    if details is None or details.diff is None:
        if state.cache.is_in_flight(commit_hash, ResourceKind.COMMIT_DIFF):
            rows.append(Row.of(LOADING_DIFF_TEXT, StatusTag.LOADING))
        else:
            rows.append(Row.of(DIFF_UNAVAILABLE_TEXT, StatusTag.MUTED))
        return rows
    if not details.diff.strip():
        rows.append(Row.of(NO_DIFF_TEXT, StatusTag.MUTED))
        return rows

    lines = details.diff.split("\n")
    max_rows = max(available_height(state) - COMMIT_DETAILS_CHROME, 1)
    max_width = max(details_width - 2, DIFF_LINE_MIN_WIDTH)
    rows.extend(Row.of(truncate(line, max_width), diff_line_tag(line)) for line in lines[:max_rows])
    if len(lines) > max_rows:
        rows.append(Row.of(f"  +{len(lines) - max_rows} more diff lines", StatusTag.MUTED))
    return rows


def _detail_pane(state: AppState, now: datetime | None) -> PaneLayout:
    view = state.view
    kind = VIEW_LIST_KIND[view]
    width = detail_pane_width(state)
    height = available_height(state)
    list_height = height - 3
    empty_text = EMPTY_LIST_TEXT[view]
    title = Cell(detail_title(state), StatusTag.TITLE_ACTIVE)
    side: PaneLayout | None = None

    if view is View.PULL_REQUEST_COMMITS:
        list_width, details_width = commit_columns(width)
        rows = [BLANK_ROW, Row.of(COMMIT_LIST_HEADER)]
        rows.extend(
            _list_rows(state, kind, max(list_height, 1), _commit_formatter(list_width), empty_text)
        )
        side = PaneLayout(
            title=Cell(COMMIT_DETAILS_HEADER, StatusTag.DETAIL_HEADER),
            rows=tuple(_commit_detail_rows(state, details_width)),
            width=details_width,
            height=list_height,
        )
    else:
        formatters: dict[View, RowFormatter] = {
            View.BRANCHES: _branch_cells,
            View.PULL_REQUESTS: _pull_request_formatter(width),
            View.PIPELINES: _pipeline_formatter(now),
            View.PIPELINE_STEPS: _step_formatter(now),
            View.PIPELINE_STEP_LOG: _log_line_cells,
        }
        no_match_text = NO_MATCHES_TEXT
        if view is View.PIPELINES and not state.list_state(kind).query:
            no_match_text = NO_TRACKED_PIPELINES_TEXT
        rows = _list_rows(
            state,
            kind,
            list_height,
            formatters[view],
            empty_text,
            no_match_text=no_match_text,
        )

    return PaneLayout(
        title=title,
        rows=tuple(rows),
        width=width,
        height=height,
        tabs=_tabs(view),
        side=side,
    )


def status_row(state: AppState) -> Row:
    """Filter prompt, then transient message, then the key help for the view."""
    if state.filter_mode:
        query = state.list_state(active_list_kind(state)).query
        return Row.of(FILTER_PROMPT.format(query=query), StatusTag.FILTER)
    if state.status is not None:
        tag = StatusTag.ERROR if state.status.severity is Severity.ERROR else StatusTag.MESSAGE
        return Row.of(state.status.text, tag)
    if state.pane is Pane.REPO_LIST:
        return Row.of(REPO_HELP, StatusTag.HELP)
    return Row.of(HELP_TEXT.get(state.view, REPO_HELP), StatusTag.HELP)


def render(state: AppState, now: datetime | None = None) -> DashboardLayout:
    """Build the layout for ``state``.

    Args:
        state: Dashboard state snapshot.
        now: Reference time for durations and relative times; the current
            time when omitted.
    """
    if state.width <= 0 or state.height <= 0:
        return DashboardLayout(status=BLANK_ROW, placeholder=LOADING_TEXT)
    status = status_row(state)
    if state.pane is Pane.REPO_LIST or state.view is View.NONE:
        return DashboardLayout(status=status, repo_pane=_repo_pane(state))
    return DashboardLayout(status=status, detail_pane=_detail_pane(state, now))


__all__ = [
    "Cell",
    "DashboardLayout",
    "PaneLayout",
    "Row",
    "branch_color",
    "commit_columns",
    "detail_title",
    "diff_line_tag",
    "fnv1a_32",
    "parse_timestamp",
    "pipeline_duration",
    "pipeline_result_badge",
    "pipeline_state_badge",
    "pull_request_badge",
    "render",
    "short_timestamp",
    "status_row",
    "time_ago",
    "truncate",
]
