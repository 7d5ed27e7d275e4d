"""Dashboard screen configuration - pane titles, help texts, and widget ID constants."""

from __future__ import annotations

from bbview.constants.enums import View

# =============================================================================
# Widget IDs
# =============================================================================

REPO_PANE_ID = "repo-pane"
DETAIL_PANE_ID = "detail-pane"
COMMIT_DETAILS_ID = "commit-details"
STATUS_LINE_ID = "status-line"

# =============================================================================
# Tabs
# =============================================================================

TAB_LABELS: dict[View, str] = {
    View.PULL_REQUESTS: "Pull Requests",
    View.BRANCHES: "Branches",
    View.PIPELINES: "Pipelines",
}

# Drill-down views highlight the tab they were entered from.
TAB_FOR_VIEW: dict[View, View] = {
    View.PULL_REQUESTS: View.PULL_REQUESTS,
    View.PULL_REQUEST_COMMITS: View.PULL_REQUESTS,
    View.BRANCHES: View.BRANCHES,
    View.PIPELINES: View.PIPELINES,
    View.PIPELINE_STEPS: View.PIPELINES,
    View.PIPELINE_STEP_LOG: View.PIPELINES,
}

# =============================================================================
# Pane text
# =============================================================================

REPO_PANE_TITLE = "Repositories"
BACK_HINT = "(esc: back)"
LOADING_TEXT = "Loading..."
LOADING_DIFF_TEXT = "Loading diff..."
NO_MATCHES_TEXT = "No matches"
MORE_ABOVE_TEXT = "  ↑ more"
MORE_BELOW_TEXT = "  ↓ more"
COMMIT_LIST_HEADER = "Commits"
COMMIT_DETAILS_HEADER = "Diff"
SELECT_COMMIT_TEXT = "Select a commit"
NO_DIFF_TEXT = "No textual diff"
DIFF_UNAVAILABLE_TEXT = "Diff unavailable (r: refresh)"
UNKNOWN_AUTHOR = "unknown"

EMPTY_LIST_TEXT: dict[View, str] = {
    View.NONE: "No repositories",
    View.BRANCHES: "No branches",
    View.PULL_REQUESTS: "No pull requests",
    View.PIPELINES: "No pipelines",
    View.PIPELINE_STEPS: "No steps",
    View.PIPELINE_STEP_LOG: "No logs",
    View.PULL_REQUEST_COMMITS: "No commits",
}
NO_TRACKED_PIPELINES_TEXT = "No pipelines for tracked branches"

# =============================================================================
# Help line
# =============================================================================

REPO_HELP = "j/k/↑/↓: navigate  enter/p: pull requests  b: branches  r: refresh  /: filter  q: quit"

HELP_TEXT: dict[View, str] = {
    View.BRANCHES: "h/l: switch tabs  esc: back  j/k/↑/↓: navigate  r: refresh  /: filter  q: quit",
    View.PULL_REQUESTS: (
        "h/l: switch tabs  enter: view commits  esc: back  j/k/↑/↓: navigate  "
        "o: open in browser  r: refresh  /: filter  q: quit"
    ),
    View.PIPELINES: (
        "h/l: switch tabs  enter: view steps  esc: back  j/k/↑/↓: navigate  "
        "r: refresh  /: filter  q: quit"
    ),
    View.PIPELINE_STEPS: "enter: view logs  esc: back to pipelines  j/k/↑/↓: navigate  r: refresh  q: quit",
    View.PIPELINE_STEP_LOG: "v: open in nvim/less  esc: back to steps  j/k/↑/↓: scroll logs  r: refresh  q: quit",
    View.PULL_REQUEST_COMMITS: (
        "j/k/↑/↓: navigate  v: open diff in nvim/less  esc: back to pull requests  "
        "r: refresh  /: filter  q: quit"
    ),
}

FILTER_PROMPT = "Filter: {query}  (esc: cancel, enter: apply)"

# =============================================================================
# Row layout
# =============================================================================

# Columns taken by cursor, id, badge and author around a pull request title.
PULL_REQUEST_ROW_PADDING = 35
COMMIT_ROW_PADDING = 20
BRANCH_COLUMN_WIDTH = 12
# Rows above the diff in the commit details column.
COMMIT_DETAILS_CHROME = 8
DIFF_LINE_MIN_WIDTH = 10
ELLIPSIS = "..."
