"""All enum definitions for the TUI.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Navigation Enums
# =============================================================================


class View(Enum):
    """Drill-down views shown in the detail pane."""

    NONE = "none"
    BRANCHES = "branches"
    PULL_REQUESTS = "pull_requests"
    PIPELINES = "pipelines"
    PIPELINE_STEPS = "pipeline_steps"
    PIPELINE_STEP_LOG = "pipeline_step_log"
    PULL_REQUEST_COMMITS = "pull_request_commits"


class Pane(Enum):
    """Which list owns keyboard focus."""

    REPO_LIST = "repo_list"
    DETAIL = "detail"


# =============================================================================
# Fetch Enums
# =============================================================================


class ResourceKind(Enum):
    """Resources requested from the data provider."""

    REPOSITORIES = "repositories"
    BRANCHES = "branches"
    PULL_REQUESTS = "pull_requests"
    PIPELINES = "pipelines"
    PIPELINE = "pipeline"
    PIPELINE_STEPS = "pipeline_steps"
    PIPELINE_STEP_LOG = "pipeline_step_log"
    PULL_REQUEST_COMMITS = "pull_request_commits"
    COMMIT_CHANGES = "commit_changes"
    COMMIT_DIFF = "commit_diff"

    @property
    def label(self) -> str:
        """Human readable name used in status messages."""
        return self.value.replace("_", " ")


# =============================================================================
# Status Enums
# =============================================================================


class Severity(Enum):
    """Severity of a transient status message."""

    INFO = "info"
    ERROR = "error"


class StatusTag(Enum):
    """Semantic tags attached to rendered cells and status lines."""

    PLAIN = "plain"
    MUTED = "muted"
    CURSOR = "cursor"
    TITLE_ACTIVE = "title.active"
    TITLE_INACTIVE = "title.inactive"
    TAB_ACTIVE = "tab.active"
    TAB_INACTIVE = "tab.inactive"
    AUTHOR = "author"
    BRANCH = "branch"
    DETAIL_HEADER = "detail.header"
    HELP = "help"
    FILTER = "filter"
    MESSAGE = "message"
    ERROR = "error"
    LOADING = "loading"
    # Pull request states
    PR_OPEN = "pr.open"
    PR_DRAFT = "pr.draft"
    PR_MERGED = "pr.merged"
    PR_DECLINED = "pr.declined"
    PR_SUPERSEDED = "pr.superseded"
    # Pipeline states
    STATE_COMPLETED = "state.completed"
    STATE_RUNNING = "state.running"
    STATE_PENDING = "state.pending"
    STATE_PAUSED = "state.paused"
    STATE_ERROR = "state.error"
    # Pipeline results
    RESULT_SUCCESS = "result.success"
    RESULT_FAILED = "result.failed"
    RESULT_STOPPED = "result.stopped"
    RESULT_EXPIRED = "result.expired"
    RESULT_NONE = "result.none"
    # Diff lines
    DIFF_ADDED = "diff.added"
    DIFF_REMOVED = "diff.removed"
    DIFF_HUNK = "diff.hunk"


__all__ = [
    "Pane",
    "ResourceKind",
    "Severity",
    "StatusTag",
    "View",
]
