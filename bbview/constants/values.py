"""Scalar constants for the TUI.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "BBView"

# ============================================================================
# Bitbucket API
# ============================================================================

API_BASE_URL: Final = "https://api.bitbucket.org/2.0"
WEB_BASE_URL: Final = "https://bitbucket.org"

REPOSITORIES_PAGE_LEN: Final = 100
BRANCHES_PAGE_LEN: Final = 100
PULL_REQUESTS_PAGE_LEN: Final = 50
PIPELINES_PAGE_LEN: Final = 50
COMMITS_PAGE_LEN: Final = 50

# ============================================================================
# Pipelines
# ============================================================================

TRACKED_PIPELINE_BRANCHES: Final = ("develop", "staging", "main", "master")
RUNNING_PIPELINE_STATES: Final = frozenset({"in_progress", "running"})

# Branch colours for the pipeline branch column (ANSI 256 colour numbers)
TRACKED_BRANCH_COLORS: Final = {
    "develop": "color(45)",
    "staging": "color(220)",
    "main": "color(42)",
    "master": "color(39)",
    "-": "color(241)",
}
BRANCH_COLOR_PALETTE: Final = (
    "color(33)",
    "color(69)",
    "color(81)",
    "color(111)",
    "color(147)",
    "color(177)",
    "color(207)",
    "color(214)",
    "color(179)",
    "color(44)",
    "color(75)",
    "color(109)",
)

# ============================================================================
# Placeholders
# ============================================================================

NO_LOG_OUTPUT: Final = "No log output returned for this step."
DEFAULT_LOG_TITLE: Final = "pipeline-log"
DEFAULT_DIFF_TITLE: Final = "commit-diff"

__all__ = [
    "API_BASE_URL",
    "APP_TITLE",
    "BRANCHES_PAGE_LEN",
    "BRANCH_COLOR_PALETTE",
    "COMMITS_PAGE_LEN",
    "DEFAULT_DIFF_TITLE",
    "DEFAULT_LOG_TITLE",
    "NO_LOG_OUTPUT",
    "PIPELINES_PAGE_LEN",
    "PULL_REQUESTS_PAGE_LEN",
    "REPOSITORIES_PAGE_LEN",
    "RUNNING_PIPELINE_STATES",
    "TRACKED_BRANCH_COLORS",
    "TRACKED_PIPELINE_BRANCHES",
    "WEB_BASE_URL",
]
