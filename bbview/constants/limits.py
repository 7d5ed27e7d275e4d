"""Limit and threshold constants for the TUI.

All layout limits, truncation widths and validation ranges.
"""

from typing import Final

# ============================================================================
# Layout limits
# ============================================================================

REPO_PANE_MIN_WIDTH: Final = 20
DETAIL_PANE_MIN_WIDTH: Final = 30
PANE_MIN_HEIGHT: Final = 5
# Rows reserved for the status line and pane chrome
CHROME_HEIGHT: Final = 6

COMMIT_LIST_WIDTH_RATIO: Final = 0.55
COMMIT_LIST_PREFERRED_WIDTH: Final = 40
COMMIT_LIST_MIN_WIDTH: Final = 30
COMMIT_DETAILS_MIN_WIDTH: Final = 30
COMMIT_MESSAGE_MIN_WIDTH: Final = 8

SHORT_HASH_LENGTH: Final = 8
DETAIL_HASH_LENGTH: Final = 12

# ============================================================================
# Validation limits
# ============================================================================

POLL_INTERVAL_MIN: Final = 1.0
REQUEST_TIMEOUT_MIN: Final = 1.0

__all__ = [
    "CHROME_HEIGHT",
    "COMMIT_DETAILS_MIN_WIDTH",
    "COMMIT_LIST_MIN_WIDTH",
    "COMMIT_LIST_PREFERRED_WIDTH",
    "COMMIT_LIST_WIDTH_RATIO",
    "COMMIT_MESSAGE_MIN_WIDTH",
    "DETAIL_HASH_LENGTH",
    "DETAIL_PANE_MIN_WIDTH",
    "PANE_MIN_HEIGHT",
    "POLL_INTERVAL_MIN",
    "REPO_PANE_MIN_WIDTH",
    "REQUEST_TIMEOUT_MIN",
    "SHORT_HASH_LENGTH",
]
