"""Timeout constants for the TUI.

All timeout and interval values for API requests and live refresh cycles.
"""

from typing import Final

# ============================================================================
# API timeouts (float, in seconds)
# ============================================================================

HTTP_REQUEST_TIMEOUT: Final = 20.0

# ============================================================================
# Live refresh intervals (float, in seconds)
# ============================================================================

PIPELINE_POLL_INTERVAL: Final = 8.0

# ============================================================================
# Process-level command timeouts
# ============================================================================

URL_OPENER_TIMEOUT: Final = 15

__all__ = [
    "HTTP_REQUEST_TIMEOUT",
    "PIPELINE_POLL_INTERVAL",
    "URL_OPENER_TIMEOUT",
]
