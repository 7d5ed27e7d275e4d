"""Constants module for BBView TUI.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, numbers with Final)
- timeouts.py: Timeout and interval values (seconds)
- limits.py: Layout and validation limits
- defaults.py: Default values for settings
- ui.py: Semantic tag to rich style mapping

Note: Keyboard bindings are defined in bbview.keyboard module.
"""

from bbview.constants.defaults import (
    CONFIG_PATH_DEFAULT,
    POLL_INTERVAL_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
)
from bbview.constants.enums import (
    Pane,
    ResourceKind,
    Severity,
    StatusTag,
    View,
)
from bbview.constants.timeouts import (
    HTTP_REQUEST_TIMEOUT,
    PIPELINE_POLL_INTERVAL,
)
from bbview.constants.values import (
    API_BASE_URL,
    APP_TITLE,
    TRACKED_PIPELINE_BRANCHES,
)

__all__ = [
    # Application
    "APP_TITLE",
    # API
    "API_BASE_URL",
    # Defaults
    "CONFIG_PATH_DEFAULT",
    "POLL_INTERVAL_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
    # Timeouts
    "HTTP_REQUEST_TIMEOUT",
    "PIPELINE_POLL_INTERVAL",
    # Pipelines
    "TRACKED_PIPELINE_BRANCHES",
    # Enums
    "Pane",
    "ResourceKind",
    "Severity",
    "StatusTag",
    "View",
]
