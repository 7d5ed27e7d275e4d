"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from pathlib import Path
from typing import Final

from bbview.constants.timeouts import HTTP_REQUEST_TIMEOUT, PIPELINE_POLL_INTERVAL
from bbview.constants.values import API_BASE_URL, TRACKED_PIPELINE_BRANCHES

# ============================================================================
# Config file
# ============================================================================

CONFIG_PATH_DEFAULT: Final = Path.home() / ".config" / "bitbucket-cli" / "config"
DEFAULT_SECTION: Final = "default"
SETTINGS_SECTION: Final = "settings"

# ============================================================================
# Runtime defaults
# ============================================================================

POLL_INTERVAL_DEFAULT: Final = PIPELINE_POLL_INTERVAL
REQUEST_TIMEOUT_DEFAULT: Final = HTTP_REQUEST_TIMEOUT
API_BASE_URL_DEFAULT: Final = API_BASE_URL
TRACKED_BRANCHES_DEFAULT: Final = TRACKED_PIPELINE_BRANCHES
EXTERNAL_VIEWERS_DEFAULT: Final = ("nvim", "less")

__all__ = [
    "API_BASE_URL_DEFAULT",
    "CONFIG_PATH_DEFAULT",
    "DEFAULT_SECTION",
    "EXTERNAL_VIEWERS_DEFAULT",
    "POLL_INTERVAL_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
    "SETTINGS_SECTION",
    "TRACKED_BRANCHES_DEFAULT",
]
