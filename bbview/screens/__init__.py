"""BBView TUI Screens.

Domain Structure:
    - dashboard/      - Repository list with branch, pull request and pipeline drill-downs
    - profile_select/ - Workspace profile picker
    - mixins/         - Reusable screen mixins
"""

from __future__ import annotations

from bbview.screens.dashboard import DashboardScreen
from bbview.screens.profile_select import ProfileSelectScreen

__all__ = [
    "DashboardScreen",
    "ProfileSelectScreen",
]
