"""Dashboard screen - repositories and their drill-down views."""

from bbview.screens.dashboard.dashboard_screen import DashboardScreen

__all__ = ["DashboardScreen"]
