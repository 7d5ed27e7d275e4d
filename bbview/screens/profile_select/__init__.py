"""Profile selector screen."""

from bbview.screens.profile_select.profile_select_screen import ProfileSelectScreen

__all__ = ["ProfileSelectScreen"]
