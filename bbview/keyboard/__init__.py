"""Keyboard bindings module.

This module provides the keyboard bindings for the BBView TUI:

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen-specific bindings (*_SCREEN_BINDINGS)
"""

from bbview.keyboard.app import APP_BINDINGS
from bbview.keyboard.navigation import PROFILE_SELECT_SCREEN_BINDINGS

__all__ = [
    "APP_BINDINGS",
    "PROFILE_SELECT_SCREEN_BINDINGS",
]
