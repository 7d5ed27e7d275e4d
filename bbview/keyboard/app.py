"""App-level keyboard bindings.

This module contains Textual Binding objects for app-level bindings
that work from any screen. Dashboard keys are not bindings: the dashboard
screen forwards raw keys to the reducer so that filter text can use any
printable character.
"""

from textual.binding import Binding

# ============================================================================
# Textual Binding objects for app-level bindings
# ============================================================================

APP_BINDINGS: list[Binding] = [
    Binding("ctrl+q", "quit", "Quit", show=False, priority=True),
    Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
]

__all__ = [
    "APP_BINDINGS",
]
