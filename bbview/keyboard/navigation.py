"""Screen-specific keyboard bindings."""

from textual.binding import Binding

# ============================================================================
# Profile selector
# ============================================================================

PROFILE_SELECT_SCREEN_BINDINGS: list[Binding] = [
    Binding("j", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
    Binding("q", "app.quit", "Quit"),
]

__all__ = [
    "PROFILE_SELECT_SCREEN_BINDINGS",
]
