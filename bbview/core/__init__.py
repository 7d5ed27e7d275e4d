"""Dashboard core: a pure reducer over immutable state.

``transitions.handle`` maps ``(state, event)`` to ``(state, commands)``. The
screen runs the commands and feeds their completions back as events.
"""

from bbview.core.transitions import handle, start

__all__ = ["handle", "start"]
