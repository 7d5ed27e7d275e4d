"""Error taxonomy for the dashboard core.

Every error here is reported as a transient status message; none of them end
the session or undo a navigation step that was already applied.
"""

from __future__ import annotations


class BBViewError(Exception):
    """Base exception for dashboard errors."""


class TransportError(BBViewError):
    """Network or HTTP failure talking to the data provider."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(BBViewError):
    """The data provider returned a payload that could not be decoded."""


class LauncherError(BBViewError):
    """An external process was missing or exited with an error."""


class EmptyIdentityError(BBViewError):
    """The hovered item lacks the identity the next fetch requires."""


__all__ = [
    "BBViewError",
    "DecodeError",
    "EmptyIdentityError",
    "LauncherError",
    "TransportError",
]
