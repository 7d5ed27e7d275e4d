"""Events consumed by the reducer: keypresses and async completions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from bbview.core.commands import FetchRequest
from bbview.core.errors import BBViewError, LauncherError
from bbview.models.state.app_state import PollTicket


@dataclass(frozen=True)
class KeyPressed:
    """A key in Textual naming: ``"enter"``, ``"escape"``, ``"up"`` or a character."""

    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class FetchSucceeded:
    request: FetchRequest
    payload: Any


@dataclass(frozen=True)
class FetchFailed:
    request: FetchRequest
    error: BBViewError


@dataclass(frozen=True)
class PollDue:
    ticket: PollTicket


@dataclass(frozen=True)
class LaunchCompleted:
    """Completion of a launcher command; ``action`` is ``"url"`` or ``"viewer"``."""

    action: str
    error: LauncherError | None = None


Event = Union[KeyPressed, Resized, FetchSucceeded, FetchFailed, PollDue, LaunchCompleted]

__all__ = [
    "Event",
    "FetchFailed",
    "FetchSucceeded",
    "KeyPressed",
    "LaunchCompleted",
    "PollDue",
    "Resized",
]
