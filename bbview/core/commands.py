"""Commands returned by the reducer.

A command describes an effect; the screen's worker runner performs it and
reports back exactly one event from ``bbview.core.events``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from bbview.constants.enums import ResourceKind
from bbview.models.state.app_state import PollTicket


@dataclass(frozen=True)
class FetchRequest:
    """One call to the data provider, keyed by the identity it was issued for.

    ``request_id`` ties a list fetch to the list's pending request. Cache and
    poll fetches are matched by hash and ``poll_token`` instead.
    """

    kind: ResourceKind
    request_id: int = 0
    repo_slug: str = ""
    pipeline_uuid: str = ""
    step_uuid: str = ""
    pull_request_id: int = 0
    commit_hash: str = ""
    poll_token: int = 0


@dataclass(frozen=True)
class Fetch:
    request: FetchRequest


@dataclass(frozen=True)
class SchedulePoll:
    ticket: PollTicket
    delay: float


@dataclass(frozen=True)
class OpenURL:
    url: str


@dataclass(frozen=True)
class OpenInExternalViewer:
    text: str
    title: str


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[Fetch, SchedulePoll, OpenURL, OpenInExternalViewer, Quit]

__all__ = [
    "Command",
    "Fetch",
    "FetchRequest",
    "OpenInExternalViewer",
    "OpenURL",
    "Quit",
    "SchedulePoll",
]
