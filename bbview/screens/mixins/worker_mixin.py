"""WorkerMixin - runs dashboard commands with Textual workers and timers.

The dashboard core is a pure reducer. This mixin is the loop around it:

- ``apply_event()`` feeds one event to ``handle`` and runs the returned commands
- ``Fetch`` and ``OpenURL`` commands run as non-exclusive async workers
- ``SchedulePoll`` becomes a one-shot timer
- ``OpenInExternalViewer`` runs in the foreground with the app suspended
- every completion is posted back as a ``CoreEvent`` message

Messages are handled one at a time on the screen's queue, so state changes
are serialized even though many workers resolve concurrently.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import suppress
from functools import partial
from typing import TYPE_CHECKING, Any

from textual._context import NoActiveAppError
from textual.app import SuspendNotSupported
from textual.message import Message
from textual.worker import Worker, WorkerState

from bbview.core.commands import (
    Command,
    Fetch,
    FetchRequest,
    OpenInExternalViewer,
    OpenURL,
    Quit,
    SchedulePoll,
)
from bbview.core.errors import BBViewError, LauncherError, TransportError
from bbview.core.events import Event, FetchFailed, FetchSucceeded, LaunchCompleted, PollDue
from bbview.core.transitions import handle

if TYPE_CHECKING:
    from bbview.controllers.base import DataProvider
    from bbview.controllers.launcher import ProcessLauncher
    from bbview.models.state.app_state import AppState

logger = logging.getLogger(__name__)


# ============================================================================
# Message carrying core events back onto the screen queue
# ============================================================================


class CoreEvent(Message):
    """A completed command, queued for the reducer.

    Attributes:
        event: The core event to apply.
    """

    def __init__(self, event: Event) -> None:
        super().__init__()
        self.event = event


def worker_name(request: FetchRequest) -> str:
    """Unique name per in-flight fetch; cache fetches are keyed by commit hash."""
    key = request.commit_hash or request.request_id or request.poll_token
    return f"fetch-{request.kind.value}-{key}"


# ============================================================================
# WorkerMixin Base Class
# ============================================================================


class WorkerMixin:
    """Mixin running reducer commands for a Textual screen.

    The screen must provide ``dashboard_state``, ``provider`` and ``launcher``
    attributes and a ``refresh_view()`` method that redraws from
    ``dashboard_state``.

    Usage:
        ```python
        class DashboardScreen(WorkerMixin, Screen):
            def on_mount(self) -> None:
                state, commands = start(workspace)
                self.dashboard_state = state
                self.run_commands(commands)
        ```
    """

    dashboard_state: AppState
    provider: DataProvider
    launcher: ProcessLauncher

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._worker_start_times: dict[str, float] = {}

    def refresh_view(self) -> None:
        """Redraw from ``dashboard_state``. Screens override this."""

    # =========================================================================
    # Event loop
    # =========================================================================

    def apply_event(self, event: Event) -> None:
        """Run one event through the reducer, then run its commands and redraw."""
        self.dashboard_state, commands = handle(self.dashboard_state, event)
        self.run_commands(commands)
        self.refresh_view()

    def on_core_event(self, message: CoreEvent) -> None:
        message.stop()
        self.apply_event(message.event)

    def post_core_event(self, event: Event) -> None:
        self.post_message(CoreEvent(event))  # type: ignore[attr-defined]

    def run_commands(self, commands: list[Command]) -> None:
        for command in commands:
            self.run_command(command)

    def run_command(self, command: Command) -> None:
        if isinstance(command, Fetch):
            request = command.request
            self.start_worker(partial(self._fetch_worker, request), name=worker_name(request))
        elif isinstance(command, SchedulePoll):
            logger.debug("Poll %d due in %.1fs", command.ticket.token, command.delay)
            self.set_timer(  # type: ignore[attr-defined]
                command.delay,
                partial(self.post_core_event, PollDue(command.ticket)),
                name=f"poll-{command.ticket.token}",
            )
        elif isinstance(command, OpenURL):
            self.start_worker(partial(self._open_url_worker, command.url), name="open-url")
        elif isinstance(command, OpenInExternalViewer):
            self._view_external(command)
        elif isinstance(command, Quit):
            self.app.exit()  # type: ignore[attr-defined]
        else:
            raise TypeError(f"Unhandled command: {command!r}")

    # =========================================================================
    # Workers
    # =========================================================================

    async def _fetch_worker(self, request: FetchRequest) -> None:
        try:
            payload = await self.provider.fetch(request)
        except BBViewError as err:
            logger.warning("Fetch %s failed: %s", request.kind.value, err)
            self.post_core_event(FetchFailed(request, err))
        except Exception as err:
            # Any other failure still completes the request exactly once.
            logger.exception("Fetch %s raised unexpectedly", request.kind.value)
            self.post_core_event(FetchFailed(request, TransportError(f"unexpected error: {err}")))
        else:
            self.post_core_event(FetchSucceeded(request, payload))

    async def _open_url_worker(self, url: str) -> None:
        try:
            await self.launcher.open_url(url)
        except LauncherError as err:
            logger.warning("Opening %s failed: %s", url, err)
            self.post_core_event(LaunchCompleted("url", err))
        else:
            self.post_core_event(LaunchCompleted("url"))

    def _view_external(self, command: OpenInExternalViewer) -> None:
        """Hand the terminal to the external viewer until it exits."""
        error: LauncherError | None = None
        try:
            self.launcher.open_in_external_viewer(command.text, command.title, self.app.suspend)  # type: ignore[attr-defined]
        except SuspendNotSupported as err:
            error = LauncherError(f"terminal cannot be suspended: {err}")
        except LauncherError as err:
            error = err
        if error is not None:
            logger.warning("Viewer failed: %s", error)
        self.post_core_event(LaunchCompleted("viewer", error))

    def start_worker(
        self,
        worker_func: Callable[..., Awaitable[Any]],
        *,
        exclusive: bool = False,
        thread: bool = False,
        name: str | None = None,
        exit_on_error: bool = False,
    ) -> Worker[Any]:
        """Start a worker for one command.

        Workers are non-exclusive by default: every fetch runs to completion
        and stale results are discarded by the reducer, not by cancellation.

        Args:
            worker_func: Async function to run in worker
            exclusive: If True, cancel previous workers before starting new one
            thread: If False, run in async event loop (preferred for I/O operations).
            name: Optional worker name for debugging
            exit_on_error: If False, errors don't crash the app (default False).

        Returns:
            The Worker instance
        """
        if name is not None:
            self._worker_start_times[name] = time.monotonic()
        return self.run_worker(  # type: ignore[attr-defined]
            worker_func,
            exclusive=exclusive,
            thread=thread,
            name=name,
            exit_on_error=exit_on_error,
        )

    def cancel_workers(self) -> None:
        """Cancel all running workers using Textual's built-in WorkerManager."""
        with suppress(NoActiveAppError):
            self.workers.cancel_all()  # type: ignore[attr-defined]

    def on_unmount(self) -> None:
        """Cancel all workers when the screen is unmounted."""
        self.cancel_workers()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Log worker completion with its duration."""
        name = event.worker.name
        if event.state not in (WorkerState.SUCCESS, WorkerState.CANCELLED, WorkerState.ERROR):
            return
        started = self._worker_start_times.pop(name, None)
        duration_ms = (time.monotonic() - started) * 1000 if started is not None else 0.0

        if event.state == WorkerState.CANCELLED:
            logger.debug(f"Worker '{name}' was cancelled ({duration_ms:.2f}ms)")
        elif event.state == WorkerState.ERROR:
            logger.error(f"Worker '{name}' error: {event.worker.error} ({duration_ms:.2f}ms)")
        else:
            logger.debug(f"Worker '{name}' completed successfully ({duration_ms:.2f}ms)")


__all__ = ["CoreEvent", "WorkerMixin", "worker_name"]
