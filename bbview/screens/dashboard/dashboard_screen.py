"""Dashboard screen - the repository list and its drill-down views.

All keys go to the reducer; the screen only draws ``render(state)`` with rich
styles and runs commands through ``WorkerMixin``.
"""

from __future__ import annotations

import logging

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Static

from bbview.constants.ui import TAG_STYLES
from bbview.controllers.base import DataProvider
from bbview.controllers.launcher import ProcessLauncher
from bbview.core.events import KeyPressed, Resized
from bbview.core.transitions import start
from bbview.models.state.app_settings import AppSettings
from bbview.models.state.app_state import AppState
from bbview.screens.dashboard.config import (
    COMMIT_DETAILS_ID,
    DETAIL_PANE_ID,
    REPO_PANE_ID,
    STATUS_LINE_ID,
)
from bbview.screens.dashboard.presenter import Cell, DashboardLayout, PaneLayout, Row, render
from bbview.screens.mixins.worker_mixin import WorkerMixin

logger = logging.getLogger(__name__)


def cell_text(cell: Cell) -> Text:
    return Text(cell.text, style=cell.style or TAG_STYLES[cell.tag])


def row_text(row: Row) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    for cell in row.cells:
        text.append_text(cell_text(cell))
    return text


def pane_text(pane: PaneLayout) -> Text:
    """Tabs, title and rows of ``pane`` as one block of styled text."""
    lines: list[Text] = []
    if pane.tabs:
        lines.append(row_text(Row(pane.tabs)))
    lines.append(cell_text(pane.title))
    lines.extend(row_text(row) for row in pane.rows)
    return Text("\n").join(lines)


def key_name(event: events.Key) -> str:
    """Reducer key name: the typed character when printable, else Textual's key name."""
    if event.is_printable and event.character:
        return event.character
    return event.key


class DashboardScreen(WorkerMixin, Screen[None]):
    """Repositories on the left; branches, pull requests and pipelines on drill-down."""

    DEFAULT_CSS = f"""
    DashboardScreen {{
        layout: vertical;
    }}

    #panes {{
        height: 1fr;
    }}

    #{REPO_PANE_ID}, #{DETAIL_PANE_ID} {{
        padding: 0 1;
    }}

    #{COMMIT_DETAILS_ID} {{
        padding: 3 0 0 1;
    }}

    #{STATUS_LINE_ID} {{
        height: 1;
        padding: 0 1;
    }}
    """

    def __init__(
        self,
        provider: DataProvider,
        launcher: ProcessLauncher,
        workspace: str,
        settings: AppSettings | None = None,
    ) -> None:
        super().__init__()
        self.provider = provider
        self.launcher = launcher
        self.workspace = workspace
        self.settings = settings or AppSettings()
        self.dashboard_state = AppState(workspace=workspace)
        self.layout_snapshot: DashboardLayout | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="panes"):
            yield Static(id=REPO_PANE_ID)
            yield Static(id=DETAIL_PANE_ID)
            yield Static(id=COMMIT_DETAILS_ID)
        yield Static(id=STATUS_LINE_ID)

    def on_mount(self) -> None:
        state, commands = start(
            self.workspace,
            poll_interval=self.settings.poll_interval,
            tracked_branches=self.settings.tracked_branches,
        )
        self.dashboard_state = state
        logger.info("Dashboard started for workspace %s", self.workspace)
        self.run_commands(commands)
        size = self.app.size
        self.apply_event(Resized(size.width, size.height))

    async def on_unmount(self) -> None:
        self.cancel_workers()
        await self.provider.aclose()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.apply_event(KeyPressed(key_name(event)))

    def on_resize(self, event: events.Resize) -> None:
        self.apply_event(Resized(event.size.width, event.size.height))

    # =========================================================================
    # Drawing
    # =========================================================================

    def _show_pane(self, widget: Static, pane: PaneLayout | None, width: int | None = None) -> None:
        if pane is None:
            widget.display = False
            return
        widget.display = True
        widget.styles.width = width if width is not None else pane.width
        widget.styles.height = pane.height
        widget.update(pane_text(pane))

    def refresh_view(self) -> None:
        if not self.is_mounted:
            return
        layout = render(self.dashboard_state)
        self.layout_snapshot = layout
        repo_widget = self.query_one(f"#{REPO_PANE_ID}", Static)
        detail_widget = self.query_one(f"#{DETAIL_PANE_ID}", Static)
        side_widget = self.query_one(f"#{COMMIT_DETAILS_ID}", Static)
        status_widget = self.query_one(f"#{STATUS_LINE_ID}", Static)

        if layout.placeholder:
            repo_widget.display = True
            repo_widget.update(layout.placeholder)
            detail_widget.display = False
            side_widget.display = False
            status_widget.update("")
            return

        self._show_pane(repo_widget, layout.repo_pane)
        detail = layout.detail_pane
        side = detail.side if detail is not None else None
        detail_width = None
        if detail is not None and side is not None:
            detail_width = detail.width - side.width - 1
        self._show_pane(detail_widget, detail, detail_width)
        if side is not None:
            self._show_pane(side_widget, side, side.width + 1)
        else:
            side_widget.display = False
        status_widget.update(row_text(layout.status))


__all__ = ["DashboardScreen", "key_name", "pane_text", "row_text"]
