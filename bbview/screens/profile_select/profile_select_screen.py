"""Profile selector, shown when no profile is chosen on the command line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import OptionList, Static
from textual.widgets.option_list import Option

from bbview.keyboard.navigation import PROFILE_SELECT_SCREEN_BINDINGS
from bbview.screens.profile_select.config import FOOTER_TEXT, HEADER_TEXT, PROFILE_LIST_ID

if TYPE_CHECKING:
    from bbview.models.state.app_settings import Profile

logger = logging.getLogger(__name__)


class ProfileSelectScreen(Screen[None]):
    """Lists the configured profiles; selecting one opens its dashboard."""

    BINDINGS = PROFILE_SELECT_SCREEN_BINDINGS

    DEFAULT_CSS = f"""
    ProfileSelectScreen {{
        padding: 1 2;
    }}

    #{PROFILE_LIST_ID} {{
        height: auto;
        max-height: 1fr;
        border: none;
        margin: 1 0;
    }}
    """

    def __init__(self, profiles: list[Profile]) -> None:
        super().__init__()
        self.profiles = profiles

    def compose(self) -> ComposeResult:
        yield Static(HEADER_TEXT)
        yield OptionList(
            *(
                Option(f"{profile.name} ({profile.workspace})", id=profile.name)
                for profile in self.profiles
            ),
            id=PROFILE_LIST_ID,
        )
        yield Static(FOOTER_TEXT)

    def on_mount(self) -> None:
        option_list = self.query_one(f"#{PROFILE_LIST_ID}", OptionList)
        if self.profiles:
            option_list.highlighted = 0
        option_list.focus()

    def action_cursor_down(self) -> None:
        self.query_one(f"#{PROFILE_LIST_ID}", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(f"#{PROFILE_LIST_ID}", OptionList).action_cursor_up()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        profile = self.profiles[event.option_index]
        logger.info("Selected profile %s", profile.name)
        self.app.start_dashboard(profile)  # type: ignore[attr-defined]


__all__ = ["ProfileSelectScreen"]
