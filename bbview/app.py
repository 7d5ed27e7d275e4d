"""Main application class for BBView TUI."""

from __future__ import annotations

import logging
from collections.abc import Callable

from textual.app import App

from bbview.constants import APP_TITLE
from bbview.controllers.base import DataProvider
from bbview.controllers.bitbucket import BitbucketController
from bbview.controllers.launcher import ProcessLauncher
from bbview.keyboard.app import APP_BINDINGS
from bbview.models.state.app_settings import AppSettings, Profile, ProfilesFile

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Profile, AppSettings], DataProvider]


def bitbucket_provider(profile: Profile, settings: AppSettings) -> DataProvider:
    """Bitbucket Cloud provider for ``profile`` using the configured API settings."""
    return BitbucketController(
        profile.workspace,
        profile.token,
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
    )


class BBViewApp(App[None]):
    """Bitbucket dashboard application."""

    TITLE = APP_TITLE
    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: ProfilesFile,
        profile: Profile | None = None,
        settings: AppSettings | None = None,
        provider_factory: ProviderFactory | None = None,
        launcher: ProcessLauncher | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.config = config
        self.profile = profile
        self.settings = settings or config.settings
        self.provider_factory = provider_factory or bitbucket_provider
        self.launcher = launcher or ProcessLauncher(self.settings.external_viewers)

    def on_mount(self) -> None:
        """Open the dashboard, or the profile selector when no profile was chosen."""
        if self.profile is not None:
            self.start_dashboard(self.profile)
            return
        from bbview.screens import ProfileSelectScreen

        profiles = [self.config.profiles[name] for name in self.config.profile_names()]
        self.push_screen(ProfileSelectScreen(profiles))

    def start_dashboard(self, profile: Profile) -> None:
        """Replace the current screen with the dashboard for ``profile``."""
        from bbview.screens import DashboardScreen

        self.profile = profile
        self.sub_title = profile.workspace
        logger.info("Opening dashboard for profile %s (%s)", profile.name, profile.workspace)
        screen = DashboardScreen(
            self.provider_factory(profile, self.settings),
            self.launcher,
            profile.workspace,
            self.settings,
        )
        if len(self.screen_stack) > 1:
            self.switch_screen(screen)
        else:
            self.push_screen(screen)


__all__ = ["BBViewApp", "ProviderFactory", "bitbucket_provider"]
