"""Config file loading.

The file is the INI format shared with the ``bitbucket-cli`` tools::

    [default]
    profile = work

    [work]
    workspace = acme
    token = dXNlcjphcHBwYXNzd29yZA==

    [settings]
    poll_interval = 5
    tracked_branches = develop, main
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from pydantic import ValidationError

from bbview.constants.defaults import CONFIG_PATH_DEFAULT, DEFAULT_SECTION, SETTINGS_SECTION
from bbview.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    Profile,
    ProfilesFile,
    ProfileNotFoundError,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Reads profiles and settings from the config file."""

    @staticmethod
    def parse(text: str, source: str = "<string>") -> ProfilesFile:
        """Parse config file contents.

        Args:
            text: INI text.
            source: Name used in error messages.

        Returns:
            The parsed profiles and settings.

        Raises:
            ConfigLoadError: If the text is not valid INI or a setting is invalid.
        """
        # No interpolation: tokens may legitimately contain '%'.
        parser = configparser.ConfigParser(interpolation=None, default_section="__defaults__")
        try:
            parser.read_string(text, source=source)
        except configparser.Error as err:
            raise ConfigLoadError(f"error reading config file {source}: {err}") from err

        default_profile = ""
        profiles: dict[str, Profile] = {}
        settings_values: dict[str, str] = {}
        for section in parser.sections():
            values = dict(parser.items(section))
            if section == DEFAULT_SECTION:
                default_profile = values.get("profile", "").strip()
            elif section == SETTINGS_SECTION:
                settings_values = {key: value.strip() for key, value in values.items()}
            else:
                profiles[section] = Profile(
                    name=section,
                    workspace=values.get("workspace", "").strip(),
                    token=values.get("token", "").strip(),
                )

        try:
            settings = AppSettings(**settings_values)
        except ValidationError as err:
            raise ConfigLoadError(f"invalid [{SETTINGS_SECTION}] in {source}: {err}") from err

        return ProfilesFile(
            default_profile=default_profile,
            profiles=profiles,
            settings=settings,
        )

    @staticmethod
    def load(path: Path | str | None = None) -> ProfilesFile:
        """Load the config file at ``path`` (``~/.config/bitbucket-cli/config`` by default).

        Raises:
            ConfigLoadError: If the file cannot be read or parsed.
        """
        config_path = Path(path) if path is not None else CONFIG_PATH_DEFAULT
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as err:
            raise ConfigLoadError(f"failed to open config file {config_path}: {err}") from err
        config = ConfigManager.parse(text, source=str(config_path))
        logger.debug(
            "Loaded %d profiles from %s (default: %s)",
            len(config.profiles),
            config_path,
            config.default_profile or "-",
        )
        return config


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "Profile",
    "ProfileNotFoundError",
    "ProfilesFile",
]
