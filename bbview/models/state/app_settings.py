"""Application settings models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bbview.constants.defaults import (
    API_BASE_URL_DEFAULT,
    EXTERNAL_VIEWERS_DEFAULT,
    POLL_INTERVAL_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
    TRACKED_BRANCHES_DEFAULT,
)
from bbview.constants.limits import POLL_INTERVAL_MIN, REQUEST_TIMEOUT_MIN


def _split_csv(value: object) -> object:
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return value


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Live refresh
    poll_interval: float = Field(POLL_INTERVAL_DEFAULT, ge=POLL_INTERVAL_MIN)  # seconds
    tracked_branches: tuple[str, ...] = TRACKED_BRANCHES_DEFAULT

    # API
    request_timeout: float = Field(REQUEST_TIMEOUT_DEFAULT, ge=REQUEST_TIMEOUT_MIN)  # seconds
    api_base_url: str = API_BASE_URL_DEFAULT

    # Launcher
    external_viewers: tuple[str, ...] = EXTERNAL_VIEWERS_DEFAULT

    @field_validator("tracked_branches", "external_viewers", mode="before")
    @classmethod
    def _parse_list(cls, value: object) -> object:
        return _split_csv(value)


class Profile(BaseModel):
    """Credentials for one Bitbucket workspace."""

    model_config = ConfigDict(frozen=True)

    name: str
    workspace: str = ""
    token: str = ""


class ProfilesFile(BaseModel):
    """Parsed contents of the config file."""

    default_profile: str = ""
    profiles: dict[str, Profile] = Field(default_factory=dict)
    settings: AppSettings = Field(default_factory=AppSettings)

    def get_profile(self, name: str) -> Profile:
        profile = self.profiles.get(name)
        if profile is None:
            raise ProfileNotFoundError(f"profile '{name}' not found")
        return profile

    def get_default_profile(self) -> Profile:
        if not self.default_profile:
            raise ProfileNotFoundError("no default profile set")
        return self.get_profile(self.default_profile)

    def profile_names(self) -> list[str]:
        return sorted(self.profiles)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when the config file fails to load."""


class ProfileNotFoundError(ConfigError):
    """Raised when a requested profile is not defined."""
