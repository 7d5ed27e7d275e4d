"""Command line entry point: ``bbview`` / ``python -m bbview``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError
from textual.logging import TextualHandler

from bbview import __version__
from bbview.models.state.app_settings import ConfigError, Profile, ProfilesFile
from bbview.models.state.config_manager import ConfigManager

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bbview",
        description="Terminal dashboard for Bitbucket repositories, pull requests and pipelines.",
    )
    parser.add_argument("--config", help="config file (default: ~/.config/bitbucket-cli/config)")
    parser.add_argument("--profile", help="profile to open (default: [default] profile)")
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="seconds between pipeline refreshes while a running pipeline is shown",
    )
    parser.add_argument("--log-file", help="also write log records to this file")
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(log_file: str | None, debug: bool) -> None:
    handlers: list[logging.Handler] = [TextualHandler()]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=handlers,
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def resolve_profile(config: ProfilesFile, name: str | None) -> Profile | None:
    """The profile named on the command line, else the default, else None for the selector.

    Raises:
        ProfileNotFoundError: If ``name`` or the configured default does not exist.
    """
    if name:
        return config.get_profile(name)
    if config.default_profile:
        return config.get_default_profile()
    return None


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.debug)

    try:
        config = ConfigManager.load(args.config)
        profile = resolve_profile(config, args.profile)
        settings = config.settings
        if args.poll_interval is not None:
            settings = settings.model_validate(
                {**settings.model_dump(), "poll_interval": args.poll_interval}
            )
    except ConfigError as err:
        print(f"bbview: {err}", file=sys.stderr)
        return 1
    except ValidationError as err:
        print(f"bbview: invalid --poll-interval: {err}", file=sys.stderr)
        return 1

    if profile is None and not config.profiles:
        print("bbview: no profiles configured", file=sys.stderr)
        return 1

    from bbview.app import BBViewApp

    logger.debug("Starting with profile %s", profile.name if profile else "-")
    BBViewApp(config, profile, settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
