"""Init file for launcher module."""

from bbview.controllers.launcher.process_launcher import ProcessLauncher, url_opener_commands

__all__ = ["ProcessLauncher", "url_opener_commands"]
