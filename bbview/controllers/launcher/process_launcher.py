"""External process launcher for the browser and the log/diff viewer.

URL openers run in a worker thread. The viewer needs the terminal, so it runs
in the foreground while the Textual app is suspended.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
import subprocess
import sys
import tempfile
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from pathlib import Path

from bbview.constants.defaults import EXTERNAL_VIEWERS_DEFAULT
from bbview.constants.timeouts import URL_OPENER_TIMEOUT
from bbview.constants.values import DEFAULT_LOG_TITLE
from bbview.core.errors import LauncherError

logger = logging.getLogger(__name__)

Which = Callable[[str], str | None]


def url_opener_commands(url: str, platform: str | None = None) -> list[list[str]]:
    """Candidate commands for opening ``url``, tried in order."""
    platform = platform or sys.platform
    if platform.startswith("linux"):
        return [
            ["xdg-open", url],
            ["gio", "open", url],
            ["wslview", url],
            ["cmd.exe", "/c", "start", "", url],
            ["powershell.exe", "-NoProfile", "-Command", "Start-Process", url],
        ]
    if platform == "darwin":
        return [["open", url]]
    if platform in ("win32", "cygwin"):
        return [["cmd", "/c", "start", "", url]]
    raise LauncherError(f"opening URLs is not supported on {platform}")


class ProcessLauncher:
    """Runs browser openers and terminal viewers.

    Args:
        viewers: Viewer executables in preference order.
        which: Executable lookup, ``shutil.which`` by default.
        platform: Platform name, ``sys.platform`` by default.
    """

    def __init__(
        self,
        viewers: Sequence[str] = EXTERNAL_VIEWERS_DEFAULT,
        *,
        which: Which = shutil.which,
        platform: str | None = None,
    ) -> None:
        self.viewers = tuple(viewers)
        self._which = which
        self._platform = platform or sys.platform

    # =========================================================================
    # Browser
    # =========================================================================

    def _open_url_sync(self, url: str) -> None:
        last_error: str | None = None
        for command in url_opener_commands(url, self._platform):
            executable = self._which(command[0])
            if executable is None:
                last_error = f"{command[0]} not found"
                continue
            try:
                result = subprocess.run(
                    [executable, *command[1:]],
                    capture_output=True,
                    text=True,
                    timeout=URL_OPENER_TIMEOUT,
                )
            except (OSError, subprocess.TimeoutExpired) as err:
                last_error = f"{command[0]} failed: {err}"
                continue
            if result.returncode != 0:
                output = ((result.stdout or "") + (result.stderr or "")).strip()
                last_error = f"{command[0]} failed: exit status {result.returncode}"
                if output:
                    last_error = f"{last_error} ({output})"
                continue
            logger.info("Opened %s with %s", url, command[0])
            return
        raise LauncherError(last_error or "no URL opener found")

    async def open_url(self, url: str) -> None:
        """Open ``url`` in the system browser.

        Raises:
            LauncherError: When no opener exists or every opener failed.
        """
        await asyncio.to_thread(self._open_url_sync, url)

    # =========================================================================
    # Viewer
    # =========================================================================

    def find_viewer(self) -> str:
        for viewer in self.viewers:
            executable = self._which(viewer)
            if executable is not None:
                return executable
        raise LauncherError(f"neither {' nor '.join(self.viewers) or 'viewer'} is installed")

    def write_temp_file(self, text: str, title: str) -> Path:
        """Write ``text`` to a ``bb-<title>-*.log`` file in the temp directory."""
        title = title.strip().replace(" ", "-") or DEFAULT_LOG_TITLE
        title = title.replace(os.sep, "-")
        handle = tempfile.NamedTemporaryFile(
            "w",
            prefix=f"bb-{title}-",
            suffix=".log",
            delete=False,
            encoding="utf-8",
        )
        with handle:
            handle.write(text)
        return Path(handle.name)

    def open_in_external_viewer(
        self,
        text: str,
        title: str,
        suspend: Callable[[], AbstractContextManager[object]],
    ) -> None:
        """Show ``text`` in the first installed viewer and wait for it to exit.

        ``suspend`` hands the terminal to the viewer for the duration of the
        call, normally ``App.suspend``. The temp file is removed afterwards.

        Raises:
            LauncherError: When no viewer is installed or it exits non-zero.
        """
        viewer = self.find_viewer()
        path = self.write_temp_file(text, title)
        try:
            try:
                with suspend():
                    result = subprocess.run([viewer, str(path)])
            except OSError as err:
                raise LauncherError(f"{Path(viewer).name} failed: {err}") from err
            if result.returncode != 0:
                raise LauncherError(
                    f"{Path(viewer).name} failed: exit status {result.returncode}"
                )
        finally:
            with contextlib.suppress(OSError):
                path.unlink()


__all__ = ["ProcessLauncher", "url_opener_commands"]
