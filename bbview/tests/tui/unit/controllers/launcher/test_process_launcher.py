"""Tests for the external process launcher."""

from __future__ import annotations

import contextlib
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bbview.controllers.launcher import ProcessLauncher, url_opener_commands
from bbview.core.errors import LauncherError

URL = "https://bitbucket.org/acme/api/pull-requests/1"


def _which(*installed: str):
    return lambda name: f"/usr/bin/{name}" if name in installed else None


def _completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


class TestUrlOpenerCommands:
    """Tests for per-platform opener lists."""

    def test_linux_tries_xdg_open_first(self) -> None:
        commands = url_opener_commands(URL, "linux")
        assert commands[0] == ["xdg-open", URL]
        assert [command[0] for command in commands][1:] == ["gio", "wslview", "cmd.exe", "powershell.exe"]

    def test_darwin(self) -> None:
        assert url_opener_commands(URL, "darwin") == [["open", URL]]

    def test_unsupported_platform(self) -> None:
        with pytest.raises(LauncherError):
            url_opener_commands(URL, "plan9")


class TestOpenUrl:
    """Tests for ProcessLauncher.open_url."""

    @pytest.mark.asyncio
    async def test_first_installed_opener_is_used(self) -> None:
        launcher = ProcessLauncher(which=_which("gio"), platform="linux")
        with patch("subprocess.run", return_value=_completed()) as run:
            await launcher.open_url(URL)

        run.assert_called_once()
        assert run.call_args.args[0] == ["/usr/bin/gio", "open", URL]

    @pytest.mark.asyncio
    async def test_failing_opener_falls_through(self) -> None:
        launcher = ProcessLauncher(which=_which("xdg-open", "gio"), platform="linux")
        results = [_completed(3, "no handler"), _completed()]
        with patch("subprocess.run", side_effect=results) as run:
            await launcher.open_url(URL)

        assert run.call_count == 2

    @pytest.mark.asyncio
    async def test_last_error_is_reported(self) -> None:
        launcher = ProcessLauncher(which=_which("xdg-open"), platform="linux")
        with patch("subprocess.run", return_value=_completed(4, "no browser")):
            with pytest.raises(LauncherError) as exc_info:
                await launcher.open_url(URL)

        # xdg-open failed, and the later candidates were missing.
        assert str(exc_info.value) == "powershell.exe not found"

    @pytest.mark.asyncio
    async def test_exit_status_in_error(self) -> None:
        launcher = ProcessLauncher(which=_which("open"), platform="darwin")
        with patch("subprocess.run", return_value=_completed(1, "boom")):
            with pytest.raises(LauncherError, match=r"open failed: exit status 1 \(boom\)"):
                await launcher.open_url(URL)


class TestViewer:
    """Tests for the foreground viewer."""

    def test_find_viewer_prefers_first(self) -> None:
        launcher = ProcessLauncher(which=_which("nvim", "less"))
        assert launcher.find_viewer() == "/usr/bin/nvim"

    def test_find_viewer_falls_back(self) -> None:
        launcher = ProcessLauncher(which=_which("less"))
        assert launcher.find_viewer() == "/usr/bin/less"

    def test_no_viewer_installed(self) -> None:
        launcher = ProcessLauncher(which=_which())
        with pytest.raises(LauncherError, match="neither nvim nor less is installed"):
            launcher.find_viewer()

    def test_write_temp_file(self) -> None:
        launcher = ProcessLauncher()
        path = launcher.write_temp_file("hello", "Build step")
        try:
            assert path.name.startswith("bb-Build-step-")
            assert path.suffix == ".log"
            assert path.read_text(encoding="utf-8") == "hello"
        finally:
            path.unlink()

    def test_external_viewer_runs_viewer_inside_suspend_and_removes_file(self) -> None:
        launcher = ProcessLauncher(which=_which("less"))
        suspend = MagicMock(return_value=contextlib.nullcontext())
        seen: list[Path] = []

        def run(args: list[str]) -> subprocess.CompletedProcess:
            seen.append(Path(args[1]))
            assert seen[0].read_text(encoding="utf-8") == "log text"
            return _completed()

        with patch("subprocess.run", side_effect=run):
            launcher.open_in_external_viewer("log text", "step", suspend)

        suspend.assert_called_once_with()
        assert not seen[0].exists()

    def test_external_viewer_non_zero_exit(self) -> None:
        launcher = ProcessLauncher(which=_which("less"))
        with patch("subprocess.run", return_value=_completed(2)):
            with pytest.raises(LauncherError, match="less failed: exit status 2"):
                launcher.open_in_external_viewer("x", "t", contextlib.nullcontext)
