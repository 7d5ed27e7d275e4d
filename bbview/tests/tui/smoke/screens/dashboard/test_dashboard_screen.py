"""Smoke tests for DashboardScreen - composition, key forwarding and worker round trips.

The app runs headless against an in-memory provider, so every fetch resolves
immediately and no network or external process is used.
"""

from __future__ import annotations

import pytest
from textual.pilot import Pilot
from textual.widgets import Static

from bbview.app import BBViewApp
from bbview.constants.enums import Pane, ResourceKind, View
from bbview.controllers.base import DataProvider
from bbview.controllers.launcher import ProcessLauncher
from bbview.models.core.domain import (
    Branch,
    Commit,
    CommitChange,
    Pipeline,
    PipelineStep,
    PullRequest,
    Repository,
)
from bbview.models.state.app_settings import Profile, ProfilesFile
from bbview.screens.dashboard import DashboardScreen
from bbview.screens.dashboard.config import DETAIL_PANE_ID, REPO_PANE_ID, STATUS_LINE_ID
from bbview.screens.profile_select import ProfileSelectScreen

PROFILE = Profile(name="work", workspace="acme", token="dG9rZW4=")


class MemoryProvider(DataProvider):
    """Canned Bitbucket data."""

    def __init__(self) -> None:
        self.closed = False

    async def fetch_repositories(self) -> tuple[Repository, ...]:
        return (Repository(name="API", slug="api"), Repository(name="Web", slug="web"))

    async def fetch_branches(self, repo_slug: str) -> tuple[Branch, ...]:
        return (Branch(name="main"), Branch(name="develop"))

    async def fetch_pull_requests(self, repo_slug: str) -> tuple[PullRequest, ...]:
        return (PullRequest(id=1, title=f"Change in {repo_slug}", state="OPEN", author="Ann"),)

    async def fetch_pipelines(self, repo_slug: str) -> tuple[Pipeline, ...]:
        return (Pipeline(uuid="{p-1}", build_number=1, state="COMPLETED", branch_name="main"),)

    async def fetch_pipeline(self, repo_slug: str, pipeline_uuid: str) -> Pipeline:
        return Pipeline(uuid=pipeline_uuid, state="COMPLETED")

    async def fetch_pipeline_steps(self, repo_slug: str, pipeline_uuid: str) -> tuple[PipelineStep, ...]:
        return (PipelineStep(uuid="{s-1}", name="Build"),)

    async def fetch_pipeline_step_log(self, repo_slug: str, pipeline_uuid: str, step_uuid: str) -> str:
        return "building\ndone"

    async def fetch_pull_request_commits(self, repo_slug: str, pull_request_id: int) -> tuple[Commit, ...]:
        return (Commit(hash="0123456789abcdef", message="Initial", author="Ann"),)

    async def fetch_commit_changes(self, repo_slug: str, commit_hash: str) -> tuple[CommitChange, ...]:
        return (CommitChange(status="added", new_path="README.md", lines_added=1),)

    async def fetch_commit_diff(self, repo_slug: str, commit_hash: str) -> str:
        return "+hello"

    async def aclose(self) -> None:
        self.closed = True


def _app(provider: MemoryProvider, profile: Profile | None = PROFILE) -> BBViewApp:
    config = ProfilesFile(profiles={PROFILE.name: PROFILE, "home": Profile(name="home", workspace="me")})
    return BBViewApp(
        config,
        profile,
        provider_factory=lambda _profile, _settings: provider,
        launcher=ProcessLauncher(which=lambda _name: None),
    )


async def _settle(app: BBViewApp, pilot: Pilot) -> None:
    """Let workers finish and their results reach the reducer."""
    for _ in range(3):
        await app.workers.wait_for_complete()
        await pilot.pause()


class TestDashboardScreen:
    """Smoke tests for the dashboard against an in-memory provider."""

    @pytest.mark.asyncio
    async def test_repositories_load_on_mount(self) -> None:
        app = _app(MemoryProvider())
        async with app.run_test(size=(120, 40)) as pilot:
            await _settle(app, pilot)
            screen = app.screen
            assert isinstance(screen, DashboardScreen)

            repos = screen.dashboard_state.list_state(ResourceKind.REPOSITORIES)
            assert [repo.slug for repo in repos.items] == ["api", "web"]
            assert screen.query_one(f"#{REPO_PANE_ID}", Static).display
            assert not screen.query_one(f"#{DETAIL_PANE_ID}", Static).display
            assert screen.layout_snapshot.status.text.startswith("j/k")

    @pytest.mark.asyncio
    async def test_drill_into_pull_request_commits(self) -> None:
        app = _app(MemoryProvider())
        async with app.run_test(size=(120, 40)) as pilot:
            await _settle(app, pilot)
            await pilot.press("j", "enter")
            await _settle(app, pilot)

            state = app.screen.dashboard_state
            assert state.view is View.PULL_REQUESTS
            assert state.selection.repo_slug == "web"
            assert state.list_state(ResourceKind.PULL_REQUESTS).items[0].title == "Change in web"

            await pilot.press("enter")
            await _settle(app, pilot)

            state = app.screen.dashboard_state
            assert state.view is View.PULL_REQUEST_COMMITS
            details = state.cache.get("0123456789abcdef")
            assert details is not None and details.complete
            assert app.screen.layout_snapshot.detail_pane.side is not None

    @pytest.mark.asyncio
    async def test_filter_and_escape_back(self) -> None:
        app = _app(MemoryProvider())
        async with app.run_test(size=(120, 40)) as pilot:
            await _settle(app, pilot)
            await pilot.press("/", "w", "e")
            await pilot.pause()

            screen = app.screen
            assert screen.dashboard_state.filter_mode
            status = screen.query_one(f"#{STATUS_LINE_ID}", Static)
            assert status is not None
            assert screen.layout_snapshot.status.text.startswith("Filter: we")

            await pilot.press("enter", "b")
            await _settle(app, pilot)
            assert screen.dashboard_state.selection.repo_slug == "web"
            assert screen.dashboard_state.view is View.BRANCHES

            await pilot.press("escape")
            await pilot.pause()
            assert screen.dashboard_state.pane is Pane.REPO_LIST

    @pytest.mark.asyncio
    async def test_viewer_failure_shows_status(self) -> None:
        app = _app(MemoryProvider())
        async with app.run_test(size=(120, 40)) as pilot:
            await _settle(app, pilot)
            await pilot.press("enter", "h")
            await _settle(app, pilot)
            await pilot.press("enter")
            await _settle(app, pilot)
            await pilot.press("enter")
            await _settle(app, pilot)

            screen = app.screen
            assert screen.dashboard_state.view is View.PIPELINE_STEP_LOG
            await pilot.press("v")
            await _settle(app, pilot)

            status = screen.dashboard_state.status
            assert status is not None
            assert status.text.startswith("Viewer error:")

    @pytest.mark.asyncio
    async def test_quit_closes_provider(self) -> None:
        provider = MemoryProvider()
        app = _app(provider)
        async with app.run_test(size=(120, 40)) as pilot:
            await _settle(app, pilot)
            await pilot.press("q")
            await pilot.pause()
        assert provider.closed


class TestProfileSelectScreen:
    """Smoke tests for the profile selector."""

    @pytest.mark.asyncio
    async def test_selector_shown_without_profile(self) -> None:
        app = _app(MemoryProvider(), profile=None)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            assert isinstance(app.screen, ProfileSelectScreen)
            assert [profile.name for profile in app.screen.profiles] == ["home", "work"]

    @pytest.mark.asyncio
    async def test_selecting_profile_opens_dashboard(self) -> None:
        app = _app(MemoryProvider(), profile=None)
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            await pilot.press("j", "enter")
            await _settle(app, pilot)

            assert isinstance(app.screen, DashboardScreen)
            assert app.screen.workspace == "acme"
