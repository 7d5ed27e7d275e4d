"""Base data provider for the BBView TUI.

Screens never talk to Bitbucket directly. They hand a ``FetchRequest`` to a
``DataProvider`` from a Textual worker and get a typed payload (or a
``BBViewError``) back, so the UI stays responsive while requests run.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from bbview.constants.enums import ResourceKind
from bbview.core.commands import FetchRequest
from bbview.models.core.domain import (
    Branch,
    Commit,
    CommitChange,
    Pipeline,
    PipelineStep,
    PullRequest,
    Repository,
)

logger = logging.getLogger(__name__)


class DataProvider(ABC):
    """Read-only source of Bitbucket data for one workspace.

    Every method raises ``TransportError`` for network and HTTP failures and
    ``DecodeError`` for payloads that cannot be parsed.
    """

    @abstractmethod
    async def fetch_repositories(self) -> tuple[Repository, ...]:
        """Repositories of the workspace, most recently updated first."""
        ...

    @abstractmethod
    async def fetch_branches(self, repo_slug: str) -> tuple[Branch, ...]: ...

    @abstractmethod
    async def fetch_pull_requests(self, repo_slug: str) -> tuple[PullRequest, ...]: ...

    @abstractmethod
    async def fetch_pipelines(self, repo_slug: str) -> tuple[Pipeline, ...]:
        """Pipelines of a repository, newest first."""
        ...

    @abstractmethod
    async def fetch_pipeline(self, repo_slug: str, pipeline_uuid: str) -> Pipeline: ...

    @abstractmethod
    async def fetch_pipeline_steps(
        self, repo_slug: str, pipeline_uuid: str
    ) -> tuple[PipelineStep, ...]: ...

    @abstractmethod
    async def fetch_pipeline_step_log(
        self, repo_slug: str, pipeline_uuid: str, step_uuid: str
    ) -> str: ...

    @abstractmethod
    async def fetch_pull_request_commits(
        self, repo_slug: str, pull_request_id: int
    ) -> tuple[Commit, ...]: ...

    @abstractmethod
    async def fetch_commit_changes(
        self, repo_slug: str, commit_hash: str
    ) -> tuple[CommitChange, ...]: ...

    @abstractmethod
    async def fetch_commit_diff(self, repo_slug: str, commit_hash: str) -> str: ...

    async def aclose(self) -> None:
        """Release network resources. The default provider holds none."""

    async def fetch(self, request: FetchRequest) -> Any:
        """Dispatch ``request`` to the matching fetch method.

        Args:
            request: The fetch issued by the dashboard core.

        Returns:
            The payload for ``request.kind``.
        """
        handler = _DISPATCH.get(request.kind)
        if handler is None:
            raise ValueError(f"No provider method for {request.kind}")
        logger.debug("Fetching %s for %s", request.kind.value, request.repo_slug or "workspace")
        return await handler(self, request)


_Handler = Callable[[DataProvider, FetchRequest], Awaitable[Any]]

_DISPATCH: dict[ResourceKind, _Handler] = {
    ResourceKind.REPOSITORIES: lambda provider, request: provider.fetch_repositories(),
    ResourceKind.BRANCHES: lambda provider, request: provider.fetch_branches(request.repo_slug),
    ResourceKind.PULL_REQUESTS: lambda provider, request: provider.fetch_pull_requests(
        request.repo_slug
    ),
    ResourceKind.PIPELINES: lambda provider, request: provider.fetch_pipelines(request.repo_slug),
    ResourceKind.PIPELINE: lambda provider, request: provider.fetch_pipeline(
        request.repo_slug, request.pipeline_uuid
    ),
    ResourceKind.PIPELINE_STEPS: lambda provider, request: provider.fetch_pipeline_steps(
        request.repo_slug, request.pipeline_uuid
    ),
    ResourceKind.PIPELINE_STEP_LOG: lambda provider, request: provider.fetch_pipeline_step_log(
        request.repo_slug, request.pipeline_uuid, request.step_uuid
    ),
    ResourceKind.PULL_REQUEST_COMMITS: lambda provider, request: provider.fetch_pull_request_commits(
        request.repo_slug, request.pull_request_id
    ),
    ResourceKind.COMMIT_CHANGES: lambda provider, request: provider.fetch_commit_changes(
        request.repo_slug, request.commit_hash
    ),
    ResourceKind.COMMIT_DIFF: lambda provider, request: provider.fetch_commit_diff(
        request.repo_slug, request.commit_hash
    ),
}
