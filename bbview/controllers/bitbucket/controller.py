"""Bitbucket controller for Bitbucket Cloud REST API operations.

This module is the production ``DataProvider``: it issues HTTP requests with
httpx, follows ``next`` links across pages and hands each page to
``PayloadParser``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from bbview.constants.defaults import API_BASE_URL_DEFAULT, REQUEST_TIMEOUT_DEFAULT
from bbview.constants.values import (
    BRANCHES_PAGE_LEN,
    COMMITS_PAGE_LEN,
    PIPELINES_PAGE_LEN,
    PULL_REQUESTS_PAGE_LEN,
    REPOSITORIES_PAGE_LEN,
)
from bbview.controllers.base import DataProvider
from bbview.controllers.bitbucket.parsers import PayloadParser
from bbview.core.errors import DecodeError, TransportError
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


def _segment(value: str) -> str:
    """Quote one path segment; pipeline and step UUIDs carry braces."""
    return quote(value, safe="")


class BitbucketController(DataProvider):
    """Bitbucket Cloud data operations for a single workspace.

    Args:
        workspace: Workspace slug every request is scoped to.
        token: Credential sent as ``Authorization: Basic <token>``.
        base_url: API root, ``https://api.bitbucket.org/2.0`` by default.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, used by tests to mock the API.
    """

    def __init__(
        self,
        workspace: str,
        token: str,
        *,
        base_url: str = API_BASE_URL_DEFAULT,
        timeout: float = REQUEST_TIMEOUT_DEFAULT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.workspace = workspace
        self.base_url = base_url.rstrip("/")
        self._parser = PayloadParser()
        self._client = httpx.AsyncClient(
            headers=self._headers(token),
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def _headers(self, token: str) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Basic {token}"
        return headers

    def _repo_url(self, repo_slug: str, *path: str) -> str:
        segments = [self.base_url, "repositories", _segment(self.workspace), _segment(repo_slug)]
        segments.extend(path)
        return "/".join(segments)

    # =========================================================================
    # HTTP helpers
    # =========================================================================

    async def _request(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as err:
            raise TransportError(f"request failed for URL {url}: {err}") from err
        if not response.is_success:
            body = response.text.strip()
            raise TransportError(
                f"non-success status code: {response.status_code} for URL {url}, response: {body}",
                status_code=response.status_code,
            )
        return response

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._request(url, params)
        try:
            return response.json()
        except ValueError as err:
            raise DecodeError(f"invalid JSON from {url}: {err}") from err

    async def _get_text(self, url: str) -> str:
        response = await self._request(url)
        return response.text

    async def _get_pages(
        self,
        url: str,
        parse_item: Any,
        params: dict[str, Any] | None = None,
        *,
        follow: bool = True,
    ) -> list[Any]:
        """Collect every page starting at ``url``.

        ``next`` links already carry the query string, so ``params`` only
        apply to the first request.
        """
        items: list[Any] = []
        next_url: str = url
        next_params = params
        while next_url:
            page = await self._get_json(next_url, next_params)
            items.extend(self._parser.parse_page(page, parse_item))
            if not follow:
                break
            next_url = self._parser.next_page(page)
            next_params = None
        return items

    # =========================================================================
    # DataProvider
    # =========================================================================

    async def fetch_repositories(self) -> tuple[Repository, ...]:
        url = f"{self.base_url}/repositories/{_segment(self.workspace)}"
        repos = await self._get_pages(
            url,
            self._parser.parse_repository,
            {"pagelen": REPOSITORIES_PAGE_LEN},
        )
        # ISO-8601 timestamps from the API sort correctly as strings.
        repos.sort(key=lambda repo: repo.updated_on, reverse=True)
        logger.info("Loaded %d repositories for %s", len(repos), self.workspace)
        return tuple(repos)

    async def fetch_branches(self, repo_slug: str) -> tuple[Branch, ...]:
        branches = await self._get_pages(
            self._repo_url(repo_slug, "refs", "branches"),
            self._parser.parse_branch,
            {"pagelen": BRANCHES_PAGE_LEN},
        )
        return tuple(branches)

    async def fetch_pull_requests(self, repo_slug: str) -> tuple[PullRequest, ...]:
        pull_requests = await self._get_pages(
            self._repo_url(repo_slug, "pullrequests"),
            self._parser.parse_pull_request,
            {"pagelen": PULL_REQUESTS_PAGE_LEN},
        )
        return tuple(pull_requests)

    async def fetch_pipelines(self, repo_slug: str) -> tuple[Pipeline, ...]:
        # Only the newest page; older runs are reachable in the web UI.
        pipelines = await self._get_pages(
            self._repo_url(repo_slug, "pipelines/"),
            self._parser.parse_pipeline,
            {"pagelen": PIPELINES_PAGE_LEN, "sort": "-created_on"},
            follow=False,
        )
        return tuple(pipelines)

    async def fetch_pipeline(self, repo_slug: str, pipeline_uuid: str) -> Pipeline:
        payload = await self._get_json(
            self._repo_url(repo_slug, "pipelines", _segment(pipeline_uuid))
        )
        return self._parser.parse_pipeline(payload)

    async def fetch_pipeline_steps(
        self, repo_slug: str, pipeline_uuid: str
    ) -> tuple[PipelineStep, ...]:
        steps = await self._get_pages(
            self._repo_url(repo_slug, "pipelines", _segment(pipeline_uuid), "steps/"),
            self._parser.parse_pipeline_step,
        )
        return tuple(steps)

    async def fetch_pipeline_step_log(
        self, repo_slug: str, pipeline_uuid: str, step_uuid: str
    ) -> str:
        return await self._get_text(
            self._repo_url(
                repo_slug,
                "pipelines",
                _segment(pipeline_uuid),
                "steps",
                _segment(step_uuid),
                "log",
            )
        )

    async def fetch_pull_request_commits(
        self, repo_slug: str, pull_request_id: int
    ) -> tuple[Commit, ...]:
        commits = await self._get_pages(
            self._repo_url(repo_slug, "pullrequests", str(pull_request_id), "commits"),
            self._parser.parse_commit,
            {"pagelen": COMMITS_PAGE_LEN},
        )
        return tuple(commits)

    async def fetch_commit_changes(
        self, repo_slug: str, commit_hash: str
    ) -> tuple[CommitChange, ...]:
        changes = await self._get_pages(
            self._repo_url(repo_slug, "diffstat", _segment(commit_hash)),
            self._parser.parse_commit_change,
        )
        return tuple(changes)

    async def fetch_commit_diff(self, repo_slug: str, commit_hash: str) -> str:
        return await self._get_text(self._repo_url(repo_slug, "diff", _segment(commit_hash)))

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["BitbucketController"]
