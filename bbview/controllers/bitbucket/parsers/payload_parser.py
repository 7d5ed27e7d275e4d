"""Payload parser for the Bitbucket controller - turns API JSON into domain models."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from bbview.core.errors import DecodeError
from bbview.models.core.domain import (
    Branch,
    Commit,
    CommitChange,
    Pipeline,
    PipelineStep,
    PullRequest,
    Repository,
)


def _get(payload: Any, *path: str) -> Any:
    """Walk nested dicts, returning ``None`` when any key is missing."""
    value = payload
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _text(payload: Any, *path: str) -> str:
    value = _get(payload, *path)
    return "" if value is None else str(value)


class PayloadParser:
    """Parses Bitbucket Cloud 2.0 payloads into domain models.

    Missing optional fields become empty strings. A value that is not a JSON
    object where one is required raises ``DecodeError``.
    """

    def _values(self, page: Any) -> list[dict[str, Any]]:
        if not isinstance(page, dict):
            raise DecodeError(f"Expected a paged object, got {type(page).__name__}")
        values = page.get("values", [])
        if not isinstance(values, list):
            raise DecodeError("Paged response has a non-list 'values' field")
        return values

    def next_page(self, page: Any) -> str:
        """URL of the following page, or ``""`` on the last page."""
        return _text(page, "next")

    def _build(self, model: type, item: Any, **fields: Any) -> Any:
        if not isinstance(item, dict):
            raise DecodeError(f"Expected an object for {model.__name__}, got {type(item).__name__}")
        try:
            return model(**fields)
        except ValidationError as err:
            raise DecodeError(f"Invalid {model.__name__} payload: {err}") from err

    # =========================================================================
    # Single items
    # =========================================================================

    def parse_repository(self, item: Any) -> Repository:
        return self._build(
            Repository,
            item,
            name=_text(item, "name"),
            slug=_text(item, "slug"),
            uuid=_text(item, "uuid"),
            mainbranch=_text(item, "mainbranch", "name"),
            updated_on=_text(item, "updated_on"),
        )

    def parse_branch(self, item: Any) -> Branch:
        return self._build(
            Branch,
            item,
            name=_text(item, "name"),
            target_hash=_text(item, "target", "hash"),
            target_date=_text(item, "target", "date"),
        )

    def parse_pull_request(self, item: Any) -> PullRequest:
        return self._build(
            PullRequest,
            item,
            id=_get(item, "id") or 0,
            title=_text(item, "title"),
            description=_text(item, "description"),
            state=_text(item, "state"),
            draft=bool(_get(item, "draft")),
            author=_text(item, "author", "display_name"),
            source_branch=_text(item, "source", "branch", "name"),
            dest_branch=_text(item, "destination", "branch", "name"),
            created_on=_text(item, "created_on"),
            updated_on=_text(item, "updated_on"),
            url=_text(item, "links", "html", "href"),
        )

    def parse_pipeline(self, item: Any) -> Pipeline:
        """Parse a pipeline run.

        The branch comes from ``target.ref_name``; pipelines triggered on a
        commit or pull request without a ref fall back to the source branch.
        """
        branch = _text(item, "target", "ref_name") or _text(item, "target", "source")
        return self._build(
            Pipeline,
            item,
            uuid=_text(item, "uuid"),
            build_number=_get(item, "build_number") or 0,
            state=_text(item, "state", "name"),
            result=_text(item, "state", "result", "name"),
            branch_name=branch,
            created_on=_text(item, "created_on"),
            started_on=_text(item, "started_on") or _text(item, "created_on"),
            completed_on=_text(item, "completed_on"),
        )

    def parse_pipeline_step(self, item: Any) -> PipelineStep:
        return self._build(
            PipelineStep,
            item,
            uuid=_text(item, "uuid"),
            name=_text(item, "name"),
            state=_text(item, "state", "name"),
            result=_text(item, "state", "result", "name"),
            started_on=_text(item, "started_on"),
            completed_on=_text(item, "completed_on"),
        )

    def parse_commit(self, item: Any) -> Commit:
        author = _text(item, "author", "user", "display_name") or _text(item, "author", "raw")
        return self._build(
            Commit,
            item,
            hash=_text(item, "hash"),
            message=_text(item, "message"),
            author=author,
            date=_text(item, "date"),
        )

    def parse_commit_change(self, item: Any) -> CommitChange:
        return self._build(
            CommitChange,
            item,
            status=_text(item, "status"),
            old_path=_text(item, "old", "path"),
            new_path=_text(item, "new", "path"),
            lines_added=_get(item, "lines_added") or 0,
            lines_removed=_get(item, "lines_removed") or 0,
        )

    # =========================================================================
    # Pages
    # =========================================================================

    def parse_page(self, page: Any, parse_item: Any) -> list[Any]:
        """Parse every entry of one paged response with ``parse_item``."""
        return [parse_item(item) for item in self._values(page)]


__all__ = ["PayloadParser"]
