"""Bitbucket domain models shown in the dashboard lists."""

from pydantic import BaseModel, ConfigDict


class _Record(BaseModel):
    """Immutable record shared by list state snapshots."""

    model_config = ConfigDict(frozen=True)


class Repository(_Record):
    """Repository row in the left pane."""

    name: str
    slug: str
    uuid: str = ""
    mainbranch: str = ""
    updated_on: str = ""


class Branch(_Record):
    """Branch with the commit it points at."""

    name: str
    target_hash: str = ""
    target_date: str = ""


class PullRequest(_Record):
    """Pull request summary."""

    id: int
    title: str = ""
    description: str = ""
    state: str = ""
    draft: bool = False
    author: str = ""
    source_branch: str = ""
    dest_branch: str = ""
    created_on: str = ""
    updated_on: str = ""
    url: str = ""


class Pipeline(_Record):
    """Pipeline run. ``uuid`` is the identity used for polling and drilling."""

    uuid: str = ""
    build_number: int = 0
    state: str = ""
    result: str = ""
    branch_name: str = ""
    created_on: str = ""
    started_on: str = ""
    completed_on: str = ""


class PipelineStep(_Record):
    """One step of a pipeline run."""

    uuid: str = ""
    name: str = ""
    state: str = ""
    result: str = ""
    started_on: str = ""
    completed_on: str = ""


class Commit(_Record):
    """Commit listed under a pull request."""

    hash: str = ""
    message: str = ""
    author: str = ""
    date: str = ""


class CommitChange(_Record):
    """One file entry of a commit diffstat."""

    status: str = ""
    old_path: str = ""
    new_path: str = ""
    lines_added: int = 0
    lines_removed: int = 0

    @property
    def path(self) -> str:
        """Path to show for the change, preferring the new location."""
        return self.new_path or self.old_path


__all__ = [
    "Branch",
    "Commit",
    "CommitChange",
    "Pipeline",
    "PipelineStep",
    "PullRequest",
    "Repository",
]
