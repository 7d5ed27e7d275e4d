"""Bitbucket domain models."""

from bbview.models.core.domain import (
    Branch,
    Commit,
    CommitChange,
    Pipeline,
    PipelineStep,
    PullRequest,
    Repository,
)

__all__ = [
    "Branch",
    "Commit",
    "CommitChange",
    "Pipeline",
    "PipelineStep",
    "PullRequest",
    "Repository",
]
