"""Commit details cache value types.

Entries are append-only for the session: a part (changes or diff) is written
once and never replaced or evicted.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bbview.constants.enums import ResourceKind
from bbview.models.core.domain import CommitChange

CACHE_PARTS = (ResourceKind.COMMIT_CHANGES, ResourceKind.COMMIT_DIFF)


@dataclass(frozen=True)
class CommitDetails:
    """Secondary data for one commit; ``None`` marks a part not yet resolved."""

    changes: tuple[CommitChange, ...] | None = None
    diff: str | None = None

    def has(self, part: ResourceKind) -> bool:
        if part is ResourceKind.COMMIT_CHANGES:
            return self.changes is not None
        if part is ResourceKind.COMMIT_DIFF:
            return self.diff is not None
        raise ValueError(f"Not a commit cache part: {part}")

    @property
    def complete(self) -> bool:
        return self.changes is not None and self.diff is not None


@dataclass(frozen=True)
class CommitCache:
    """Immutable snapshot of the commit cache.

    ``in_flight`` holds ``(hash, part)`` pairs that have been requested but
    have not reported back yet.
    """

    entries: dict[str, CommitDetails] = field(default_factory=dict)
    in_flight: frozenset[tuple[str, ResourceKind]] = frozenset()

    def get(self, commit_hash: str) -> CommitDetails | None:
        return self.entries.get(commit_hash)

    def has_part(self, commit_hash: str, part: ResourceKind) -> bool:
        entry = self.entries.get(commit_hash)
        return entry is not None and entry.has(part)

    def is_in_flight(self, commit_hash: str, part: ResourceKind) -> bool:
        return (commit_hash, part) in self.in_flight


__all__ = [
    "CACHE_PARTS",
    "CommitCache",
    "CommitDetails",
]
