"""Result cache for per-commit secondary fetches.

``get_or_fetch`` coalesces requests: a part that is already resolved or in
flight is never requested again. The two parts of an entry (diffstat and
textual diff) are fetched independently and may resolve in either order.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from bbview.constants.enums import ResourceKind
from bbview.core.commands import Fetch, FetchRequest
from bbview.models.cache.commit_cache import CACHE_PARTS, CommitCache, CommitDetails
from bbview.models.core.domain import CommitChange

logger = logging.getLogger(__name__)


def get_or_fetch(
    cache: CommitCache,
    repo_slug: str,
    commit_hash: str,
) -> tuple[CommitCache, CommitDetails | None, list[Fetch]]:
    """Look up ``commit_hash`` and request whatever is still missing.

    Returns the (possibly updated) cache, the cached details if any part is
    known, and the fetch commands issued. A complete entry issues nothing.
    """
    entry = cache.get(commit_hash)
    if entry is not None and entry.complete:
        return cache, entry, []

    missing = [
        part
        for part in CACHE_PARTS
        if not cache.has_part(commit_hash, part) and not cache.is_in_flight(commit_hash, part)
    ]
    if not missing:
        return cache, entry, []

    commands = [
        Fetch(FetchRequest(kind=part, repo_slug=repo_slug, commit_hash=commit_hash))
        for part in missing
    ]
    in_flight = cache.in_flight | {(commit_hash, part) for part in missing}
    logger.debug("Fetching %s for commit %s", [part.value for part in missing], commit_hash)
    return replace(cache, in_flight=in_flight), entry, commands


def _record(cache: CommitCache, commit_hash: str, part: ResourceKind, **value: object) -> CommitCache:
    in_flight = cache.in_flight - {(commit_hash, part)}
    if cache.has_part(commit_hash, part):
        # Entries are append-only; a late duplicate does not overwrite.
        return replace(cache, in_flight=in_flight)
    entry = replace(cache.get(commit_hash) or CommitDetails(), **value)
    entries = dict(cache.entries)
    entries[commit_hash] = entry
    return CommitCache(entries=entries, in_flight=in_flight)


def record_changes(
    cache: CommitCache,
    commit_hash: str,
    changes: tuple[CommitChange, ...],
) -> CommitCache:
    return _record(cache, commit_hash, ResourceKind.COMMIT_CHANGES, changes=tuple(changes))


def record_diff(cache: CommitCache, commit_hash: str, diff: str) -> CommitCache:
    return _record(cache, commit_hash, ResourceKind.COMMIT_DIFF, diff=diff)


def record_failure(cache: CommitCache, commit_hash: str, part: ResourceKind) -> CommitCache:
    """Forget an in-flight part so a later lookup can request it again."""
    return replace(cache, in_flight=cache.in_flight - {(commit_hash, part)})


__all__ = [
    "get_or_fetch",
    "record_changes",
    "record_diff",
    "record_failure",
]
