"""Session caches."""

from bbview.models.cache.commit_cache import CACHE_PARTS, CommitCache, CommitDetails

__all__ = ["CACHE_PARTS", "CommitCache", "CommitDetails"]
