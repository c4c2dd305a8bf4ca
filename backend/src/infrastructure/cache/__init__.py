"""Infrastructure cache module."""

from .stats_cache import CachedStatsLookup

__all__ = ["CachedStatsLookup"]
