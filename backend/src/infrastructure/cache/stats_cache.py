import threading
import logging
from typing import Any, Dict, Hashable, Optional

from src.domain.constants import RECENT_FORM_LIMIT
from src.domain.entities.entities import RecentFormSample, TeamSeasonStatistics
from src.domain.repositories.repositories import StatsLookup

logger = logging.getLogger(__name__)

_MISSING = object()


class CachedStatsLookup(StatsLookup):
    """
    Memoizing wrapper around another StatsLookup.

    Keys:
    - statistics: (league, season, team)
    - form: (league, season, team, limit)

    "Unknown" results are memoized as well, so a team without data is
    asked for once per process. Entries are never evicted. Exceptions
    from the wrapped lookup are not cached.
    """

    def __init__(self, inner: StatsLookup):
        """Initialize the cache around a lookup."""
        self.inner = inner
        self._stats: Dict[Hashable, Optional[TeamSeasonStatistics]] = {}
        self._form: Dict[Hashable, Optional[list[RecentFormSample]]] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    def _get(self, store: Dict[Hashable, Any], key: Hashable) -> Any:
        with self._lock:
            value = store.get(key, _MISSING)
            if value is _MISSING:
                self._misses += 1
            else:
                self._hits += 1
            return value

    def _set(self, store: Dict[Hashable, Any], key: Hashable, value: Any) -> None:
        with self._lock:
            store[key] = value

    async def get_season_statistics(
        self,
        league_id: int,
        season: int,
        team_id: int,
    ) -> Optional[TeamSeasonStatistics]:
        key = (league_id, season, team_id)
        cached = self._get(self._stats, key)
        if cached is not _MISSING:
            return cached

        value = await self.inner.get_season_statistics(league_id, season, team_id)
        self._set(self._stats, key, value)
        return value

    async def get_recent_form(
        self,
        league_id: int,
        season: int,
        team_id: int,
        limit: int = RECENT_FORM_LIMIT,
    ) -> Optional[list[RecentFormSample]]:
        key = (league_id, season, team_id, limit)
        cached = self._get(self._form, key)
        if cached is not _MISSING:
            return cached

        value = await self.inner.get_recent_form(league_id, season, team_id, limit)
        self._set(self._form, key, value)
        return value

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._stats.clear()
            self._form.clear()
            logger.info("Stats cache cleared")

    def get_stats(self) -> dict:
        """Cache counters."""
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "statistics_entries": len(self._stats),
                "form_entries": len(self._form),
            }
