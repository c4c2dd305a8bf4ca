"""
Domain Repository Interfaces Module

These are abstract interfaces that define how the domain layer accesses data.
Concrete implementations are provided in the infrastructure layer.
This follows the Dependency Inversion Principle (DIP).
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.constants import RECENT_FORM_LIMIT
from src.domain.entities.entities import (
    Competition,
    Fixture,
    RecentFormSample,
    TeamSeasonStatistics,
)


class StatsLookup(ABC):
    """
    Abstract source of team statistics and recent form.

    Expected absence is returned as None, never raised. Implementations may
    still raise on unexpected failures; callers treat that as absence too.
    """

    @abstractmethod
    async def get_season_statistics(
        self,
        league_id: int,
        season: int,
        team_id: int,
    ) -> Optional[TeamSeasonStatistics]:
        """Get season statistics for a team, or None if unknown."""
        pass

    @abstractmethod
    async def get_recent_form(
        self,
        league_id: int,
        season: int,
        team_id: int,
        limit: int = RECENT_FORM_LIMIT,
    ) -> Optional[list[RecentFormSample]]:
        """Get recent results for a team, most recent first, or None if unknown."""
        pass


class FixtureRepository(ABC):
    """Abstract repository for upcoming fixtures."""

    @abstractmethod
    async def get_upcoming_fixtures(self, competition: Competition) -> list[Fixture]:
        """Get upcoming fixtures for a competition."""
        pass
