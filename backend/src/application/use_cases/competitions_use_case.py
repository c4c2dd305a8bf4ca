"""
Competitions Use Case Module

Builds the catalogue of supported competitions for the current season.
"""

from typing import Optional

from src.domain.constants import COMPETITIONS
from src.domain.entities.entities import Competition
from src.utils.time_utils import get_current_season


class GetCompetitionsUseCase:
    """Use case for listing and resolving supported competitions."""

    def __init__(self, season: Optional[int] = None):
        self.season = season if season is not None else get_current_season()

    def execute(self) -> list[Competition]:
        """All supported competitions bound to the season."""
        return [
            Competition(
                id=meta["id"],
                code=meta["code"],
                name=meta["name"],
                api_league_id=meta["api_league_id"],
                season=self.season,
            )
            for meta in COMPETITIONS
        ]

    def find(self, competition_id: int) -> Optional[Competition]:
        """Resolve a competition by its public id."""
        for competition in self.execute():
            if competition.id == competition_id:
                return competition
        return None
