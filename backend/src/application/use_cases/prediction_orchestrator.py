"""
Prediction Orchestrator Module

Use cases that gather team data for a fixture through a StatsLookup and
drive the domain prediction service. A lookup failure degrades the
forecast; it never fails it.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from src.domain.constants import RECENT_FORM_LIMIT
from src.domain.entities.entities import (
    Competition,
    Fixture,
    FixturePrediction,
    PredictionResult,
)
from src.domain.repositories.repositories import FixtureRepository, StatsLookup
from src.domain.services.prediction_service import PredictionService


logger = logging.getLogger(__name__)


class PredictionOrchestrator:
    """
    Composition point for one fixture prediction.

    Holds no per-fixture state, so predictions for different fixtures can
    run concurrently on one instance.
    """

    LOOKUP_NAMES = ("home statistics", "away statistics", "home form", "away form")

    def __init__(
        self,
        stats_lookup: StatsLookup,
        prediction_service: Optional[PredictionService] = None,
        form_limit: int = RECENT_FORM_LIMIT,
    ):
        self.stats_lookup = stats_lookup
        self.prediction_service = prediction_service or PredictionService()
        self.form_limit = form_limit

    def _unwrap(self, name: str, team_id: Optional[int], result: Any) -> Any:
        """Turn a failed lookup into 'unknown'."""
        if isinstance(result, Exception):
            logger.warning(f"Lookup of {name} for team {team_id} failed: {result}")
            return None
        return result

    async def predict_fixture(
        self,
        league_id: int,
        season: int,
        home_team_id: Optional[int],
        away_team_id: Optional[int],
    ) -> PredictionResult:
        """
        Predict one fixture.

        The four lookups (statistics and form for both teams) run
        concurrently and are all awaited before rates are estimated.

        Args:
            league_id: Provider league id
            season: Season start year
            home_team_id: Home team id (None if unknown)
            away_team_id: Away team id (None if unknown)

        Returns:
            PredictionResult, degraded in confidence when data is missing
        """
        if not home_team_id or not away_team_id:
            logger.info("Fixture without both team ids; predicting on default rates")
            return self.prediction_service.generate_prediction(None, None)

        lookup = self.stats_lookup
        results = await asyncio.gather(
            lookup.get_season_statistics(league_id, season, home_team_id),
            lookup.get_season_statistics(league_id, season, away_team_id),
            lookup.get_recent_form(league_id, season, home_team_id, self.form_limit),
            lookup.get_recent_form(league_id, season, away_team_id, self.form_limit),
            return_exceptions=True,
        )

        team_ids = (home_team_id, away_team_id, home_team_id, away_team_id)
        home_stats, away_stats, home_form, away_form = (
            self._unwrap(name, team_id, result)
            for name, team_id, result in zip(self.LOOKUP_NAMES, team_ids, results)
        )

        return self.prediction_service.generate_prediction(
            home_stats,
            away_stats,
            home_form,
            away_form,
        )

    async def predict(self, competition: Competition, fixture: Fixture) -> FixturePrediction:
        """Predict a fixture of a competition."""
        prediction = await self.predict_fixture(
            competition.api_league_id,
            competition.season,
            fixture.home_team_id,
            fixture.away_team_id,
        )
        return FixturePrediction(
            fixture=fixture,
            competition=competition,
            prediction=prediction,
        )


@dataclass
class CompetitionPredictions:
    """Predictions for a competition plus any provider errors."""
    competition: Competition
    predictions: list[FixturePrediction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class GetCompetitionPredictionsUseCase:
    """Use case for predicting every upcoming fixture of a competition."""

    def __init__(
        self,
        fixture_repository: FixtureRepository,
        orchestrator: PredictionOrchestrator,
    ):
        self.fixture_repository = fixture_repository
        self.orchestrator = orchestrator

    async def execute(self, competition: Competition) -> CompetitionPredictions:
        """
        Get predictions for upcoming fixtures.

        Fixtures are predicted concurrently and returned in provider order.
        """
        result = CompetitionPredictions(competition=competition)

        try:
            fixtures = await self.fixture_repository.get_upcoming_fixtures(competition)
        except Exception as e:
            logger.error(f"Failed to load fixtures for {competition.name}: {e}")
            result.errors.append(str(e))
            return result

        if not fixtures:
            result.errors.append("No upcoming matches")
            return result

        result.predictions = list(await asyncio.gather(
            *[self.orchestrator.predict(competition, f) for f in fixtures]
        ))
        logger.info(f"Predicted {len(result.predictions)} fixtures for {competition.name}")
        return result
