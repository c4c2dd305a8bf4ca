"""
API Dependencies Module

Provides dependency injection for FastAPI routes.
Contains factory functions for creating use case dependencies.
"""

from functools import lru_cache

from src.infrastructure.data_sources.api_football import APIFootballSource
from src.infrastructure.cache.stats_cache import CachedStatsLookup
from src.domain.services.prediction_service import PredictionService
from src.application.use_cases.competitions_use_case import GetCompetitionsUseCase
from src.application.use_cases.prediction_orchestrator import (
    GetCompetitionPredictionsUseCase,
    PredictionOrchestrator,
)


@lru_cache()
def get_api_football() -> APIFootballSource:
    """Get API-Football data source (cached)."""
    return APIFootballSource()


@lru_cache()
def get_stats_lookup() -> CachedStatsLookup:
    """Get the process-wide memoized statistics lookup."""
    return CachedStatsLookup(get_api_football())


@lru_cache()
def get_prediction_service() -> PredictionService:
    """Get prediction service (cached)."""
    return PredictionService()


@lru_cache()
def get_prediction_orchestrator() -> PredictionOrchestrator:
    """Get prediction orchestrator (cached)."""
    return PredictionOrchestrator(
        stats_lookup=get_stats_lookup(),
        prediction_service=get_prediction_service(),
    )


def get_competitions_use_case() -> GetCompetitionsUseCase:
    """Competitions bound to the current season."""
    return GetCompetitionsUseCase()


def get_competition_predictions_use_case() -> GetCompetitionPredictionsUseCase:
    """Get use case for predicting a competition's fixtures."""
    return GetCompetitionPredictionsUseCase(
        fixture_repository=get_api_football(),
        orchestrator=get_prediction_orchestrator(),
    )
