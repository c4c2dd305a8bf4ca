"""
Predictions Router

API endpoints for upcoming matches with predictions, and provider status.
"""

import logging

from fastapi import APIRouter, Depends, Query

from src.application.dtos.dtos import (
    ErrorResponseDTO,
    MatchesResponseDTO,
    MatchPredictionDTO,
    ProviderKeyDTO,
    ProviderStatusDTO,
)
from src.application.use_cases.competitions_use_case import GetCompetitionsUseCase
from src.application.use_cases.prediction_orchestrator import GetCompetitionPredictionsUseCase
from src.api.dependencies import (
    get_api_football,
    get_competition_predictions_use_case,
    get_competitions_use_case,
)
from src.domain.exceptions import StatsProviderException
from src.infrastructure.data_sources.api_football import APIFootballSource


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Predictions"])


@router.get(
    "/matches",
    response_model=MatchesResponseDTO,
    responses={
        500: {"model": ErrorResponseDTO, "description": "Internal server error"},
    },
    summary="Get predictions for a competition",
    description="Returns upcoming matches of a competition, each with its forecast. "
                "Provider problems are reported in api_errors instead of failing the request.",
)
async def get_matches(
    competition_id: int = Query(..., description="Competition identifier"),
    competitions: GetCompetitionsUseCase = Depends(get_competitions_use_case),
    use_case: GetCompetitionPredictionsUseCase = Depends(get_competition_predictions_use_case),
) -> MatchesResponseDTO:
    """Get predictions for all upcoming matches in a competition."""
    competition = competitions.find(competition_id)
    if competition is None:
        return MatchesResponseDTO(matches=[], api_errors=["Unknown competition"])

    result = await use_case.execute(competition)

    return MatchesResponseDTO(
        matches=[MatchPredictionDTO.from_fixture_prediction(p) for p in result.predictions],
        api_errors=result.errors,
    )


@router.get(
    "/provider/key",
    response_model=ProviderKeyDTO,
    summary="Provider key check",
    description="Reports whether a statistics provider key is configured.",
)
async def provider_key(
    source: APIFootballSource = Depends(get_api_football),
) -> ProviderKeyDTO:
    configured = source.is_configured
    return ProviderKeyDTO(ok=configured, message="Key OK" if configured else "Missing")


@router.get(
    "/provider/status",
    response_model=ProviderStatusDTO,
    summary="Provider status",
    description="Probes the statistics provider.",
)
async def provider_status(
    source: APIFootballSource = Depends(get_api_football),
) -> ProviderStatusDTO:
    if not source.is_configured:
        return ProviderStatusDTO(ok=False, status="NO_KEY")

    try:
        raw = await source.get_status()
    except StatsProviderException as e:
        logger.error(f"Provider status check failed: {e}")
        return ProviderStatusDTO(
            ok=False,
            status=str(e.status) if e.status else "ERR",
            message=str(e),
        )

    return ProviderStatusDTO(ok=True, status="OK", raw=raw)
