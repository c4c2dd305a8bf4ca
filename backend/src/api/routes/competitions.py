"""
Competitions Router

API endpoints for listing supported competitions.
"""

from fastapi import APIRouter, Depends

from src.application.dtos.dtos import CompetitionDTO, competition_to_dto
from src.application.use_cases.competitions_use_case import GetCompetitionsUseCase
from src.api.dependencies import get_competitions_use_case


router = APIRouter(prefix="/competitions", tags=["Competitions"])


@router.get(
    "",
    response_model=list[CompetitionDTO],
    summary="Get supported competitions",
    description="Returns the supported competitions for the current season.",
)
async def get_competitions(
    use_case: GetCompetitionsUseCase = Depends(get_competitions_use_case),
) -> list[CompetitionDTO]:
    """Get all supported competitions."""
    return [competition_to_dto(c) for c in use_case.execute()]
