"""
Data Transfer Objects (DTOs) Module

DTOs are used to transfer data between layers and to/from the API.
They use Pydantic for validation and serialization.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from src.domain.entities.entities import (
    Competition,
    FixturePrediction,
    PredictionResult,
)
from src.domain.value_objects.value_objects import (
    ConfidenceLabel,
    DataFlag,
    MainPick,
    MatchProfile,
)
from src.utils.time_utils import get_current_time


# ============================================================
# Response DTOs
# ============================================================

class CompetitionDTO(BaseModel):
    """Competition data transfer object."""
    id: int
    code: str
    name: str
    api_league_id: int
    season: int

    class Config:
        from_attributes = True


class ConfidenceComponentsDTO(BaseModel):
    """Sub-signals behind the confidence score."""
    data_quality: float = Field(..., ge=0, le=1)
    sample_size: float = Field(..., ge=0, le=1)
    clarity: float = Field(..., ge=0, le=1)
    recent_factor: float = Field(..., ge=0, le=1)

    class Config:
        from_attributes = True


class ConfidenceDetailsDTO(BaseModel):
    """Confidence breakdown."""
    percent: int = Field(..., ge=0, le=100)
    raw_percent: int = Field(..., ge=0, le=100)
    label: ConfidenceLabel
    components: ConfidenceComponentsDTO

    class Config:
        from_attributes = True


class GoalsDTO(BaseModel):
    """Over/under 2.5 goals percentages."""
    over25: float = Field(..., ge=0, le=100)
    under25: float = Field(..., ge=0, le=100)


class BttsDTO(BaseModel):
    """Both-teams-to-score percentages."""
    yes: float = Field(..., ge=0, le=100)
    no: float = Field(..., ge=0, le=100)


class LambdasDTO(BaseModel):
    """Expected goals per side."""
    home: float = Field(..., ge=0)
    away: float = Field(..., ge=0)


class PredictionDTO(BaseModel):
    """Prediction data transfer object. Percentages are 0-100."""
    prob_home: float = Field(..., ge=0, le=100)
    prob_draw: float = Field(..., ge=0, le=100)
    prob_away: float = Field(..., ge=0, le=100)
    main_pick: MainPick
    confidence: int = Field(..., ge=0, le=100)
    confidence_label: ConfidenceLabel
    confidence_details: ConfidenceDetailsDTO
    goals: GoalsDTO
    btts: BttsDTO
    lambdas: LambdasDTO
    match_profile: MatchProfile
    data_flag: DataFlag

    @classmethod
    def from_result(cls, result: PredictionResult) -> "PredictionDTO":
        """Build the DTO from a domain prediction."""
        details = result.confidence_details
        components = details.components
        return cls(
            prob_home=result.prob_home,
            prob_draw=result.prob_draw,
            prob_away=result.prob_away,
            main_pick=result.main_pick,
            confidence=result.confidence,
            confidence_label=result.confidence_label,
            confidence_details=ConfidenceDetailsDTO(
                percent=details.percent,
                raw_percent=details.raw_percent,
                label=details.label,
                components=ConfidenceComponentsDTO(
                    data_quality=components.data_quality,
                    sample_size=components.sample_size,
                    clarity=components.clarity,
                    recent_factor=components.recent_factor,
                ),
            ),
            goals=GoalsDTO(over25=result.over25, under25=result.under25),
            btts=BttsDTO(yes=result.btts_yes, no=result.btts_no),
            lambdas=LambdasDTO(home=result.lambda_home, away=result.lambda_away),
            match_profile=result.match_profile,
            data_flag=result.data_flag,
        )


class MatchPredictionDTO(BaseModel):
    """Upcoming match with its prediction."""
    id: Optional[int] = None
    utc_date: Optional[datetime] = None
    competition: str
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    prediction: PredictionDTO

    @classmethod
    def from_fixture_prediction(cls, item: FixturePrediction) -> "MatchPredictionDTO":
        return cls(
            id=item.fixture.id,
            utc_date=item.fixture.utc_date,
            competition=item.competition.name,
            home_team=item.fixture.home_team_name,
            away_team=item.fixture.away_team_name,
            prediction=PredictionDTO.from_result(item.prediction),
        )


class MatchesResponseDTO(BaseModel):
    """Response containing match predictions for a competition."""
    matches: list[MatchPredictionDTO] = Field(default_factory=list)
    api_errors: list[str] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=get_current_time)


class ProviderKeyDTO(BaseModel):
    """Whether a provider key is configured."""
    ok: bool
    message: str


class ProviderStatusDTO(BaseModel):
    """Provider health probe result."""
    ok: bool
    status: str
    message: Optional[str] = None
    raw: Optional[dict] = None


class HealthResponseDTO(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    season: int
    provider_configured: bool = False
    timestamp: datetime = Field(default_factory=get_current_time)


class ErrorResponseDTO(BaseModel):
    """Error response."""
    error: str
    message: str
    details: Optional[dict] = None


def competition_to_dto(competition: Competition) -> CompetitionDTO:
    return CompetitionDTO.model_validate(competition)
