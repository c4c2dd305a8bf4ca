"""
Domain Entities Module

This module contains the core domain entities for the match forecasting system.
These entities represent the core business concepts and are independent of any infrastructure.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from src.domain.value_objects.value_objects import (
    ConfidenceLabel,
    ConfidenceScore,
    DataFlag,
    EstimationMode,
    MainPick,
    MatchProfile,
)


@dataclass(frozen=True)
class Competition:
    """
    Represents a supported competition for one season.

    Attributes:
        id: Public identifier of the competition
        code: Short code (e.g., "PL")
        name: Full name (e.g., "Premier League")
        api_league_id: League id on the statistics provider
        season: Season start year (e.g., 2025 for 2025/26)
    """
    id: int
    code: str
    name: str
    api_league_id: int
    season: int

    def __post_init__(self):
        if not self.name or not self.code:
            raise ValueError("Competition name and code are required")


@dataclass
class Fixture:
    """
    Represents an upcoming match between two teams.

    Team ids may be missing when the provider sends an incomplete fixture;
    such fixtures are still predicted, on the weak prior.
    """
    id: Optional[int]
    home_team_id: Optional[int]
    away_team_id: Optional[int]
    home_team_name: Optional[str] = None
    away_team_name: Optional[str] = None
    utc_date: Optional[datetime] = None

    @property
    def has_teams(self) -> bool:
        """Check if both team ids are known."""
        return bool(self.home_team_id) and bool(self.away_team_id)


@dataclass(frozen=True)
class TeamSeasonStatistics:
    """
    Season aggregate for one team in one competition.

    Absent provider fields default to zero.
    """
    team_id: int
    played_home: int = 0
    played_away: int = 0
    played_total: int = 0
    goals_for_home: int = 0
    goals_for_away: int = 0
    goals_against_home: int = 0
    goals_against_away: int = 0

    @property
    def home_goals_for_per_match(self) -> Optional[float]:
        """Average goals scored at home, None without home matches."""
        if self.played_home == 0:
            return None
        return self.goals_for_home / self.played_home

    @property
    def home_goals_against_per_match(self) -> Optional[float]:
        if self.played_home == 0:
            return None
        return self.goals_against_home / self.played_home

    @property
    def away_goals_for_per_match(self) -> Optional[float]:
        """Average goals scored away, None without away matches."""
        if self.played_away == 0:
            return None
        return self.goals_for_away / self.played_away

    @property
    def away_goals_against_per_match(self) -> Optional[float]:
        if self.played_away == 0:
            return None
        return self.goals_against_away / self.played_away


@dataclass(frozen=True)
class RecentFormSample:
    """Result of one recent match, seen from the team's side."""
    was_home: bool
    goals_for: int
    goals_against: int

    def __post_init__(self):
        if self.goals_for < 0 or self.goals_against < 0:
            raise ValueError("Goals cannot be negative")


@dataclass(frozen=True)
class MatchContext:
    """
    Evidence summary built fresh for one prediction.

    Attributes:
        home_matches_total: Season matches played by the home team
        away_matches_total: Season matches played by the away team
        home_recent_matches: Recent-form samples available for the home team
        away_recent_matches: Recent-form samples available for the away team
        data_quality: [0,1] signal from season match counts
        sample_size: [0,1] signal from combined match count
        recent_factor: [0,1] signal from recent-form coverage
        mode: Estimation path that produced this context
    """
    home_matches_total: int = 0
    away_matches_total: int = 0
    home_recent_matches: int = 0
    away_recent_matches: int = 0
    data_quality: float = 0.3
    sample_size: float = 0.3
    recent_factor: float = 0.3
    mode: EstimationMode = EstimationMode.DEGRADED_DEFAULT


@dataclass(frozen=True)
class PredictionResult:
    """
    Complete forecast for one fixture.

    Probabilities are percentages. under25/btts_no are complements of
    over25/btts_yes.
    """
    prob_home: float
    prob_draw: float
    prob_away: float
    over25: float
    under25: float
    btts_yes: float
    btts_no: float
    main_pick: MainPick
    confidence: int
    confidence_label: ConfidenceLabel
    confidence_details: ConfidenceScore
    lambda_home: float
    lambda_away: float
    match_profile: MatchProfile
    data_flag: DataFlag
    context: MatchContext = field(default_factory=MatchContext)


@dataclass
class FixturePrediction:
    """A fixture paired with its forecast."""
    fixture: Fixture
    competition: Competition
    prediction: PredictionResult
