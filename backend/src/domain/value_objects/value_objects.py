"""
Domain Value Objects Module

Value objects are immutable objects that are defined by their attributes rather than identity.
They encapsulate validation logic and provide type safety.
"""

from dataclasses import dataclass
from enum import Enum

from src.domain import constants
from src.domain.exceptions import ConfigurationException


class MatchProfile(str, Enum):
    """Qualitative shape of a forecast."""
    GOALS_GAME = "GOALS_GAME"
    HOME_AND_UNDER = "HOME_AND_UNDER"
    BALANCED_BTTS = "BALANCED_BTTS"
    HIGH_VARIANCE = "HIGH_VARIANCE"
    STRONG_HOME = "STRONG_HOME"
    STRONG_AWAY = "STRONG_AWAY"
    NEUTRAL = "NEUTRAL"


class DataFlag(str, Enum):
    """How much evidence underlies a prediction."""
    GOOD_DATA = "GOOD_DATA"
    OK_DATA = "OK_DATA"
    LOW_DATA = "LOW_DATA"


class ConfidenceLabel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MainPick(str, Enum):
    """Most probable single outcome."""
    HOME = "HOME"
    DRAW = "DRAW"
    AWAY = "AWAY"


class EstimationMode(str, Enum):
    """
    Which path the rate estimator took.

    FULL_CONTEXT requires season statistics for both teams;
    anything less selects DEGRADED_DEFAULT.
    """
    FULL_CONTEXT = "FULL_CONTEXT"
    DEGRADED_DEFAULT = "DEGRADED_DEFAULT"


@dataclass(frozen=True)
class FormFactor:
    """
    Multiplicative attack/defense adjustment derived from recent matches.

    Values are relative to a neutral 1.0.
    """
    attack: float = 1.0
    defense: float = 1.0
    sample_count: int = 0

    @classmethod
    def neutral(cls) -> "FormFactor":
        return cls(attack=1.0, defense=1.0, sample_count=0)


@dataclass(frozen=True)
class ScorelineProbabilities:
    """
    Outcome and goal-market probabilities, as percentages (0-100).

    Under 2.5 and BTTS "no" are derived as complements so each pair
    always sums to exactly 100.
    """
    prob_home: float
    prob_draw: float
    prob_away: float
    over25: float
    btts_yes: float

    @property
    def under25(self) -> float:
        return 100 - self.over25

    @property
    def btts_no(self) -> float:
        return 100 - self.btts_yes


@dataclass(frozen=True)
class ConfidenceComponents:
    """The four [0,1] signals blended into the confidence score."""
    data_quality: float
    sample_size: float
    clarity: float
    recent_factor: float


@dataclass(frozen=True)
class ConfidenceScore:
    """
    Self-reported confidence of a forecast.

    Attributes:
        percent: Reported percentage, clamped to the confidence band
        raw_percent: Percentage before the band clamp
        label: Qualitative label, taken from the raw percentage
        components: Sub-signals used for the score
    """
    percent: int
    raw_percent: int
    label: ConfidenceLabel
    components: ConfidenceComponents


@dataclass(frozen=True)
class ModelSettings:
    """
    Hand-tuned coefficients of the prediction model.

    Validated once when constructed; invalid values raise
    ConfigurationException so that no prediction can fail on them later.
    """
    max_goals: int = constants.MAX_GOALS
    lambda_min: float = constants.LAMBDA_MIN
    lambda_max: float = constants.LAMBDA_MAX
    fallback_lambda_home: float = constants.FALLBACK_LAMBDA_HOME
    fallback_lambda_away: float = constants.FALLBACK_LAMBDA_AWAY
    fallback_signal: float = constants.FALLBACK_SIGNAL
    default_home_goals_for: float = constants.DEFAULT_HOME_GOALS_FOR
    default_home_goals_against: float = constants.DEFAULT_HOME_GOALS_AGAINST
    default_away_goals_for: float = constants.DEFAULT_AWAY_GOALS_FOR
    default_away_goals_against: float = constants.DEFAULT_AWAY_GOALS_AGAINST
    home_advantage: float = constants.HOME_ADVANTAGE
    away_penalty: float = constants.AWAY_PENALTY
    form_baseline_goals: float = constants.FORM_BASELINE_GOALS
    form_conceded_floor: float = constants.FORM_CONCEDED_FLOOR
    form_factor_min: float = constants.FORM_FACTOR_MIN
    form_factor_max: float = constants.FORM_FACTOR_MAX
    sample_size_saturation: int = constants.SAMPLE_SIZE_SATURATION
    weight_data_quality: float = constants.WEIGHT_DATA_QUALITY
    weight_sample_size: float = constants.WEIGHT_SAMPLE_SIZE
    weight_clarity: float = constants.WEIGHT_CLARITY
    weight_recent_form: float = constants.WEIGHT_RECENT_FORM
    clarity_reference_gap: float = constants.CLARITY_REFERENCE_GAP
    confidence_min: int = constants.CONFIDENCE_MIN
    confidence_max: int = constants.CONFIDENCE_MAX
    confidence_high_threshold: int = constants.CONFIDENCE_HIGH_THRESHOLD
    confidence_medium_threshold: int = constants.CONFIDENCE_MEDIUM_THRESHOLD

    def __post_init__(self):
        if self.max_goals < 1:
            raise ConfigurationException(f"max_goals must be >= 1, got {self.max_goals}")

        for name, low, high in (
            ("lambda", self.lambda_min, self.lambda_max),
            ("form_factor", self.form_factor_min, self.form_factor_max),
            ("confidence", self.confidence_min, self.confidence_max),
        ):
            if low < 0 or high < 0:
                raise ConfigurationException(f"{name} clamp range cannot be negative: [{low}, {high}]")
            if low > high:
                raise ConfigurationException(f"{name} clamp range is inverted: [{low}, {high}]")

        if self.lambda_min <= 0:
            raise ConfigurationException("lambda_min must be positive")
        if self.confidence_max > 100:
            raise ConfigurationException("confidence_max cannot exceed 100")
        if self.form_baseline_goals <= 0 or self.form_conceded_floor <= 0:
            raise ConfigurationException("Form baseline and conceded floor must be positive")
        if self.sample_size_saturation <= 0 or self.clarity_reference_gap <= 0:
            raise ConfigurationException("Normalization references must be positive")

        weights = (
            self.weight_data_quality,
            self.weight_sample_size,
            self.weight_clarity,
            self.weight_recent_form,
        )
        if any(w < 0 for w in weights):
            raise ConfigurationException(f"Confidence weights cannot be negative: {weights}")

        if self.confidence_medium_threshold > self.confidence_high_threshold:
            raise ConfigurationException("Medium confidence threshold is above the high threshold")

    def clamp_lambda(self, value: float) -> float:
        return max(self.lambda_min, min(self.lambda_max, value))

    def clamp_form(self, value: float) -> float:
        return max(self.form_factor_min, min(self.form_factor_max, value))


DEFAULT_SETTINGS = ModelSettings()
