"""
Rate Estimator Module

Converts season statistics and recent form of two teams into the expected
goal rates (lambdas) consumed by the score distribution model, and builds
the MatchContext that describes how much evidence was available.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from src.domain.entities.entities import (
    MatchContext,
    RecentFormSample,
    TeamSeasonStatistics,
)
from src.domain.services.form_factor_calculator import FormFactorCalculator
from src.domain.value_objects.value_objects import (
    DEFAULT_SETTINGS,
    EstimationMode,
    FormFactor,
    ModelSettings,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateEstimate:
    """Expected goals for both sides plus the evidence context."""
    lambda_home: float
    lambda_away: float
    context: MatchContext
    home_form: FormFactor = field(default_factory=FormFactor.neutral)
    away_form: FormFactor = field(default_factory=FormFactor.neutral)

    @property
    def mode(self) -> EstimationMode:
        return self.context.mode


class RateEstimator:
    """
    Estimates expected goals from venue-specific season averages.

    Two paths:
    - FULL_CONTEXT: season statistics exist for both teams.
    - DEGRADED_DEFAULT: otherwise; fixed weak-prior rates and low signals.
    """

    def __init__(
        self,
        form_calculator: Optional[FormFactorCalculator] = None,
        settings: Optional[ModelSettings] = None,
    ):
        self.settings = settings or DEFAULT_SETTINGS
        self.form_calculator = form_calculator or FormFactorCalculator(self.settings)

    @staticmethod
    def select_mode(
        home_stats: Optional[TeamSeasonStatistics],
        away_stats: Optional[TeamSeasonStatistics],
    ) -> EstimationMode:
        """Both teams' statistics are required for the full path."""
        if home_stats is not None and away_stats is not None:
            return EstimationMode.FULL_CONTEXT
        return EstimationMode.DEGRADED_DEFAULT

    def degraded_estimate(self) -> RateEstimate:
        """Weak prior used when season statistics are missing."""
        signal = self.settings.fallback_signal
        return RateEstimate(
            lambda_home=self.settings.fallback_lambda_home,
            lambda_away=self.settings.fallback_lambda_away,
            context=MatchContext(
                data_quality=signal,
                sample_size=signal,
                recent_factor=signal,
                mode=EstimationMode.DEGRADED_DEFAULT,
            ),
        )

    def estimate_rates(
        self,
        home_stats: Optional[TeamSeasonStatistics],
        away_stats: Optional[TeamSeasonStatistics],
        home_form: Optional[Sequence[RecentFormSample]] = None,
        away_form: Optional[Sequence[RecentFormSample]] = None,
    ) -> RateEstimate:
        """
        Estimate both expected-goal rates.

        Args:
            home_stats: Home team season statistics (None if unknown)
            away_stats: Away team season statistics (None if unknown)
            home_form: Home team recent results (None or empty if unknown)
            away_form: Away team recent results (None or empty if unknown)

        Returns:
            RateEstimate with clamped lambdas and a fresh MatchContext
        """
        if self.select_mode(home_stats, away_stats) is EstimationMode.DEGRADED_DEFAULT:
            logger.info(
                f"Season statistics missing (home={home_stats is not None}, "
                f"away={away_stats is not None}); using default rates"
            )
            return self.degraded_estimate()

        s = self.settings

        # Home side measured at home, away side measured away
        home_avg_for = home_stats.home_goals_for_per_match
        home_avg_against = home_stats.home_goals_against_per_match
        if home_avg_for is None:
            home_avg_for = s.default_home_goals_for
            home_avg_against = s.default_home_goals_against

        away_avg_for = away_stats.away_goals_for_per_match
        away_avg_against = away_stats.away_goals_against_per_match
        if away_avg_for is None:
            away_avg_for = s.default_away_goals_for
            away_avg_against = s.default_away_goals_against

        lambda_home = (home_avg_for + away_avg_against) / 2
        lambda_away = (away_avg_for + home_avg_against) / 2

        lambda_home = s.clamp_lambda(lambda_home * s.home_advantage)
        lambda_away = s.clamp_lambda(lambda_away * s.away_penalty)

        home_factor = self.form_calculator.compute_form_factor(home_form)
        away_factor = self.form_calculator.compute_form_factor(away_form)

        lambda_home = s.clamp_lambda(lambda_home * home_factor.attack * away_factor.defense)
        lambda_away = s.clamp_lambda(lambda_away * away_factor.attack * home_factor.defense)

        context = self.build_context(
            home_stats.played_total,
            away_stats.played_total,
            home_factor.sample_count,
            away_factor.sample_count,
        )

        return RateEstimate(
            lambda_home=lambda_home,
            lambda_away=lambda_away,
            context=context,
            home_form=home_factor,
            away_form=away_factor,
        )

    def build_context(
        self,
        home_total: int,
        away_total: int,
        home_recent: int,
        away_recent: int,
    ) -> MatchContext:
        """Derive the evidence signals for a fully-informed prediction."""
        if home_total >= 5 and away_total >= 5:
            data_quality = 1.0
        elif home_total >= 3 and away_total >= 3:
            data_quality = 0.7
        else:
            data_quality = 0.4

        sample_size = min(1.0, (home_total + away_total) / self.settings.sample_size_saturation)

        recent = min(home_recent, away_recent)
        if recent >= 5:
            recent_factor = 1.0
        elif recent >= 3:
            recent_factor = 0.7
        elif recent >= 1:
            recent_factor = 0.5
        else:
            recent_factor = 0.3

        return MatchContext(
            home_matches_total=home_total,
            away_matches_total=away_total,
            home_recent_matches=home_recent,
            away_recent_matches=away_recent,
            data_quality=data_quality,
            sample_size=sample_size,
            recent_factor=recent_factor,
            mode=EstimationMode.FULL_CONTEXT,
        )
