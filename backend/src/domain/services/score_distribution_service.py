"""
Score Distribution Service Module

Builds the joint scoreline distribution for a match from two expected-goal
rates, treating home and away goals as independent Poisson variables, and
reduces it to outcome and goal-market probabilities.

This is a pure domain service with no external dependencies.
"""

import math
import functools
from typing import Optional

from src.domain.value_objects.value_objects import (
    DEFAULT_SETTINGS,
    ModelSettings,
    ScorelineProbabilities,
)


class ScoreDistributionModel:
    """
    Independent-Poisson scoreline model.

    Goal counts are truncated to 0..max_goals per side. Masses are reported
    as-is, so the three outcomes fall short of 100 by the probability of a
    side scoring more than max_goals.
    """

    def __init__(self, settings: Optional[ModelSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    @staticmethod
    @functools.lru_cache(maxsize=None)
    def factorial(n: int) -> int:
        """Memoized factorial for small goal counts."""
        if n <= 1:
            return 1
        return math.factorial(n)

    @staticmethod
    def poisson_probability(expected: float, actual: int) -> float:
        """
        Calculate Poisson probability.

        P(X = k) = (λ^k * e^(-λ)) / k!

        A non-positive rate is treated as a point mass at zero goals.

        Args:
            expected: Expected value (λ)
            actual: Actual value (k)

        Returns:
            Probability of exactly 'actual' events occurring
        """
        if expected <= 0:
            return 1.0 if actual == 0 else 0.0
        if actual < 0:
            return 0.0

        return (
            math.exp(-expected) * math.pow(expected, actual)
        ) / ScoreDistributionModel.factorial(actual)

    def get_distribution(self, expected: float) -> list[float]:
        """Poisson masses for 0..max_goals goals."""
        return [
            self.poisson_probability(expected, k)
            for k in range(self.settings.max_goals + 1)
        ]

    def predict_scoreline(
        self,
        lambda_home: float,
        lambda_away: float,
    ) -> ScorelineProbabilities:
        """
        Calculate outcome and goal-market probabilities.

        Args:
            lambda_home: Expected goals for home team
            lambda_away: Expected goals for away team

        Returns:
            ScorelineProbabilities with percentages in [0, 100]
        """
        home_probs = self.get_distribution(lambda_home)
        away_probs = self.get_distribution(lambda_away)

        home_win = 0.0
        draw = 0.0
        away_win = 0.0
        over = 0.0
        btts = 0.0

        for home_goals, p_home in enumerate(home_probs):
            for away_goals, p_away in enumerate(away_probs):
                prob = p_home * p_away

                if home_goals > away_goals:
                    home_win += prob
                elif home_goals == away_goals:
                    draw += prob
                else:
                    away_win += prob

                if home_goals + away_goals >= 3:
                    over += prob
                if home_goals > 0 and away_goals > 0:
                    btts += prob

        return ScorelineProbabilities(
            prob_home=home_win * 100,
            prob_draw=draw * 100,
            prob_away=away_win * 100,
            over25=over * 100,
            btts_yes=btts * 100,
        )
