"""
Confidence Scorer Service Module

Calculates the self-reported confidence of a forecast from data quality,
sample size, recent-form coverage and how clearly one outcome stands out.
"""

import math
from typing import Optional

from src.domain.entities.entities import MatchContext
from src.domain.value_objects.value_objects import (
    DEFAULT_SETTINGS,
    ConfidenceComponents,
    ConfidenceLabel,
    ConfidenceScore,
    ModelSettings,
)


class ConfidenceScorer:
    """
    Blends four [0,1] signals into a confidence percentage.

    Weights:
    - Data Quality: 35%
    - Sample Size: 25%
    - Distribution Clarity: 25%
    - Recent Form: 15%

    The reported percentage never leaves the configured band (25-75 by
    default); the label is read from the value before that clamp.
    """

    def __init__(self, settings: Optional[ModelSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def calculate_clarity(
        self,
        prob_home: float,
        prob_draw: float,
        prob_away: float,
    ) -> float:
        """
        How far the favourite is ahead of the runner-up.

        Gap between the two highest percentages, scaled by the reference gap.
        40 points or more -> 1.0, a three-way tie -> 0.0
        """
        ordered = sorted((prob_home, prob_draw, prob_away), reverse=True)
        gap = ordered[0] - ordered[1]
        clarity = min(1.0, max(0.0, gap / self.settings.clarity_reference_gap))
        return round(clarity, 2)

    def label_for(self, percent: int) -> ConfidenceLabel:
        if percent >= self.settings.confidence_high_threshold:
            return ConfidenceLabel.HIGH
        elif percent >= self.settings.confidence_medium_threshold:
            return ConfidenceLabel.MEDIUM
        return ConfidenceLabel.LOW

    def score_confidence(
        self,
        prob_home: float,
        prob_draw: float,
        prob_away: float,
        context: MatchContext,
    ) -> ConfidenceScore:
        """
        Calculate the confidence score for a forecast.

        Args:
            prob_home: Home win percentage
            prob_draw: Draw percentage
            prob_away: Away win percentage
            context: Evidence context from the rate estimator

        Returns:
            ConfidenceScore with clamped percent, label and components
        """
        s = self.settings
        components = ConfidenceComponents(
            data_quality=context.data_quality,
            sample_size=context.sample_size,
            clarity=self.calculate_clarity(prob_home, prob_draw, prob_away),
            recent_factor=context.recent_factor,
        )

        score = (
            components.data_quality * s.weight_data_quality +
            components.sample_size * s.weight_sample_size +
            components.clarity * s.weight_clarity +
            components.recent_factor * s.weight_recent_form
        )
        score = max(0.0, min(1.0, score))

        # Half-up rounding to a whole percent
        raw_percent = int(math.floor(score * 100 + 0.5))
        percent = max(s.confidence_min, min(s.confidence_max, raw_percent))

        return ConfidenceScore(
            percent=percent,
            raw_percent=raw_percent,
            label=self.label_for(raw_percent),
            components=components,
        )
