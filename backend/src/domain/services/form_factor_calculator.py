"""
Form Factor Calculator Module

Turns a team's last few results into multiplicative attack and defense
adjustments for its expected-goal rate.
"""

from typing import Optional, Sequence

from src.domain.entities.entities import RecentFormSample
from src.domain.value_objects.value_objects import (
    DEFAULT_SETTINGS,
    FormFactor,
    ModelSettings,
)


class FormFactorCalculator:
    """
    Calculates form factors from recent match results.

    attack  = 0.7 + 0.3 * (avg goals for / baseline)
    defense = 0.7 + 0.3 * (baseline / max(avg goals against, floor))

    Both are clamped to the configured form band. Unknown or empty form is
    neutral.
    """

    def __init__(self, settings: Optional[ModelSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def compute_form_factor(
        self,
        samples: Optional[Sequence[RecentFormSample]],
    ) -> FormFactor:
        """
        Calculate the form factor for one team.

        Args:
            samples: Recent results, most recent first (None if unknown)

        Returns:
            FormFactor with clamped attack/defense and the number of samples used
        """
        if not samples:
            return FormFactor.neutral()

        count = len(samples)
        avg_goals_for = sum(s.goals_for for s in samples) / count
        avg_goals_against = sum(s.goals_against for s in samples) / count

        baseline = self.settings.form_baseline_goals
        attack = 0.7 + 0.3 * (avg_goals_for / baseline)
        defense = 0.7 + 0.3 * (baseline / max(avg_goals_against, self.settings.form_conceded_floor))

        return FormFactor(
            attack=self.settings.clamp_form(attack),
            defense=self.settings.clamp_form(defense),
            sample_count=count,
        )
