"""
Match Classifier Module

Tags a finished forecast with a descriptive match profile and tags the
evidence behind it with a data-quality flag.
"""

from src.domain.value_objects.value_objects import DataFlag, MatchProfile


class MatchClassifier:
    """
    Rule-based classifier over forecast percentages.

    Rules are evaluated in priority order and the first match wins, so every
    forecast gets exactly one profile.
    """

    def classify_match(self, prediction) -> MatchProfile:
        """
        Classify a forecast.

        Args:
            prediction: Any object exposing prob_home, prob_draw, prob_away,
                over25, under25 and btts_yes as percentages

        Returns:
            MatchProfile tag
        """
        home = prediction.prob_home
        draw = prediction.prob_draw
        away = prediction.prob_away
        btts = prediction.btts_yes

        if prediction.over25 >= 60 and btts >= 55:
            return MatchProfile.GOALS_GAME
        if home >= 50 and prediction.under25 >= 55:
            return MatchProfile.HOME_AND_UNDER
        if abs(home - away) <= 10 and btts >= 60:
            return MatchProfile.BALANCED_BTTS
        if home < 40 and away < 40 and draw > 25:
            return MatchProfile.HIGH_VARIANCE
        if home >= 55:
            return MatchProfile.STRONG_HOME
        if away >= 55:
            return MatchProfile.STRONG_AWAY
        return MatchProfile.NEUTRAL

    def classify_data_quality(
        self,
        data_quality: float,
        sample_size: float,
        recent_factor: float,
    ) -> DataFlag:
        """Flag the evidence level from the three context signals."""
        if data_quality >= 0.8 and sample_size >= 0.6 and recent_factor >= 0.7:
            return DataFlag.GOOD_DATA
        if data_quality >= 0.5 and sample_size >= 0.4:
            return DataFlag.OK_DATA
        return DataFlag.LOW_DATA
