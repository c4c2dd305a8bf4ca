"""
Prediction Service Module

This domain service contains the core prediction logic:
1. Rate estimation from season statistics and recent form
2. Poisson scoreline distribution for outcome and goal markets
3. Confidence scoring and match/data classification

This is a pure domain service with no external dependencies.
"""

from typing import Optional, Sequence

from src.domain.entities.entities import (
    MatchContext,
    PredictionResult,
    RecentFormSample,
    TeamSeasonStatistics,
)
from src.domain.services.confidence_scorer import ConfidenceScorer
from src.domain.services.match_classifier import MatchClassifier
from src.domain.services.rate_estimator import RateEstimator
from src.domain.services.score_distribution_service import ScoreDistributionModel
from src.domain.value_objects.value_objects import (
    DEFAULT_SETTINGS,
    MainPick,
    ModelSettings,
    ScorelineProbabilities,
)


class PredictionService:
    """
    Domain service for generating match predictions.

    Stateless between calls: one instance can serve any number of fixtures
    concurrently.
    """

    def __init__(
        self,
        settings: Optional[ModelSettings] = None,
        rate_estimator: Optional[RateEstimator] = None,
        distribution_model: Optional[ScoreDistributionModel] = None,
        confidence_scorer: Optional[ConfidenceScorer] = None,
        classifier: Optional[MatchClassifier] = None,
    ):
        """Initialize the prediction service."""
        self.settings = settings or DEFAULT_SETTINGS
        self.rate_estimator = rate_estimator or RateEstimator(settings=self.settings)
        self.distribution_model = distribution_model or ScoreDistributionModel(self.settings)
        self.confidence_scorer = confidence_scorer or ConfidenceScorer(self.settings)
        self.classifier = classifier or MatchClassifier()

    @staticmethod
    def select_main_pick(probabilities: ScorelineProbabilities) -> MainPick:
        """
        Most probable outcome.

        Ties go to the earlier entry: HOME, then DRAW, then AWAY.
        """
        candidates = [
            (MainPick.HOME, probabilities.prob_home),
            (MainPick.DRAW, probabilities.prob_draw),
            (MainPick.AWAY, probabilities.prob_away),
        ]
        return max(candidates, key=lambda c: c[1])[0]

    def build_prediction(
        self,
        lambda_home: float,
        lambda_away: float,
        context: Optional[MatchContext] = None,
    ) -> PredictionResult:
        """
        Build a complete forecast from two expected-goal rates.

        Args:
            lambda_home: Expected goals for home team
            lambda_away: Expected goals for away team
            context: Evidence context (weak-prior context if None)

        Returns:
            PredictionResult
        """
        if context is None:
            context = MatchContext()

        probabilities = self.distribution_model.predict_scoreline(lambda_home, lambda_away)

        confidence = self.confidence_scorer.score_confidence(
            probabilities.prob_home,
            probabilities.prob_draw,
            probabilities.prob_away,
            context,
        )

        return PredictionResult(
            prob_home=probabilities.prob_home,
            prob_draw=probabilities.prob_draw,
            prob_away=probabilities.prob_away,
            over25=probabilities.over25,
            under25=probabilities.under25,
            btts_yes=probabilities.btts_yes,
            btts_no=probabilities.btts_no,
            main_pick=self.select_main_pick(probabilities),
            confidence=confidence.percent,
            confidence_label=confidence.label,
            confidence_details=confidence,
            lambda_home=round(lambda_home, 2),
            lambda_away=round(lambda_away, 2),
            match_profile=self.classifier.classify_match(probabilities),
            data_flag=self.classifier.classify_data_quality(
                context.data_quality,
                context.sample_size,
                context.recent_factor,
            ),
            context=context,
        )

    def generate_prediction(
        self,
        home_stats: Optional[TeamSeasonStatistics],
        away_stats: Optional[TeamSeasonStatistics],
        home_form: Optional[Sequence[RecentFormSample]] = None,
        away_form: Optional[Sequence[RecentFormSample]] = None,
    ) -> PredictionResult:
        """
        Generate a prediction from whatever data is available.

        Missing statistics or form lower the confidence; they never
        prevent a prediction.
        """
        estimate = self.rate_estimator.estimate_rates(home_stats, away_stats, home_form, away_form)
        return self.build_prediction(estimate.lambda_home, estimate.lambda_away, estimate.context)
