"""
Unit Tests for the Confidence Scorer
"""

import pytest

from src.domain.entities.entities import MatchContext
from src.domain.services.confidence_scorer import ConfidenceScorer
from src.domain.value_objects.value_objects import ConfidenceLabel, EstimationMode, ModelSettings


def _context(data_quality, sample_size, recent_factor):
    return MatchContext(
        data_quality=data_quality,
        sample_size=sample_size,
        recent_factor=recent_factor,
        mode=EstimationMode.FULL_CONTEXT,
    )


class TestClarity:
    """Tests for the distribution clarity signal."""

    @pytest.fixture
    def scorer(self):
        return ConfidenceScorer()

    def test_three_way_tie_is_zero(self, scorer):
        assert scorer.calculate_clarity(33.3, 33.4, 33.3) == pytest.approx(0.0)

    def test_gap_scaled_by_reference(self, scorer):
        assert scorer.calculate_clarity(50.0, 30.0, 20.0) == 0.5

    def test_large_gap_saturates(self, scorer):
        assert scorer.calculate_clarity(10.0, 5.0, 85.0) == 1.0

    def test_order_does_not_matter(self, scorer):
        assert scorer.calculate_clarity(20.0, 50.0, 30.0) == scorer.calculate_clarity(50.0, 30.0, 20.0)

    def test_rounded_to_two_decimals(self, scorer):
        # gap 7 -> 0.175
        clarity = scorer.calculate_clarity(42.0, 35.0, 23.0)
        assert clarity == round(clarity, 2)


class TestConfidenceScorer:
    """Tests for score_confidence."""

    @pytest.fixture
    def scorer(self):
        return ConfidenceScorer()

    def test_no_evidence_clamped_to_floor(self, scorer):
        score = scorer.score_confidence(33.4, 33.3, 33.3, _context(0.0, 0.0, 0.0))

        assert score.raw_percent == 0
        assert score.percent == 25
        assert score.label == ConfidenceLabel.LOW

    def test_full_evidence_clamped_to_ceiling(self, scorer):
        score = scorer.score_confidence(80.0, 10.0, 10.0, _context(1.0, 1.0, 1.0))

        assert score.raw_percent == 100
        assert score.percent == 75
        assert score.label == ConfidenceLabel.HIGH

    def test_weighted_blend(self, scorer):
        score = scorer.score_confidence(50.0, 30.0, 20.0, _context(0.7, 0.5, 0.3))

        # 0.7*.35 + 0.5*.25 + 0.5*.25 + 0.3*.15 = 0.54
        assert score.raw_percent == 54
        assert score.percent == 54
        assert score.label == ConfidenceLabel.MEDIUM
        assert score.components.clarity == 0.5
        assert score.components.data_quality == 0.7

    def test_label_read_before_clamp(self, scorer):
        score = scorer.score_confidence(60.0, 20.0, 20.0, _context(1.0, 0.5, 0.3))

        # 0.35 + 0.125 + 0.25 + 0.045 = 0.77
        assert score.raw_percent == 77
        assert score.percent == 75
        assert score.label == ConfidenceLabel.HIGH

    def test_weak_prior_context_is_low(self, scorer):
        score = scorer.score_confidence(40.0, 30.0, 30.0, _context(0.3, 0.3, 0.3))

        assert score.raw_percent == 29
        assert score.percent == 29
        assert score.label == ConfidenceLabel.LOW

    @pytest.mark.parametrize("signal", [0.0, 0.1, 0.3, 0.5, 0.7, 0.9, 1.0])
    def test_percent_always_in_band(self, scorer, signal):
        for probs in [(33.3, 33.4, 33.3), (70.0, 20.0, 10.0), (10.0, 15.0, 75.0)]:
            score = scorer.score_confidence(*probs, _context(signal, signal, signal))
            assert 25 <= score.percent <= 75

    @pytest.mark.parametrize("percent,label", [
        (100, ConfidenceLabel.HIGH),
        (60, ConfidenceLabel.HIGH),
        (59, ConfidenceLabel.MEDIUM),
        (40, ConfidenceLabel.MEDIUM),
        (39, ConfidenceLabel.LOW),
        (0, ConfidenceLabel.LOW),
    ])
    def test_label_thresholds(self, scorer, percent, label):
        assert scorer.label_for(percent) == label

    def test_custom_band(self):
        scorer = ConfidenceScorer(ModelSettings(confidence_min=10, confidence_max=90))
        score = scorer.score_confidence(80.0, 10.0, 10.0, _context(1.0, 1.0, 1.0))
        assert score.percent == 90
