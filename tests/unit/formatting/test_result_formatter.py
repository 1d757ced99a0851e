"""Unit tests for the text summary formatter."""

import pytest

from text_classifier.formatting.formatter import (
    ResultFormatter,
    estimate_throughput,
    render_bar,
)
from text_classifier.models.classification import (
    ClassificationResult,
    Prediction,
    TimingBreakdown,
)
from text_classifier.models.enums import PerformanceRating


class TestRenderBar:
    """Test score bars."""

    @pytest.mark.parametrize(
        "score,expected",
        [(0.0, "░░░░"), (0.5, "██░░"), (1.0, "████"), (1.7, "████"), (-0.3, "░░░░")],
    )
    def test_bar(self, score, expected):
        assert render_bar(score, width=4) == expected

    def test_width_is_constant(self):
        assert all(len(render_bar(s / 10)) == 20 for s in range(11))

    def test_nan_draws_empty_bar(self):
        assert render_bar(float("nan"), width=4) == "░░░░"


class TestEstimateThroughput:
    def test_per_second(self):
        assert estimate_throughput(20.0) == pytest.approx(50.0)

    def test_zero_latency(self):
        assert estimate_throughput(0.0) is None


class TestResultFormatter:
    """Test suite for ResultFormatter."""

    def setup_method(self):
        """Setup test fixtures."""
        self.formatter = ResultFormatter(bar_width=10)
        self.result = ClassificationResult(
            text="great movie",
            predictions=[
                Prediction(label="positive", score=0.75, index=1),
                Prediction(label="negative", score=0.25, index=0),
            ],
        )

    def test_best_label_and_confidence(self):
        summary = self.formatter.format(self.result)

        assert 'Input: "great movie"' in summary
        assert "Prediction: positive (75.0% confidence)" in summary

    def test_one_row_per_label_in_rank_order(self):
        lines = self.formatter.format(self.result).splitlines()
        rows = lines[lines.index("Scores:") + 1:]

        assert rows == [
            "  positive  ████████░░   75.0%",
            "  negative  ██░░░░░░░░   25.0%",
        ]

    def test_no_timing_section_without_timing(self):
        assert "Timing:" not in self.formatter.format(self.result)

    def test_empty_predictions(self):
        summary = self.formatter.format(ClassificationResult(text="", predictions=[]))

        assert "Prediction: none (model returned no scores)" in summary
        assert "Scores:" not in summary

    def test_timing_section(self):
        timing = TimingBreakdown.from_stages(
            preprocess_ms=1.0, inference_ms=2.0, postprocess_ms=1.0
        )

        summary = self.formatter.format(self.result, timing=timing)

        assert "Timing:" in summary
        assert "Tokenize + normalize" in summary
        assert "( 50.0%)" in summary
        assert "~250.0 classifications/s" in summary
        assert "excellent (< 50 ms)" in summary

    def test_timing_taken_from_result(self):
        timing = TimingBreakdown.from_stages(
            preprocess_ms=10.0, inference_ms=60.0, postprocess_ms=5.0
        )
        result = self.result.model_copy(update={"timing": timing})

        assert "good (< 100 ms)" in self.formatter.format(result)

    def test_zero_timing_does_not_divide_by_zero(self):
        timing = TimingBreakdown.from_stages(
            preprocess_ms=0.0, inference_ms=0.0, postprocess_ms=0.0
        )

        summary = self.formatter.format(self.result, timing=timing)

        assert "Throughput" in summary
        assert "n/a" in summary

    @pytest.mark.parametrize(
        "total_ms,rating",
        [
            (12.0, PerformanceRating.EXCELLENT),
            (50.0, PerformanceRating.GOOD),
            (99.9, PerformanceRating.GOOD),
            (100.0, PerformanceRating.SLOW),
        ],
    )
    def test_rating_bands(self, total_ms, rating):
        timing = TimingBreakdown.from_stages(
            preprocess_ms=0.0, inference_ms=total_ms, postprocess_ms=0.0
        )

        assert self.formatter.rate(timing) is rating

    def test_custom_bands(self):
        formatter = ResultFormatter(excellent_below_ms=5, good_below_ms=10)

        assert formatter.rating_band(PerformanceRating.SLOW) == ">= 10 ms"
