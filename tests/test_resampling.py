# tests/test_resampling.py
"""ResamplingStats 测试（随机源一律注入固定 seed）。"""

import math
import random

import pytest

from core.stats import ResamplingStats

from conftest import make_sample_set


class TestBootstrapConfidenceInterval:
    @pytest.mark.parametrize("iterations", [1, 10, 1000])
    def test_constant_samples_collapse(self, iterations):
        stats = ResamplingStats(make_sample_set([5, 5, 5, 5, 5]), rng=random.Random(0))
        assert stats.bootstrap_confidence_interval(iterations=iterations) == (5.0, 5.0)

    def test_empty_returns_zero_interval(self, empty_samples):
        assert ResamplingStats(empty_samples).bootstrap_confidence_interval() == (0.0, 0.0)

    def test_reproducible_with_same_seed(self, five_samples):
        first = ResamplingStats(five_samples, rng=random.Random(42)).bootstrap_confidence_interval()
        second = ResamplingStats(five_samples, rng=random.Random(42)).bootstrap_confidence_interval()
        assert first == second

    def test_interval_bounds(self, five_samples):
        lower, upper = ResamplingStats(five_samples, rng=random.Random(7)).bootstrap_confidence_interval()
        assert 1.0 <= lower <= upper <= 5.0

    def test_interval_contains_sample_mean(self):
        samples = make_sample_set([12, 47, 33, 90, 5, 61, 28, 74, 56, 19])
        lower, upper = ResamplingStats(samples, rng=random.Random(2025)).bootstrap_confidence_interval(
            confidence=0.95, iterations=2000
        )
        assert lower <= 42.5 <= upper

    def test_picks_expected_order_statistics(self, five_samples):
        stats = ResamplingStats(five_samples, rng=random.Random(3))
        means = sorted(ResamplingStats(five_samples, rng=random.Random(3)).bootstrap_means(100))
        lower, upper = stats.bootstrap_confidence_interval(confidence=0.9, iterations=100)
        assert lower == means[int(math.floor(100 * (1.0 - 0.9) / 2.0))]
        assert upper == means[int(math.floor(100 * (1.0 + 0.9) / 2.0))]

    @pytest.mark.parametrize("confidence", [0.0, 1.0, 1.5, -0.2])
    def test_invalid_confidence(self, five_samples, confidence):
        with pytest.raises(ValueError, match="confidence"):
            ResamplingStats(five_samples).bootstrap_confidence_interval(confidence=confidence)

    @pytest.mark.parametrize("iterations", [0, -5, 2.5])
    def test_invalid_iterations(self, five_samples, iterations):
        with pytest.raises(ValueError, match="iterations"):
            ResamplingStats(five_samples).bootstrap_confidence_interval(iterations=iterations)


class TestBootstrapMeans:
    def test_length_and_range(self, five_samples):
        means = ResamplingStats(five_samples, rng=random.Random(1)).bootstrap_means(50)
        assert len(means) == 50
        assert all(1.0 <= m <= 5.0 for m in means)


class TestCohensD:
    def test_mean_over_std(self, five_samples):
        assert ResamplingStats(five_samples).cohens_d() == pytest.approx(3.0 / math.sqrt(2.0))

    def test_zero_std(self):
        assert ResamplingStats(make_sample_set([5, 5])).cohens_d() == 0.0

    def test_inexact_constant_samples(self):
        assert ResamplingStats(make_sample_set([0.1, 0.1, 0.1])).cohens_d() == 0.0
        assert ResamplingStats(make_sample_set([1.1] * 10)).cohens_d() == 0.0

    def test_empty(self, empty_samples):
        assert ResamplingStats(empty_samples).cohens_d() == 0.0


class TestSummary:
    def test_keys(self, five_samples):
        summary = ResamplingStats(five_samples, rng=random.Random(0)).summary(iterations=10)
        assert set(summary) == {"bootstrap_ci_lower", "bootstrap_ci_upper", "cohens_d"}
