# tests/test_report_engine.py
"""modules.stats_report 报告入口测试。"""

import math
import random

import pytest

from core.stats import NormalFit, PoissonFit, SampleCapacityError, SampleSet
from modules.stats_report import (
    ReportOptions,
    compute_histogram,
    compute_report,
    fit_distribution,
    fit_distributions,
)

from conftest import BASE_TIME, make_sample_set

EXPECTED_METRICS = {
    "count",
    "mean",
    "median",
    "mode",
    "variance",
    "std_dev",
    "skewness",
    "kurtosis",
    "min",
    "max",
    "range",
    "coefficient_of_variation",
    "geometric_mean",
    "harmonic_mean",
    "q1",
    "q2",
    "q3",
    "iqr",
    "median_absolute_deviation",
    "sample_entropy",
    "spearman_rho",
    "kendall_tau",
    "chi_square",
    "chi_square_p_value",
    "bootstrap_ci_lower",
    "bootstrap_ci_upper",
    "cohens_d",
}


class TestComputeReport:
    def test_metric_names(self, five_samples):
        report = compute_report(five_samples, ReportOptions(seed=1))
        assert set(report) == EXPECTED_METRICS
        assert all(isinstance(v, float) for v in report.values())

    def test_known_values(self, five_samples):
        report = compute_report(five_samples, ReportOptions(seed=1))
        assert report["count"] == 5.0
        assert report["mean"] == 3.0
        assert report["variance"] == 2.0
        assert report["q1"] == 1.5
        assert report["q3"] == 4.5
        assert report["iqr"] == 3.0
        assert report["kendall_tau"] == 1.0
        assert report["chi_square"] == 0.0

    def test_empty_history_is_all_zero(self, empty_samples):
        report = compute_report(empty_samples)
        assert report["count"] == 0.0
        assert all(value == 0.0 for value in report.values())

    def test_constant_history_bootstrap(self):
        report = compute_report(make_sample_set([5, 5, 5, 5, 5]))
        assert (report["bootstrap_ci_lower"], report["bootstrap_ci_upper"]) == (5.0, 5.0)

    def test_inexact_constant_history_has_zero_shape_metrics(self):
        report = compute_report(make_sample_set([0.1] * 5), ReportOptions(seed=3))
        assert report["std_dev"] == 0.0
        assert report["skewness"] == 0.0
        assert report["kurtosis"] == 0.0
        assert report["cohens_d"] == 0.0
        assert all(math.isfinite(v) for v in report.values())

    def test_large_history_metrics_are_finite(self):
        options = ReportOptions(seed=3, bootstrap_iterations=50)
        report = compute_report(make_sample_set(list(range(50, 250))), options)
        assert math.isfinite(report["geometric_mean"])
        assert all(math.isfinite(v) for v in report.values())

    def test_same_seed_is_bit_identical(self, five_samples):
        options = ReportOptions(seed=99)
        assert compute_report(five_samples, options) == compute_report(five_samples, options)

    def test_non_random_metrics_repeat_without_seed(self, five_samples):
        first = compute_report(five_samples)
        second = compute_report(five_samples)
        random_keys = {"bootstrap_ci_lower", "bootstrap_ci_upper"}
        assert {k: v for k, v in first.items() if k not in random_keys} == {
            k: v for k, v in second.items() if k not in random_keys
        }

    def test_injected_rng_overrides_seed(self, five_samples):
        options = ReportOptions(seed=1, bootstrap_iterations=200)
        injected = compute_report(five_samples, options, rng=random.Random(5))
        expected = compute_report(five_samples, ReportOptions(seed=5, bootstrap_iterations=200))
        assert injected == expected

    def test_accepts_pairs(self):
        report = compute_report([(2.0, BASE_TIME), (4.0, BASE_TIME)])
        assert report["mean"] == 3.0

    def test_does_not_mutate_snapshot(self):
        sample_set = SampleSet.from_values([9, 1, 5])
        compute_report(sample_set)
        assert sample_set.values == (9.0, 1.0, 5.0)

    def test_rejects_oversized_input(self, caplog):
        options = ReportOptions(max_samples=3)
        with caplog.at_level("ERROR"):
            with pytest.raises(SampleCapacityError):
                compute_report(make_sample_set([1, 2, 3, 4]), options)
        assert "拒绝计算统计报告" in caplog.text

    def test_invalid_bootstrap_options(self, five_samples):
        with pytest.raises(ValueError, match="confidence"):
            compute_report(five_samples, ReportOptions(confidence_level=1.2))


class TestComputeHistogram:
    def test_counts_sum_to_n(self, clustered_samples):
        bins = compute_histogram(clustered_samples)
        assert sum(b.count for b in bins) == len(clustered_samples)

    def test_respects_max_bins(self, clustered_samples):
        assert len(compute_histogram(clustered_samples, ReportOptions(histogram_max_bins=4))) == 4

    def test_rejects_oversized_input(self, clustered_samples):
        with pytest.raises(SampleCapacityError):
            compute_histogram(clustered_samples, ReportOptions(max_samples=2))


class TestFitDistribution:
    def test_single_model(self, clustered_samples):
        fit = fit_distribution("normal", clustered_samples)
        assert isinstance(fit, NormalFit)
        assert fit.is_defined

    def test_with_precomputed_histogram(self, clustered_samples):
        histogram = compute_histogram(clustered_samples)
        fit = fit_distribution("poisson", clustered_samples, histogram=histogram)
        assert isinstance(fit, PoissonFit)
        assert len(fit.expected) == len(histogram)

    def test_all_configured_models_in_order(self, clustered_samples):
        fits = fit_distributions(clustered_samples)
        assert [f.model for f in fits] == ["normal", "exponential", "poisson"]

    def test_subset_of_models(self, clustered_samples):
        fits = fit_distributions(clustered_samples, ReportOptions(distributions=("poisson",)))
        assert [f.model for f in fits] == ["poisson"]

    def test_undefined_fit_is_returned(self, five_samples):
        fits = fit_distributions(five_samples)
        assert all(f.r_squared is None for f in fits)
