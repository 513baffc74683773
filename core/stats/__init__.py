"""
core.stats: 样本历史的统计分析引擎（描述统计、相关性、自助法、直方图、分布拟合）。

本模块仅提供通用统计学算法，不包含任何业务逻辑，也不做任何 I/O。
"""

from .correlation import CorrelationStats
from .descriptive import DescriptiveStats
from .distribution_fit import (
    SUPPORTED_MODELS,
    DistributionFit,
    ExponentialFit,
    NormalFit,
    PoissonFit,
    fit_distribution,
    r_squared,
)
from .histogram import DEFAULT_MAX_BINS, HistogramBin, build_histogram
from .resampling import ResamplingStats
from .sample_set import (
    DEFAULT_HISTORY_CAPACITY,
    Sample,
    SampleCapacityError,
    SampleHistory,
    SampleSet,
    as_sample_set,
    ensure_capacity,
)

__all__ = [
    "CorrelationStats",
    "DEFAULT_HISTORY_CAPACITY",
    "DEFAULT_MAX_BINS",
    "DescriptiveStats",
    "DistributionFit",
    "ExponentialFit",
    "HistogramBin",
    "NormalFit",
    "PoissonFit",
    "ResamplingStats",
    "SUPPORTED_MODELS",
    "Sample",
    "SampleCapacityError",
    "SampleHistory",
    "SampleSet",
    "as_sample_set",
    "build_histogram",
    "ensure_capacity",
    "fit_distribution",
    "r_squared",
]
