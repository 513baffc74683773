import random
from typing import Dict, List, Optional

from core.logger import get_logger
from core.stats import (
    CorrelationStats,
    DescriptiveStats,
    DistributionFit,
    HistogramBin,
    ResamplingStats,
    SampleCapacityError,
    SampleSet,
    as_sample_set,
    build_histogram,
    ensure_capacity,
)
from core.stats import fit_distribution as _fit_distribution
from core.stats.sample_set import SampleInput

from .config_schema import ReportOptions

_logger = get_logger(__name__)


def _prepare_samples(samples: SampleInput, options: ReportOptions) -> SampleSet:
    """
    将输入统一为 SampleSet 并校验样本量上限。

    超过 options.max_samples 时记录错误日志并抛出 SampleCapacityError，不截断。
    """
    sample_set = as_sample_set(samples)
    try:
        ensure_capacity(sample_set, options.max_samples)
    except SampleCapacityError as exc:
        _logger.error("拒绝计算统计报告：%s", exc)
        raise
    return sample_set


def compute_report(
    samples: SampleInput,
    options: Optional[ReportOptions] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, float]:
    """
    计算一份完整的统计报告（指标名 → 数值）。

    参数：
    - samples: SampleSet，或 (value, timestamp) / Sample 组成的序列；
    - options: 报告选项，None 时使用默认值；
    - rng: 可选随机源；未传入时按 options.seed 新建 random.Random。

    返回：
    - 扁平字典，包含描述性统计、相关性、卡方、自助法区间与 cohens_d，
      以及样本量 count（float）。n = 0 时除 count 外的需要样本的指标均为 0.0，
      调用方应结合 count 判断是否“无数据”。

    说明：
    - 每次调用都会重新计算，不缓存；同一快照、同一 seed 下结果逐位一致；
    - 直方图与分布拟合结果结构不同，请使用 compute_histogram / fit_distribution。
    """
    options = options or ReportOptions()
    sample_set = _prepare_samples(samples, options)
    if rng is None:
        rng = random.Random(options.seed)

    report: Dict[str, float] = {"count": float(len(sample_set))}
    report.update(DescriptiveStats(sample_set).summary())
    report.update(CorrelationStats(sample_set).summary())
    report.update(
        ResamplingStats(sample_set, rng=rng).summary(
            confidence=options.confidence_level,
            iterations=options.bootstrap_iterations,
        )
    )
    _logger.debug("统计报告完成：n=%d, 指标数=%d", len(sample_set), len(report))
    return report


def compute_histogram(
    samples: SampleInput,
    options: Optional[ReportOptions] = None,
) -> List[HistogramBin]:
    """按 options.histogram_max_bins 对样本分箱，返回升序排列的直方图箱列表。"""
    options = options or ReportOptions()
    sample_set = _prepare_samples(samples, options)
    return build_histogram(sample_set, max_bins=options.histogram_max_bins)


def fit_distribution(
    model: str,
    samples: SampleInput,
    histogram: Optional[List[HistogramBin]] = None,
    options: Optional[ReportOptions] = None,
) -> DistributionFit:
    """
    拟合单个分布模型（normal / exponential / poisson）。

    histogram 为 None 时按 options 现场分箱；R² 无定义时返回的 fit.r_squared 为 None。
    """
    options = options or ReportOptions()
    sample_set = _prepare_samples(samples, options)
    return _fit_distribution(
        model,
        sample_set,
        histogram=histogram,
        max_bins=options.histogram_max_bins,
    )


def fit_distributions(
    samples: SampleInput,
    options: Optional[ReportOptions] = None,
) -> List[DistributionFit]:
    """
    按 options.distributions 中的顺序依次拟合各分布，共用同一份直方图。
    """
    options = options or ReportOptions()
    sample_set = _prepare_samples(samples, options)
    histogram = build_histogram(sample_set, max_bins=options.histogram_max_bins)
    return [
        _fit_distribution(model, sample_set, histogram=histogram)
        for model in options.distributions
    ]
