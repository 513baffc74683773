"""
分布拟合：正态 / 指数 / 泊松三种候选模型。

设计目标：
- 参数用矩估计，直接基于原始样本计算（而非基于直方图）；
- 以直方图每箱的期望频数与观测频数计算 R²，作为拟合优度；
- 不依赖 SciPy，仅使用标准库 math 完成 CDF / PMF 计算。

约定：
- 正态 / 指数：期望频数 = n · (CDF(upper) - CDF(lower))；
- 泊松：期望频数 = n · P(K = k)，k 为箱中点四舍五入（远离 0）后的整数；
- 观测频数全部相同（SStot = 0，含空直方图）时 R² 无定义，r_squared 为 None，
  is_defined 为 False；不抛异常、不返回 NaN。
"""

import math
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Optional, Sequence, Tuple

from core.logger import get_logger

from .descriptive import DescriptiveStats
from .histogram import DEFAULT_MAX_BINS, HistogramBin, build_histogram
from .sample_set import SampleInput, as_sample_set

_logger = get_logger(__name__)

MODEL_NORMAL = "normal"
MODEL_EXPONENTIAL = "exponential"
MODEL_POISSON = "poisson"
SUPPORTED_MODELS: Tuple[str, ...] = (MODEL_NORMAL, MODEL_EXPONENTIAL, MODEL_POISSON)


@dataclass(frozen=True)
class DistributionFit:
    """
    分布拟合结果的公共部分。

    字段说明：
    - expected: 各直方图箱的期望频数（与直方图顺序一致）；
    - observed: 各直方图箱的观测频数；
    - r_squared: 拟合优度 R²；None 表示无定义（观测频数方差为 0）。
    """

    model: ClassVar[str] = ""

    expected: Tuple[float, ...] = field(default=())
    observed: Tuple[int, ...] = field(default=())
    r_squared: Optional[float] = None

    @property
    def is_defined(self) -> bool:
        return self.r_squared is not None

    def params(self) -> Dict[str, float]:
        return {}

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {"model": self.model}
        result.update(self.params())
        result["r_squared"] = self.r_squared
        result["is_defined"] = self.is_defined
        return result


@dataclass(frozen=True)
class NormalFit(DistributionFit):
    model: ClassVar[str] = MODEL_NORMAL

    mean: float = 0.0
    std_dev: float = 0.0

    def params(self) -> Dict[str, float]:
        return {"mean": self.mean, "std_dev": self.std_dev}


@dataclass(frozen=True)
class ExponentialFit(DistributionFit):
    model: ClassVar[str] = MODEL_EXPONENTIAL

    lambda_: float = 0.0

    def params(self) -> Dict[str, float]:
        return {"lambda": self.lambda_}


@dataclass(frozen=True)
class PoissonFit(DistributionFit):
    model: ClassVar[str] = MODEL_POISSON

    lambda_: float = 0.0

    def params(self) -> Dict[str, float]:
        return {"lambda": self.lambda_}


def normal_cdf(x: float, mean: float, std_dev: float) -> float:
    """
    正态分布 N(mean, std_dev²) 的累积分布函数，基于误差函数 erf。

    std_dev 为 0 时退化为在 mean 处的阶跃函数。
    """
    if std_dev == 0.0:
        return 1.0 if x >= mean else 0.0
    return 0.5 * (1.0 + math.erf((x - mean) / (std_dev * math.sqrt(2.0))))


def exponential_cdf(x: float, lambda_: float) -> float:
    """指数分布 CDF：x > 0 时为 1 - e^{-λx}，否则为 0。"""
    if x <= 0.0:
        return 0.0
    return 1.0 - math.exp(-lambda_ * x)


def poisson_pmf(k: int, lambda_: float) -> float:
    """
    泊松分布点质量 λ^k e^{-λ} / k!。

    使用对数形式与 lgamma 计算，避免 k 较大时阶乘溢出；k < 0 时概率为 0。
    """
    if k < 0:
        return 0.0
    if lambda_ <= 0.0:
        return 1.0 if k == 0 else 0.0
    return math.exp(k * math.log(lambda_) - lambda_ - math.lgamma(k + 1))


def round_half_away_from_zero(x: float) -> int:
    """四舍五入到整数，.5 时远离 0（不同于 Python 内置 round 的银行家舍入）。"""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def r_squared(observed: Sequence[float], expected: Sequence[float]) -> Optional[float]:
    """
    R² = 1 - SSres / SStot。

    - SStot = Σ(observed - mean(observed))²；
    - SSres = Σ(observed - expected)²；
    - SStot 为 0 或序列为空时返回 None（无定义）；结果可能为负，表示拟合差于常数模型。
    """
    if len(observed) != len(expected):
        raise ValueError("observed 与 expected 的长度必须一致。")
    if not observed:
        return None
    obs_mean = sum(observed) / len(observed)
    ss_total = sum((o - obs_mean) ** 2 for o in observed)
    if ss_total == 0.0:
        return None
    ss_residual = sum((o - e) ** 2 for o, e in zip(observed, expected))
    return 1.0 - ss_residual / ss_total


def _cdf_expected(
    bins: Sequence[HistogramBin],
    n: int,
    cdf: Callable[[float], float],
) -> List[float]:
    return [n * (cdf(b.upper) - cdf(b.lower)) for b in bins]


def _poisson_expected(bins: Sequence[HistogramBin], n: int, lambda_: float) -> List[float]:
    return [n * poisson_pmf(round_half_away_from_zero(b.midpoint), lambda_) for b in bins]


def fit_distribution(
    model: str,
    samples: SampleInput,
    histogram: Optional[Sequence[HistogramBin]] = None,
    max_bins: int = DEFAULT_MAX_BINS,
) -> DistributionFit:
    """
    对样本拟合指定分布并基于直方图评估 R²。

    输入：
    - model: "normal" / "exponential" / "poisson"；
    - samples: 样本快照；
    - histogram: 可选，已计算好的直方图；为 None 时按 max_bins 现场分箱；
    - max_bins: 现场分箱时的最大箱数。

    输出：
    - 对应的 NormalFit / ExponentialFit / PoissonFit；
      R² 无定义时 r_squared 为 None。
    """
    model_key = str(model).strip().lower()
    if model_key not in SUPPORTED_MODELS:
        raise ValueError(
            f"model 仅支持 {' / '.join(SUPPORTED_MODELS)}，当前为: {model}"
        )

    sample_set = as_sample_set(samples)
    bins = list(histogram) if histogram is not None else build_histogram(sample_set, max_bins)
    n = len(sample_set)
    descriptive = DescriptiveStats(sample_set)
    mean = descriptive.mean()
    observed = tuple(b.count for b in bins)

    if model_key == MODEL_NORMAL:
        std_dev = descriptive.std_dev()
        expected = _cdf_expected(bins, n, lambda x: normal_cdf(x, mean, std_dev))
        fit: DistributionFit = NormalFit(
            expected=tuple(expected),
            observed=observed,
            r_squared=r_squared(observed, expected),
            mean=mean,
            std_dev=std_dev,
        )
    elif model_key == MODEL_EXPONENTIAL:
        lambda_ = 1.0 / mean if mean > 0.0 else 0.0
        expected = _cdf_expected(bins, n, lambda x: exponential_cdf(x, lambda_))
        fit = ExponentialFit(
            expected=tuple(expected),
            observed=observed,
            r_squared=r_squared(observed, expected),
            lambda_=lambda_,
        )
    else:
        expected = _poisson_expected(bins, n, mean)
        fit = PoissonFit(
            expected=tuple(expected),
            observed=observed,
            r_squared=r_squared(observed, expected),
            lambda_=mean,
        )

    if not fit.is_defined:
        _logger.warning("%s 拟合的 R² 无定义：各箱观测频数完全相同（n=%d, 箱数=%d）。", fit.model, n, len(bins))
    return fit
