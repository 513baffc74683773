"""
描述性统计：集中趋势、离散度、形态与信息熵。

约定：
- 方差 / 标准差均为总体版本（除以 n）；
- n = 0 时所有指标返回 0.0 哨兵值，调用方需结合样本量 n 判断是否“无数据”；
- 所有值相等（最小值 == 最大值）时，方差 / 标准差 / 偏度 / 峰度 / 变异系数等显式返回 0，不产出 NaN / Inf；
- 几何均值、调和均值要求样本严格为正，引擎不做校验，由调用方保证。
"""

import math
from typing import Dict, List, Sequence, Tuple

from core.logger import get_logger

from .sample_set import SampleInput, as_sample_set

_logger = get_logger(__name__)


def median_of_sorted(sorted_values: Sequence[float]) -> float:
    """
    已排序序列的中位数。

    - 偶数个元素：取中间两个元素的平均；
    - 奇数个元素：取中间元素；
    - 空序列：返回 0.0。
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    mid = n // 2
    if n % 2 == 0:
        return (sorted_values[mid - 1] + sorted_values[mid]) / 2.0
    return float(sorted_values[mid])


def split_halves(sorted_values: Sequence[float]) -> Tuple[Sequence[float], Sequence[float]]:
    """
    按中点把已排序序列切成上下两半（用于四分位数）。

    - 下半部分：下标 [0, n//2)；
    - 上半部分：n 为偶数时从 n//2 开始，奇数时从 n//2 + 1 开始，
      即奇数时中位数元素不属于任何一半。
    """
    n = len(sorted_values)
    mid = n // 2
    upper_start = mid if n % 2 == 0 else mid + 1
    return sorted_values[:mid], sorted_values[upper_start:]


def ordered_counts(values: Sequence[float]) -> Dict[float, int]:
    """按首次出现顺序统计各取值出现次数（dict 保持插入顺序）。"""
    counts: Dict[float, int] = {}
    for v in values:
        counts[v] = counts.get(v, 0) + 1
    return counts


class DescriptiveStats:
    """
    单个样本快照上的描述性统计量。

    说明：
    - 构造时一次性缓存原始顺序与排序后的数值，各方法均为纯函数；
    - 同一快照上重复调用结果逐位一致。
    """

    def __init__(self, samples: SampleInput) -> None:
        sample_set = as_sample_set(samples)
        self._values: Tuple[float, ...] = sample_set.values
        self._sorted: List[float] = sorted(self._values)

    @property
    def n(self) -> int:
        return len(self._values)

    def mean(self) -> float:
        if not self._values:
            return 0.0
        return sum(self._values) / len(self._values)

    def median(self) -> float:
        return median_of_sorted(self._sorted)

    def mode(self) -> float:
        """
        出现次数最多的取值。

        并列时取按样本顺序最先出现的取值；这是一个任意但可复现的规则，
        与取值大小无关。
        """
        if not self._values:
            return 0.0
        best_value, best_count = 0.0, 0
        for value, count in ordered_counts(self._values).items():
            if count > best_count:
                best_value, best_count = value, count
        return best_value

    def is_degenerate(self) -> bool:
        """无样本或所有值相等（按最小值 == 最大值判断，不依赖浮点计算出的标准差）。"""
        return not self._sorted or self._sorted[0] == self._sorted[-1]

    def variance(self) -> float:
        if self.is_degenerate():
            return 0.0
        m = self.mean()
        return sum((x - m) ** 2 for x in self._values) / len(self._values)

    def std_dev(self) -> float:
        return math.sqrt(self.variance())

    def _standardized_moment(self, order: int) -> float:
        if self.is_degenerate():
            return 0.0
        std = self.std_dev()
        m = self.mean()
        central = sum((x - m) ** order for x in self._values) / len(self._values)
        return central / std**order

    def skewness(self) -> float:
        return self._standardized_moment(3)

    def kurtosis(self) -> float:
        """超额峰度（正态分布为 0）；所有值相等时返回 0。"""
        if self.is_degenerate():
            return 0.0
        return self._standardized_moment(4) - 3.0

    def minimum(self) -> float:
        return self._sorted[0] if self._sorted else 0.0

    def maximum(self) -> float:
        return self._sorted[-1] if self._sorted else 0.0

    def value_range(self) -> float:
        return self.maximum() - self.minimum()

    def coefficient_of_variation(self) -> float:
        m = self.mean()
        if self.is_degenerate() or m == 0.0:
            return 0.0
        return self.std_dev() / abs(m)

    def geometric_mean(self) -> float:
        """
        几何均值 (Πx)^(1/n)，在对数空间计算 exp(Σln|x| / n)，避免大样本下乘积溢出。

        前置条件：样本非负。存在 0 值时结果为 0.0；乘积为负（奇数个负值）时无实数解，
        记录 warning 并返回 nan，由调用方负责提供合法样本。
        """
        n = len(self._values)
        if n == 0:
            return 0.0
        if any(x == 0.0 for x in self._values):
            return 0.0
        negatives = sum(1 for x in self._values if x < 0.0)
        if negatives % 2 == 1:
            _logger.warning("几何均值的输入乘积为负（含 %d 个负值），样本不满足非负前置条件。", negatives)
            return float("nan")
        return math.exp(math.fsum(math.log(abs(x)) for x in self._values) / n)

    def harmonic_mean(self) -> float:
        """
        调和均值 n / Σ(1/x)。

        前置条件：样本严格为正。存在 0 值时按 IEEE 语义 1/0 = inf，结果为 0.0。
        """
        n = len(self._values)
        if n == 0:
            return 0.0
        if any(x == 0.0 for x in self._values):
            return 0.0
        reciprocal_sum = sum(1.0 / x for x in self._values)
        if reciprocal_sum == 0.0:
            return 0.0
        return n / reciprocal_sum

    def quartiles(self) -> Tuple[float, float, float]:
        """
        四分位数 (q1, q2, q3)。

        q2 为中位数；q1 / q3 分别为下半 / 上半部分的中位数（切分规则见 split_halves）。
        仅 1 个样本时两半均为空，此时 q1 = q3 = 该样本值。
        """
        if not self._sorted:
            return 0.0, 0.0, 0.0
        q2 = median_of_sorted(self._sorted)
        lower, upper = split_halves(self._sorted)
        q1 = median_of_sorted(lower) if lower else q2
        q3 = median_of_sorted(upper) if upper else q2
        return q1, q2, q3

    def interquartile_range(self) -> float:
        q1, _, q3 = self.quartiles()
        return q3 - q1

    def median_absolute_deviation(self) -> float:
        if not self._values:
            return 0.0
        med = self.median()
        deviations = sorted(abs(x - med) for x in self._values)
        return median_of_sorted(deviations)

    def sample_entropy(self) -> float:
        """基于不同取值经验分布的香农熵（以 2 为底）。"""
        n = len(self._values)
        if n == 0:
            return 0.0
        entropy = 0.0
        for count in ordered_counts(self._values).values():
            p = count / n
            entropy -= p * math.log2(p)
        return entropy

    def summary(self) -> Dict[str, float]:
        """一次性计算全部描述性指标，返回指标名 → 数值的字典。"""
        q1, q2, q3 = self.quartiles()
        return {
            "mean": self.mean(),
            "median": self.median(),
            "mode": self.mode(),
            "variance": self.variance(),
            "std_dev": self.std_dev(),
            "skewness": self.skewness(),
            "kurtosis": self.kurtosis(),
            "min": self.minimum(),
            "max": self.maximum(),
            "range": self.value_range(),
            "coefficient_of_variation": self.coefficient_of_variation(),
            "geometric_mean": self.geometric_mean(),
            "harmonic_mean": self.harmonic_mean(),
            "q1": q1,
            "q2": q2,
            "q3": q3,
            "iqr": q3 - q1,
            "median_absolute_deviation": self.median_absolute_deviation(),
            "sample_entropy": self.sample_entropy(),
        }
