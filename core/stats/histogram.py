"""
直方图分箱：将样本取值区间等宽切分为若干箱并计数，供分布拟合使用。
"""

import math
from dataclasses import dataclass
from typing import List

from .sample_set import SampleInput, as_sample_set

DEFAULT_MAX_BINS = 10


@dataclass(frozen=True)
class HistogramBin:
    """
    单个直方图箱，区间为 [lower, upper)（最后一箱包含最大值）。
    """

    lower: float
    upper: float
    count: int

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2.0


def build_histogram(samples: SampleInput, max_bins: int = DEFAULT_MAX_BINS) -> List[HistogramBin]:
    """
    对样本做等宽分箱。

    规则：
    - 箱数 = min(max_bins, n)，无样本时返回空列表；
    - 箱宽 = (max - min) / 箱数；
    - 样本所在箱 = min(⌊(x - min) / 箱宽⌋, 箱数 - 1)，最大值落入最后一箱；
    - 所有样本相等（箱宽为 0）时，全部计入第 0 箱。

    返回：
    - 按区间升序排列的 HistogramBin 列表，计数之和恒等于 n。
    """
    if not isinstance(max_bins, int) or isinstance(max_bins, bool) or max_bins < 1:
        raise ValueError(f"max_bins 必须为正整数，当前为: {max_bins!r}")

    values = as_sample_set(samples).values
    n = len(values)
    if n == 0:
        return []

    bin_count = min(max_bins, n)
    low = min(values)
    high = max(values)
    bin_size = (high - low) / bin_count

    counts = [0] * bin_count
    for x in values:
        if bin_size == 0.0:
            idx = 0
        else:
            idx = min(int(math.floor((x - low) / bin_size)), bin_count - 1)
        counts[idx] += 1

    bins: List[HistogramBin] = []
    for i, count in enumerate(counts):
        lower = low + i * bin_size
        # 最后一箱上界直接取最大值，避免累加误差
        upper = high if i == bin_count - 1 else low + (i + 1) * bin_size
        bins.append(HistogramBin(lower=lower, upper=upper, count=count))
    return bins
