"""
重抽样统计：均值的自助法（bootstrap）百分位置信区间与单样本效应量。

随机源通过构造参数注入（random.Random 实例），测试或需要复现时传入固定 seed 即可；
未注入时使用一个新的 random.Random()。
"""

import math
import random
from typing import Dict, List, Optional, Tuple

from core.logger import get_logger

from .descriptive import DescriptiveStats
from .sample_set import SampleInput, as_sample_set

_logger = get_logger(__name__)


def _validate_bootstrap_params(confidence: float, iterations: int) -> None:
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence 必须在 (0, 1) 区间内，当前为: {confidence}")
    if not isinstance(iterations, int) or isinstance(iterations, bool) or iterations < 1:
        raise ValueError(f"iterations 必须为正整数，当前为: {iterations!r}")


class ResamplingStats:
    """
    基于自助法的区间估计。

    参数：
    - samples: 样本快照；
    - rng: 可选随机源，需提供 choices()（random.Random 或其子类）。
    """

    def __init__(self, samples: SampleInput, rng: Optional[random.Random] = None) -> None:
        self._sample_set = as_sample_set(samples)
        self._values = list(self._sample_set.values)
        self._rng = rng if rng is not None else random.Random()
        self._descriptive = DescriptiveStats(self._sample_set)

    def bootstrap_means(self, iterations: int = 1000) -> List[float]:
        """执行 iterations 次有放回重抽样（每次抽 n 个），返回各次均值（未排序）。"""
        n = len(self._values)
        means: List[float] = []
        for _ in range(iterations):
            resample = self._rng.choices(self._values, k=n)
            means.append(sum(resample) / n)
        return means

    def bootstrap_confidence_interval(
        self,
        confidence: float = 0.95,
        iterations: int = 1000,
    ) -> Tuple[float, float]:
        """
        均值的百分位自助法置信区间。

        步骤：
        1. 重抽样 iterations 次，计算每次的均值并升序排列；
        2. 下界取 sorted[⌊iterations·(1-confidence)/2⌋]，
           上界取 sorted[⌊iterations·(1+confidence)/2⌋]（下标不超过 iterations-1）。

        n = 0 时返回 (0.0, 0.0)。
        """
        _validate_bootstrap_params(confidence, iterations)
        if not self._values:
            return 0.0, 0.0

        means = sorted(self.bootstrap_means(iterations))
        lower_idx = int(math.floor(iterations * (1.0 - confidence) / 2.0))
        upper_idx = min(int(math.floor(iterations * (1.0 + confidence) / 2.0)), iterations - 1)
        _logger.debug(
            "bootstrap 完成：n=%d, iterations=%d, 下标=(%d, %d)",
            len(self._values),
            iterations,
            lower_idx,
            upper_idx,
        )
        return means[lower_idx], means[upper_idx]

    def cohens_d(self) -> float:
        """
        均值 / 标准差。

        注意：这是单样本比值，并非两组间的标准 Cohen's d，名称沿用既有报告口径。
        所有值相等或无样本时返回 0。
        """
        if self._descriptive.is_degenerate():
            return 0.0
        return self._descriptive.mean() / self._descriptive.std_dev()

    def summary(self, confidence: float = 0.95, iterations: int = 1000) -> Dict[str, float]:
        lower, upper = self.bootstrap_confidence_interval(confidence, iterations)
        return {
            "bootstrap_ci_lower": lower,
            "bootstrap_ci_upper": upper,
            "cohens_d": self.cohens_d(),
        }
