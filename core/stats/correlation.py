"""
基于样本序列的相关性与拟合优度统计。

说明：
- Spearman / Kendall 衡量“样本值”与“样本在序列中的位置”之间的关联；
- 卡方检验的零假设为“样本在各不同取值上均匀分布”；
- 卡方 p 值使用 logistic 曲线近似，而非真实的卡方生存函数。这是为兼容既有结果
  刻意保留的简化，不应当作严格的显著性结论使用。
"""

import math
from typing import Dict, List, Tuple

from .descriptive import ordered_counts
from .sample_set import SampleInput, as_sample_set


def rank_by_sorted_position(values: Tuple[float, ...]) -> List[int]:
    """
    为每个样本赋秩（1..n）。

    稳定排序后按排序位置赋秩，数值相同的样本不取平均秩，而是保留原始先后次序。
    """
    order = sorted(range(len(values)), key=lambda idx: values[idx])
    ranks = [0] * len(values)
    for position, idx in enumerate(order):
        ranks[idx] = position + 1
    return ranks


class CorrelationStats:
    """样本快照上的 Spearman rho、Kendall tau 与卡方拟合优度。"""

    def __init__(self, samples: SampleInput) -> None:
        self._values: Tuple[float, ...] = as_sample_set(samples).values

    def spearman_rho(self) -> float:
        """
        ρ = 1 - 6Σd² / (n(n²-1))，d 为样本秩与其序号（1..n）之差。

        n <= 1 时返回 0。
        """
        n = len(self._values)
        if n <= 1:
            return 0.0
        ranks = rank_by_sorted_position(self._values)
        sum_d2 = sum((rank - (idx + 1)) ** 2 for idx, rank in enumerate(ranks))
        return 1.0 - 6.0 * sum_d2 / (n * (n * n - 1))

    def kendall_tau(self) -> float:
        """
        τ = (一致对 - 不一致对) / (n(n-1)/2)。

        对每个 i < j：x_i < x_j 计为一致对，其余情况（包括相等）计为不一致对。
        因此严格递增序列为 1.0，严格递减序列为 -1.0，全部相等的序列为 -1.0。
        """
        n = len(self._values)
        if n < 2:
            return 0.0
        concordant = 0
        discordant = 0
        for i in range(n - 1):
            xi = self._values[i]
            for j in range(i + 1, n):
                if xi < self._values[j]:
                    concordant += 1
                else:
                    discordant += 1
        total_pairs = n * (n - 1) / 2.0
        return (concordant - discordant) / total_pairs

    def chi_square(self) -> Tuple[float, float]:
        """
        均匀分布零假设下的卡方统计量及近似 p 值。

        返回：
        - (chi_square, p_value)；n = 0 时返回 (0.0, 0.0)。
        - p_value = 1 - 1 / (1 + exp(-χ²/2))，统计量为 0 时为 0.5。
        """
        n = len(self._values)
        if n == 0:
            return 0.0, 0.0
        counts = ordered_counts(self._values)
        expected = n / len(counts)
        statistic = sum((observed - expected) ** 2 / expected for observed in counts.values())
        p_value = 1.0 - 1.0 / (1.0 + math.exp(-statistic / 2.0))
        return statistic, p_value

    def summary(self) -> Dict[str, float]:
        statistic, p_value = self.chi_square()
        return {
            "spearman_rho": self.spearman_rho(),
            "kendall_tau": self.kendall_tau(),
            "chi_square": statistic,
            "chi_square_p_value": p_value,
        }
