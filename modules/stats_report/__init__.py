"""
modules.stats_report: 样本历史统计报告模块。

对外提供：
- load_report_options: 从 YAML 字典构建 ReportOptions；
- compute_report: 计算扁平的指标报告（指标名 → 数值）；
- compute_histogram: 计算直方图；
- fit_distribution / fit_distributions: 分布拟合与 R² 评估。
"""

from .config_schema import DEFAULT_REPORT_CONFIG, ReportOptions, load_report_options
from .report_engine import compute_histogram, compute_report, fit_distribution, fit_distributions

__all__ = [
    "DEFAULT_REPORT_CONFIG",
    "ReportOptions",
    "compute_histogram",
    "compute_report",
    "fit_distribution",
    "fit_distributions",
    "load_report_options",
]
