from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from core.stats import DistributionFit, HistogramBin

# 报表中指标的展示顺序；不在列表中的指标追加在末尾，保持原有顺序
METRIC_ORDER: Sequence[str] = (
    "count",
    "mean",
    "median",
    "mode",
    "min",
    "max",
    "range",
    "variance",
    "std_dev",
    "coefficient_of_variation",
    "q1",
    "q2",
    "q3",
    "iqr",
    "median_absolute_deviation",
    "skewness",
    "kurtosis",
    "geometric_mean",
    "harmonic_mean",
    "sample_entropy",
    "spearman_rho",
    "kendall_tau",
    "chi_square",
    "chi_square_p_value",
    "bootstrap_ci_lower",
    "bootstrap_ci_upper",
    "cohens_d",
)


def _validate_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"precision 必须为非负整数，当前为: {precision!r}")


def _ordered_metric_names(report: Mapping[str, float]) -> List[str]:
    known = [name for name in METRIC_ORDER if name in report]
    extra = [name for name in report if name not in METRIC_ORDER]
    return known + extra


def format_value(value: Optional[float], precision: int) -> str:
    """
    按小数位数格式化单个数值。

    - None 显示为 "N/A"（如 R² 无定义）；
    - 样本量 count 等整数值同样按小数位格式化，保持列对齐。
    """
    _validate_precision(precision)
    if value is None:
        return "N/A"
    return f"{float(value):.{precision}f}"


def format_report(report: Mapping[str, float], precision: int = 2) -> Dict[str, str]:
    """
    将 compute_report 的结果格式化为展示字符串。

    输入：
    - report: 指标名 → 数值；
    - precision: 小数位数（仅影响展示，不回写任何计算）。

    输出：
    - 指标名 → 字符串的有序字典，顺序见 METRIC_ORDER。
    """
    return {name: format_value(report[name], precision) for name in _ordered_metric_names(report)}


def report_to_frame(report: Mapping[str, float], precision: Optional[int] = None) -> pd.DataFrame:
    """
    将报告转为两列 DataFrame（metric, value），便于表格展示或导出。

    precision 非空时对数值列做四舍五入；为空时保留原始精度。
    """
    names = _ordered_metric_names(report)
    df = pd.DataFrame({"metric": names, "value": [float(report[n]) for n in names]})
    if precision is not None:
        _validate_precision(precision)
        df["value"] = df["value"].round(precision)
    return df


def histogram_to_frame(bins: Sequence[HistogramBin]) -> pd.DataFrame:
    """直方图转为 DataFrame，列为 lower / upper / count。"""
    return pd.DataFrame(
        {
            "lower": [b.lower for b in bins],
            "upper": [b.upper for b in bins],
            "count": [b.count for b in bins],
        },
        columns=["lower", "upper", "count"],
    )


def fits_to_frame(fits: Sequence[DistributionFit]) -> pd.DataFrame:
    """
    分布拟合结果转为 DataFrame。

    每行一个模型，列包括 model、各模型参数（不适用的参数为空值）、r_squared、is_defined。
    """
    rows: List[Dict[str, Any]] = [fit.to_dict() for fit in fits]
    columns = ["model", "mean", "std_dev", "lambda", "r_squared", "is_defined"]
    return pd.DataFrame(rows, columns=columns)


def build_text_report(
    report: Mapping[str, float],
    fits: Sequence[DistributionFit] = (),
    precision: int = 2,
) -> str:
    """
    生成纯文本报告（每行 "指标: 数值"），供命令行或日志输出。
    """
    formatted = format_report(report, precision)
    width = max((len(name) for name in formatted), default=0)
    lines = [f"{name.ljust(width)} : {text}" for name, text in formatted.items()]
    for fit in fits:
        params = ", ".join(f"{k}={format_value(v, precision)}" for k, v in fit.params().items())
        lines.append(f"[{fit.model}] {params}, r_squared={format_value(fit.r_squared, precision)}")
    return "\n".join(lines)
