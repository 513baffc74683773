from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from core.stats import DEFAULT_MAX_BINS, SUPPORTED_MODELS

DEFAULT_MAX_SAMPLES = 1000

DEFAULT_REPORT_CONFIG: Dict[str, Any] = {
    "report": {
        "decimal_precision": 2,
        "max_samples": DEFAULT_MAX_SAMPLES,
        "bootstrap": {
            "confidence_level": 0.95,
            "iterations": 1000,
            "seed": None,
        },
        "histogram": {
            "max_bins": DEFAULT_MAX_BINS,
        },
        "distributions": list(SUPPORTED_MODELS),
    }
}


@dataclass(frozen=True)
class ReportOptions:
    """
    统计报告的计算与展示选项。

    说明：
    - decimal_precision: 展示用小数位数，仅影响格式化，不影响任何计算；
    - confidence_level: 自助法置信水平，取值 (0, 1)；
    - bootstrap_iterations: 自助法重抽样次数；
    - seed: 自助法随机种子，None 表示不固定（每次结果可能不同）；
    - max_samples: 允许的最大样本量，超过时报错而非截断；
    - histogram_max_bins: 直方图最大箱数；
    - distributions: 需要拟合的分布列表，取值为 normal / exponential / poisson。
    """

    decimal_precision: int = 2
    confidence_level: float = 0.95
    bootstrap_iterations: int = 1000
    seed: Optional[int] = None
    max_samples: int = DEFAULT_MAX_SAMPLES
    histogram_max_bins: int = DEFAULT_MAX_BINS
    distributions: Tuple[str, ...] = field(default=SUPPORTED_MODELS)


def _require_positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} 必须为正整数，当前为: {value!r}")
    return value


def load_report_options(raw_config: Mapping[str, Any]) -> ReportOptions:
    """
    从字典（通常由 YAML 解析而来）构建 ReportOptions，并做基础校验与默认值填充。

    期望的配置结构（示例）：

    report:
      decimal_precision: 2
      max_samples: 1000
      bootstrap:
        confidence_level: 0.95
        iterations: 1000
        seed: 42
      histogram:
        max_bins: 10
      distributions: ["normal", "exponential", "poisson"]

    缺失字段使用默认值；取值非法时抛出 ValueError，错误信息为中文，方便排查。
    """
    report_cfg = raw_config.get("report", {}) or {}
    bootstrap_cfg = report_cfg.get("bootstrap", {}) or {}
    histogram_cfg = report_cfg.get("histogram", {}) or {}

    precision = report_cfg.get("decimal_precision", 2)
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ValueError(f"report.decimal_precision 必须为非负整数，当前为: {precision!r}")

    max_samples = _require_positive_int(
        report_cfg.get("max_samples", DEFAULT_MAX_SAMPLES), "report.max_samples"
    )

    confidence_level = bootstrap_cfg.get("confidence_level", 0.95)
    try:
        confidence_level = float(confidence_level)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"report.bootstrap.confidence_level 必须为数值，当前为: {confidence_level!r}"
        ) from exc
    if not 0.0 < confidence_level < 1.0:
        raise ValueError(
            f"report.bootstrap.confidence_level 必须在 (0,1) 区间内，当前为: {confidence_level}"
        )

    iterations = _require_positive_int(
        bootstrap_cfg.get("iterations", 1000), "report.bootstrap.iterations"
    )

    seed = bootstrap_cfg.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError(f"report.bootstrap.seed 必须为整数或 null，当前为: {seed!r}")

    max_bins = _require_positive_int(
        histogram_cfg.get("max_bins", DEFAULT_MAX_BINS), "report.histogram.max_bins"
    )

    distributions_raw = report_cfg.get("distributions", list(SUPPORTED_MODELS))
    if isinstance(distributions_raw, str):
        distributions_raw = [distributions_raw]
    distributions = tuple(str(d).strip().lower() for d in distributions_raw or [])
    unknown = [d for d in distributions if d not in SUPPORTED_MODELS]
    if unknown:
        raise ValueError(
            f"report.distributions 中存在不支持的分布：{', '.join(unknown)}；"
            f"当前支持：{', '.join(SUPPORTED_MODELS)}。"
        )

    return ReportOptions(
        decimal_precision=precision,
        confidence_level=confidence_level,
        bootstrap_iterations=iterations,
        seed=seed,
        max_samples=max_samples,
        histogram_max_bins=max_bins,
        distributions=distributions,
    )
