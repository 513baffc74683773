"""
scripts.sample_report

样本统计报告入口：读取样本文件与配置，计算统计报告、直方图与分布拟合，并打印文本报告。
对外提供调用函数 run_sample_report(data_path, config_path?, value_col?, timestamp_col?) -> dict。
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Optional

# 将项目根目录加入 sys.path，保证从命令行直接运行脚本时可以 import modules/core
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from core.logger import get_logger, setup_logging
from core.utils import DataLoader, load_yaml_with_defaults
from modules.reporter import build_text_report, fits_to_frame, histogram_to_frame, report_to_frame
from modules.stats_report import (
    DEFAULT_REPORT_CONFIG,
    compute_histogram,
    compute_report,
    fit_distributions,
    load_report_options,
)

_logger = get_logger(__name__)


def run_sample_report(
    data_path: str,
    config_path: Optional[str] = None,
    value_col: str = "value",
    timestamp_col: Optional[str] = "timestamp",
) -> Dict[str, Any]:
    """
    读取样本并生成统计报告。

    输入：
    - data_path: 样本文件路径（csv / txt / xlsx / xls，由 core.utils.DataLoader 读取）；
    - config_path: 可选，报告配置 YAML；未传时若 configs/stats_report.yaml 存在则使用它，
      否则使用内置默认值；
    - value_col / timestamp_col: 样本数值列与时间戳列名。

    输出：
    - 字典，包含：
      - "report": 指标名 → 数值；
      - "report_frame" / "histogram_frame" / "fits_frame": 对应的 DataFrame；
      - "text": 按配置精度格式化后的纯文本报告。
    """
    if config_path is None:
        default_path = _PROJECT_ROOT / "configs" / "stats_report.yaml"
        cfg_path: Optional[Path] = default_path if default_path.exists() else None
    else:
        cfg_path = Path(config_path)
    raw_config = load_yaml_with_defaults(cfg_path, DEFAULT_REPORT_CONFIG)
    options = load_report_options(raw_config)

    samples = DataLoader().read_samples(data_path, value_col=value_col, timestamp_col=timestamp_col)
    _logger.info("已读取样本 %d 条：%s", len(samples), data_path)

    report = compute_report(samples, options)
    histogram = compute_histogram(samples, options)
    fits = fit_distributions(samples, options)

    return {
        "report": report,
        "report_frame": report_to_frame(report, precision=options.decimal_precision),
        "histogram_frame": histogram_to_frame(histogram),
        "fits_frame": fits_to_frame(fits),
        "text": build_text_report(report, fits, precision=options.decimal_precision),
    }


def main() -> None:
    """命令行入口：接收样本文件路径与可选配置路径，打印文本报告。"""
    if len(sys.argv) < 2:
        print("用法: python scripts/sample_report.py <样本文件路径> [配置文件路径]")
        print("示例: python scripts/sample_report.py data/history.csv")
        print("示例: python scripts/sample_report.py data/history.csv configs/stats_report.yaml")
        sys.exit(1)
    setup_logging("INFO")
    data_path = sys.argv[1]
    config_path = sys.argv[2] if len(sys.argv) > 2 and sys.argv[2].strip() else None

    outputs = run_sample_report(data_path=data_path, config_path=config_path)
    print("样本统计报告：")
    print(outputs["text"])


if __name__ == "__main__":
    main()
