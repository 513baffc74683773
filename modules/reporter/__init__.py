"""
modules.reporter: 报表输出模块。

当前提供：
- format_report / format_value: 按显示精度格式化统计报告；
- report_to_frame / histogram_to_frame / fits_to_frame: 转为 pandas DataFrame；
- build_text_report: 生成纯文本报告。
"""

from .stats_reporter import (
    build_text_report,
    fits_to_frame,
    format_report,
    format_value,
    histogram_to_frame,
    report_to_frame,
)

__all__ = [
    "build_text_report",
    "fits_to_frame",
    "format_report",
    "format_value",
    "histogram_to_frame",
    "report_to_frame",
]
