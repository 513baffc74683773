"""
core.logger: 统一日志入口。

约定：
- 各模块通过 get_logger(__name__) 获取 logger，不直接配置 handler；
- 由 scripts 或上层调用方在入口处调用 setup_logging 统一设置级别与输出；
- 禁止引用 modules 下的任何内容。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_ROOT_NAME = "stats_engine"


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    配置项目根 logger（控制台 + 可选文件）。

    输入：
    - level: 日志级别，可为 "DEBUG" / "INFO" 等字符串或 logging 常量；
    - log_file: 可选，日志文件路径；父目录不存在时自动创建。

    输出：
    - 配置完成的根 logger。重复调用时会先清理旧 handler，避免日志重复输出。
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"未知的日志级别：{level}")
        level = resolved

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """获取挂在项目根 logger 下的子 logger（name 通常为 __name__）。"""
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
