# core/utils/file_io.py
# 统一文件读取入口：按后缀自动选择 CSV/Excel，支持编码回退；并可将样本列转换为 SampleSet

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

import pandas as pd

from core.logger import get_logger
from core.stats.sample_set import SampleSet

_logger = get_logger(__name__)

# 文本类后缀用 read_csv，Excel 用 read_excel
_CSV_LIKE_SUFFIXES = {".csv", ".txt"}
_EXCEL_SUFFIXES = {".xlsx", ".xls"}


class DataLoader:
    """
    统一数据加载器：根据文件后缀自动选择 pandas 读取方式，并对 CSV 做编码回退。

    Input:
        encoding_list: 尝试的编码顺序，仅对 CSV/TXT 生效。默认 ["utf-8", "gbk", "gb18030"]。
    Output:
        无（构造器）。数据通过 read_data() 返回 DataFrame，或通过 read_samples() 返回 SampleSet。
    """

    def __init__(
        self,
        encoding_list: Optional[List[str]] = None,
    ) -> None:
        self._encoding_list: List[str] = encoding_list or [
            "utf-8",
            "gbk",
            "gb18030",
        ]

    def read_data(
        self,
        file_path: str | Path,
        **kwargs: Any,
    ) -> pd.DataFrame:
        """
        根据文件后缀自动选择读取方式，并支持编码回退与 Pandas 原生参数透传。

        Input:
            file_path: 文件路径（字符串或 Path）。
            **kwargs: 透传给 pd.read_csv 或 pd.read_excel 的参数。
        Output:
            pd.DataFrame: 读取后的数据表。
        """
        path = Path(file_path)
        if not path.exists():
            _msg = f"文件不存在，请检查路径：{path.absolute()}"
            _logger.error(_msg)
            raise FileNotFoundError(_msg)

        suffix = path.suffix.lower()
        if suffix in _CSV_LIKE_SUFFIXES:
            return self._read_csv_with_encoding(path, **kwargs)
        if suffix in _EXCEL_SUFFIXES:
            return pd.read_excel(path, **kwargs)

        raise ValueError(
            f"不支持的文件格式：{suffix}。"
            f"当前支持：{', '.join(sorted(_CSV_LIKE_SUFFIXES | _EXCEL_SUFFIXES))}。"
        )

    def read_samples(
        self,
        file_path: str | Path,
        value_col: str = "value",
        timestamp_col: Optional[str] = "timestamp",
        **kwargs: Any,
    ) -> SampleSet:
        """
        读取文件并将其中的样本列转换为 SampleSet（保持文件中的行顺序）。

        Input:
            file_path: 文件路径。
            value_col: 样本数值所在列名。
            timestamp_col: 时间戳列名；为 None 或文件中不存在该列时，时间戳记为 datetime.min。
        Output:
            SampleSet: 不可变样本快照。
        """
        df = self.read_data(file_path, **kwargs)
        return frame_to_sample_set(df, value_col=value_col, timestamp_col=timestamp_col)

    def _read_csv_with_encoding(
        self,
        path: Path,
        **kwargs: Any,
    ) -> pd.DataFrame:
        """按 encoding_list 顺序尝试编码读取 CSV/TXT，直到成功。"""
        encodings_to_try: List[str] = []
        if "encoding" in kwargs:
            encodings_to_try.append(kwargs.pop("encoding"))
        encodings_to_try.extend(self._encoding_list)

        last_error: Optional[Exception] = None
        for enc in encodings_to_try:
            try:
                return pd.read_csv(path, encoding=enc, **kwargs)
            except (UnicodeDecodeError, UnicodeError) as e:
                _logger.debug("编码 %s 解码失败，尝试下一个：%s", enc, path.name)
                last_error = e
                continue

        _msg = (
            f"使用编码 {encodings_to_try} 均无法正确解码文件：{path.absolute()}。"
            f"最后错误：{last_error!s}"
        )
        _logger.error(_msg)
        raise ValueError(_msg) from last_error


def frame_to_sample_set(
    df: pd.DataFrame,
    value_col: str = "value",
    timestamp_col: Optional[str] = "timestamp",
) -> SampleSet:
    """
    将 DataFrame 的样本列转换为 SampleSet。

    - value_col 缺失时抛出 ValueError；
    - 数值列中的空值（NaN）视为非法样本，直接报错，不做静默丢弃；
    - 时间戳列经 pd.to_datetime 解析后转为 datetime。
    """
    if value_col not in df.columns:
        raise ValueError(f"数据中缺少样本数值列：{value_col}")
    if df[value_col].isna().any():
        raise ValueError(f"样本数值列 {value_col} 中存在空值，请先清洗数据。")

    if timestamp_col is not None and timestamp_col in df.columns:
        timestamps = [ts.to_pydatetime() for ts in pd.to_datetime(df[timestamp_col])]
    else:
        timestamps = [datetime.min] * len(df)

    return SampleSet(zip(df[value_col].tolist(), timestamps))
