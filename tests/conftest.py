# tests/conftest.py
"""统计引擎测试的共享 fixture。"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import List

import pytest

from core.stats import SampleSet

BASE_TIME = datetime(2025, 5, 11, 9, 30, 0)


def make_sample_set(values: List[float]) -> SampleSet:
    """按给定顺序构建 SampleSet，时间戳依次递减一秒（最新在前）。"""
    return SampleSet(
        (value, BASE_TIME - timedelta(seconds=idx)) for idx, value in enumerate(values)
    )


@pytest.fixture
def five_samples() -> SampleSet:
    """[1, 2, 3, 4, 5] 五个样本。"""
    return make_sample_set([1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def empty_samples() -> SampleSet:
    return SampleSet()


@pytest.fixture
def clustered_samples() -> SampleSet:
    """各箱观测频数不全相同的样本，用于 R² 有定义的场景。"""
    return make_sample_set([1.0, 2.0, 2.0, 3.0, 3.0, 3.0, 4.0, 4.0, 5.0, 10.0])


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).resolve().parent.parent
