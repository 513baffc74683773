"""
样本快照与历史记录容器。

设计目标：
- Sample / SampleSet 为引擎的唯一输入，创建后不可变；
- SampleHistory 模拟宿主侧的有界历史列表：最新样本插在最前，超出容量时丢弃最旧样本；
- 所有统计组件只读取 SampleSet.values，不修改任何输入。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

DEFAULT_HISTORY_CAPACITY = 10


class SampleCapacityError(ValueError):
    """输入样本量超过允许上限时抛出（不做静默截断）。"""


@dataclass(frozen=True)
class Sample:
    """
    单个样本。

    字段说明：
    - value: 样本数值；
    - timestamp: 样本生成时间。
    """

    value: float
    timestamp: datetime


def _require_finite(value: float, index: int) -> None:
    if not math.isfinite(value):
        raise ValueError(f"第 {index} 个样本的值必须为有限数值，当前为: {value!r}")


def _to_sample(item: Any, index: int) -> Sample:
    """
    将单个输入元素转换为 Sample。

    支持：
    - Sample 实例（原样返回）；
    - (value, timestamp) 二元组；
    - 单个数值（timestamp 记为 datetime.min，表示时间未知）。

    NaN / ±inf 一律拒绝，统计组件只处理有限值。
    """
    if isinstance(item, Sample):
        _require_finite(item.value, index)
        return item

    if isinstance(item, (tuple, list)):
        if len(item) != 2:
            raise ValueError(f"第 {index} 个样本必须为 (value, timestamp) 二元组，当前长度为 {len(item)}。")
        raw_value, timestamp = item
    else:
        raw_value, timestamp = item, datetime.min

    try:
        value = float(raw_value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"第 {index} 个样本的值无法转换为浮点数：{raw_value!r}") from exc
    _require_finite(value, index)

    if not isinstance(timestamp, datetime):
        raise ValueError(f"第 {index} 个样本的时间戳必须为 datetime，当前为 {type(timestamp).__name__}。")
    return Sample(value=value, timestamp=timestamp)


class SampleSet:
    """
    有序样本集合的不可变视图。

    说明：
    - 顺序即宿主侧生成顺序（约定最新在前），引擎不重排原始顺序；
    - 内部以 tuple 保存，外部拿到的 values / samples 均不可修改；
    - len(sample_set) 即统计意义上的样本量 n。
    """

    __slots__ = ("_samples", "_values")

    def __init__(self, samples: Iterable[Any] = ()) -> None:
        converted = tuple(_to_sample(item, idx) for idx, item in enumerate(samples))
        self._samples: Tuple[Sample, ...] = converted
        self._values: Tuple[float, ...] = tuple(s.value for s in converted)

    @classmethod
    def from_values(
        cls,
        values: Iterable[float],
        timestamp: Optional[datetime] = None,
    ) -> "SampleSet":
        """仅有数值时构建 SampleSet，所有样本共用同一个时间戳（默认 datetime.min）。"""
        ts = timestamp or datetime.min
        return cls((v, ts) for v in values)

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return self._samples

    @property
    def values(self) -> Tuple[float, ...]:
        return self._values

    def sorted_values(self) -> List[float]:
        """返回升序排列的数值副本。"""
        return sorted(self._values)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(self._samples)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleSet):
            return NotImplemented
        return self._samples == other._samples

    def __hash__(self) -> int:
        return hash(self._samples)

    def __repr__(self) -> str:
        return f"SampleSet(n={len(self._samples)}, values={list(self._values)!r})"


SampleInput = Union[SampleSet, Sequence[Any]]


def as_sample_set(samples: SampleInput) -> SampleSet:
    """若输入已是 SampleSet 则原样返回，否则转换为 SampleSet。"""
    if isinstance(samples, SampleSet):
        return samples
    return SampleSet(samples)


def ensure_capacity(sample_set: SampleSet, max_samples: int) -> None:
    """
    校验样本量不超过上限。

    说明：
    - 宿主侧历史通常限制在 10 条以内；作为库对外暴露时，调用方未必做了限制，
      这里对超规模输入直接报错，而不是截断后继续计算。
    """
    n = len(sample_set)
    if n > max_samples:
        raise SampleCapacityError(
            f"样本量 {n} 超过允许上限 {max_samples}，请在调用前限制历史长度或调大 max_samples。"
        )


class SampleHistory:
    """
    有界的样本历史记录（调用方持有的可变容器）。

    行为：
    - record() 将新样本插入最前；超过 capacity 时删除最旧（末尾）样本；
    - snapshot() 生成不可变 SampleSet，之后的 record() 不影响已取得的快照。
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ValueError(f"capacity 必须为正整数，当前为: {capacity!r}")
        self._capacity = capacity
        self._items: List[Sample] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def latest(self) -> Optional[Sample]:
        return self._items[0] if self._items else None

    def record(self, value: float, timestamp: Optional[datetime] = None) -> Sample:
        sample = _to_sample((value, timestamp or datetime.now()), 0)
        self._items.insert(0, sample)
        if len(self._items) > self._capacity:
            self._items.pop()
        return sample

    def recent(self, limit: int) -> List[Sample]:
        """返回最新的 limit 条样本（展示用）。"""
        if limit < 0:
            raise ValueError(f"limit 不能为负数，当前为: {limit}")
        return list(self._items[:limit])

    def snapshot(self) -> SampleSet:
        return SampleSet(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
