"""
core.utils.config_loader: 配置文件读取（当前为 YAML）。

禁止引用 modules 下的任何内容。
"""

import copy
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    读取 YAML 文件并返回字典。

    输入：
    - path: 文件路径，可为 str 或 Path。

    输出：
    - 解析得到的字典；若文件为空或仅包含空文档，返回空字典。

    异常：
    - FileNotFoundError: 路径不存在；
    - yaml.YAMLError: 解析失败时由 PyYAML 抛出。
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML 文件不存在：{path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    递归合并两个字典，override 中的值优先；两边同为字典时逐层合并。

    不修改任何输入，返回新字典。
    """
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_yaml_with_defaults(
    path: Optional[Union[str, Path]],
    defaults: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    读取 YAML 并与默认配置合并。

    - path 为 None 时直接返回默认配置的副本；
    - 文件中缺失的字段回退到 defaults。
    """
    if path is None:
        return copy.deepcopy(dict(defaults))
    return deep_merge(defaults, load_yaml(path))
