# core.utils: 通用工具（文件读写、配置加载等）
# 禁止引用 modules 下的任何内容

from core.utils.config_loader import deep_merge, load_yaml, load_yaml_with_defaults
from core.utils.file_io import DataLoader, frame_to_sample_set

__all__ = ["DataLoader", "deep_merge", "frame_to_sample_set", "load_yaml", "load_yaml_with_defaults"]
