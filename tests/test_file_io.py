# tests/test_file_io.py
"""DataLoader 与命令行入口测试。"""

from datetime import datetime

import pandas as pd
import pytest

from core.utils import DataLoader, frame_to_sample_set
from scripts.sample_report import run_sample_report


@pytest.fixture
def history_csv(tmp_path):
    path = tmp_path / "history.csv"
    path.write_text(
        "value,timestamp\n"
        "42,2025-05-11 10:00:05\n"
        "7,2025-05-11 10:00:04\n"
        "88,2025-05-11 10:00:03\n"
        "7,2025-05-11 10:00:02\n"
        "15,2025-05-11 10:00:01\n",
        encoding="utf-8",
    )
    return path


class TestDataLoader:
    def test_read_samples_keeps_order(self, history_csv):
        samples = DataLoader().read_samples(history_csv)
        assert samples.values == (42.0, 7.0, 88.0, 7.0, 15.0)
        assert samples.samples[0].timestamp == datetime(2025, 5, 11, 10, 0, 5)

    def test_gbk_fallback(self, tmp_path):
        path = tmp_path / "gbk.csv"
        path.write_bytes("数值\n1\n2\n".encode("gbk"))
        samples = DataLoader().read_samples(path, value_col="数值", timestamp_col=None)
        assert samples.values == (1.0, 2.0)
        assert samples.samples[0].timestamp == datetime.min

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="文件不存在"):
            DataLoader().read_data(tmp_path / "nope.csv")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError, match="不支持的文件格式"):
            DataLoader().read_data(path)


class TestFrameToSampleSet:
    def test_missing_value_column(self):
        with pytest.raises(ValueError, match="缺少样本数值列"):
            frame_to_sample_set(pd.DataFrame({"x": [1]}))

    def test_nan_values_rejected(self):
        with pytest.raises(ValueError, match="存在空值"):
            frame_to_sample_set(pd.DataFrame({"value": [1.0, None]}))

    def test_without_timestamp_column(self):
        samples = frame_to_sample_set(pd.DataFrame({"value": [3, 4]}))
        assert samples.values == (3.0, 4.0)


class TestRunSampleReport:
    def test_end_to_end(self, history_csv, tmp_path):
        cfg = tmp_path / "cfg.yaml"
        cfg.write_text(
            "report:\n  decimal_precision: 1\n  bootstrap:\n    seed: 11\n    iterations: 100\n",
            encoding="utf-8",
        )
        outputs = run_sample_report(str(history_csv), config_path=str(cfg))
        assert outputs["report"]["count"] == 5.0
        assert outputs["report"]["mode"] == 7.0
        assert outputs["report"]["median"] == 15.0
        assert outputs["histogram_frame"]["count"].sum() == 5
        assert outputs["fits_frame"]["model"].tolist() == ["normal", "exponential", "poisson"]
        assert "mean" in outputs["text"]

    def test_reproducible_with_seed(self, history_csv, tmp_path):
        cfg = tmp_path / "cfg.yaml"
        cfg.write_text("report:\n  bootstrap:\n    seed: 3\n", encoding="utf-8")
        first = run_sample_report(str(history_csv), config_path=str(cfg))["report"]
        second = run_sample_report(str(history_csv), config_path=str(cfg))["report"]
        assert first == second
