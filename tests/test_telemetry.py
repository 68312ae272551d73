"""
Tests for detection metrics, the JSON Lines metrics logger and timing helpers.
"""

import json
import time

import pytest

from edgelink.telemetry import DetectionMetrics, MetricsLogger
from edgelink.utils.timing import elapsed_ms, record_latency


@pytest.fixture
def metrics():
    return DetectionMetrics(
        shape=(10, 20, 1),
        blur_latency_ms=1.234,
        total_latency_ms=5.678,
        strong_pixels=12,
        edge_pixels=20,
    )


class TestDetectionMetrics:

    def test_derived_values(self, metrics):
        assert metrics.promoted_pixels == 8
        assert metrics.edge_density == pytest.approx(0.1)

    def test_empty_shape_density(self):
        assert DetectionMetrics().edge_density == 0.0

    def test_to_dict(self, metrics):
        data = metrics.to_dict()

        assert data["shape"] == [10, 20, 1]
        assert data["blur_latency_ms"] == 1.23
        assert data["promoted_pixels"] == 8

    def test_to_json_is_compact(self, metrics):
        text = metrics.to_json()

        assert " " not in text
        assert json.loads(text)["edge_pixels"] == 20


class TestMetricsLogger:

    def test_appends_one_line_per_record(self, tmp_path, metrics):
        path = tmp_path / "logs" / "metrics.jsonl"

        with MetricsLogger(path) as metrics_log:
            metrics_log.log(metrics, source="a.png")
            metrics_log.log(metrics, source="b.png")
            assert metrics_log.records_written == 2

        records = [json.loads(line) for line in path.read_text().splitlines()]
        assert [r["source"] for r in records] == ["a.png", "b.png"]
        assert records[0]["edge_pixels"] == 20
        assert "timestamp" in records[0]

    def test_reopening_appends(self, tmp_path, metrics):
        path = tmp_path / "metrics.jsonl"

        with MetricsLogger(path) as metrics_log:
            metrics_log.log(metrics)
        with MetricsLogger(path) as metrics_log:
            metrics_log.log(metrics)

        assert len(path.read_text().splitlines()) == 2

    def test_rotates_when_file_is_full(self, tmp_path, metrics):
        path = tmp_path / "metrics.jsonl"

        with MetricsLogger(path, max_file_size=1) as metrics_log:
            metrics_log.log(metrics, source="first")
            metrics_log.log(metrics, source="second")

        rotated = tmp_path / "metrics.jsonl.1"
        assert rotated.exists()
        assert json.loads(rotated.read_text())["source"] == "first"
        assert json.loads(path.read_text())["source"] == "second"


class TestRecordLatency:

    def test_writes_elapsed_into_field(self):
        record = DetectionMetrics()

        with record_latency(record, "blur_latency_ms"):
            time.sleep(0.01)

        assert record.blur_latency_ms >= 5.0
        assert record.gradient_latency_ms == 0.0

    def test_records_when_stage_raises(self):
        record = DetectionMetrics()

        with pytest.raises(RuntimeError):
            with record_latency(record, "linking_latency_ms"):
                time.sleep(0.005)
                raise RuntimeError("stage failed")

        assert record.linking_latency_ms > 0.0

    def test_unknown_field_rejected(self):
        with pytest.raises(AttributeError):
            with record_latency(DetectionMetrics(), "missing_latency_ms"):
                pass

    def test_elapsed_ms_is_non_negative(self):
        assert elapsed_ms(time.monotonic()) >= 0.0
