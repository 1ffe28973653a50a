import logging

import pytest

from word_predictor.utils.logger_utils import Log, configure_logging
from word_predictor.utils.metrics_tracker import Metrics


def test_metrics_running_values():
    m = Metrics()
    m.record("update_ms", 2.0)
    m.record("update_ms", 4.0)
    assert m.count("update_ms") == 2
    assert m.avg("update_ms") == 3.0
    assert m.last("update_ms") == 4.0
    assert m.avg("missing") == 0.0
    assert m.summary() == {"update_ms": {"count": 2, "total": 6.0, "avg": 3.0, "last": 4.0}}
    m.reset()
    assert m.summary() == {}


def test_metrics_persist_only_with_path(tmp_path):
    p = tmp_path / "metrics.json"
    m = Metrics(str(p))
    m.record("predict_ms", 1.5)
    m.save()
    again = Metrics(str(p))
    assert again.count("predict_ms") == 1
    assert again.avg("predict_ms") == 1.5

    Metrics().save()  # no path, nothing written
    assert [f.name for f in tmp_path.iterdir()] == ["metrics.json"]


@pytest.mark.parametrize("content", ["{not json", '{"predict_ms": {"sum": 1.0}}', "[1, 2]"])
def test_corrupt_metrics_file_starts_empty(tmp_path, caplog, content):
    caplog.set_level(logging.WARNING, logger="word_predictor")
    p = tmp_path / "metrics.json"
    p.write_text(content)
    m = Metrics(str(p))
    assert m.summary() == {}
    assert any("unreadable" in r.getMessage() for r in caplog.records)
    m.record("predict_ms", 2.0)
    assert m.count("predict_ms") == 1


def test_time_block_logs_metric(caplog):
    caplog.set_level(logging.DEBUG, logger="word_predictor")
    with Log.time_block("rebuild") as t:
        sum(range(100))
    assert t.elapsed_ms >= 0.0
    assert any("rebuild done" in r.getMessage() for r in caplog.records)


def test_configure_logging_file(tmp_path):
    p = tmp_path / "wp.log"
    configure_logging(logging.INFO, path=str(p), rich_console=False)
    try:
        Log.write("model ready")
        Log.write("hidden", level=logging.DEBUG)
    finally:
        configure_logging(logging.WARNING, rich_console=False)
    text = p.read_text(encoding="utf-8")
    assert "model ready" in text
    assert "hidden" not in text
