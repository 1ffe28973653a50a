import importlib.util
import json
from pathlib import Path

import pytest

_path = Path(__file__).resolve().parents[1] / "tools" / "profile_predict.py"
_spec = importlib.util.spec_from_file_location("profile_predict", _path)
profile_predict = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(profile_predict)


def test_summarize_empty_run():
    assert profile_predict.summarize([])["count"] == 0


def test_summarize_values():
    s = profile_predict.summarize([3.0, 1.0, 2.0])
    assert s["count"] == 3
    assert s["median_ms"] == 2.0
    assert s["max_ms"] == 3.0


@pytest.mark.parametrize("flag", ["--updates", "--iters", "--repeat"])
def test_zero_counts_rejected(flag):
    with pytest.raises(SystemExit):
        profile_predict.main([flag, "0"])


def test_small_run_writes_summary(tmp_path, capsys):
    out = tmp_path / "profile.json"
    profile_predict.main(["--repeat", "2", "--updates", "1", "--iters", "3", "--out", str(out)])
    data = json.loads(out.read_text())
    assert data["update"]["count"] == 1
    assert data["candidates"]["count"] == 3
