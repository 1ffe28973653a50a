# test_cli.py - command line smoke checks with a captured rich console
import io

import pytest
from rich.console import Console

from word_predictor.autocompleter import WordPredictor
from word_predictor.cli import CLI, main


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def sample(tmp_path):
    p = tmp_path / "sample.txt"
    p.write_text("the quick brown fox jumps over the lazy dog\nthe quick brown bear", encoding="utf8")
    return str(p)


def output(console):
    return console.file.getvalue()


def test_stats(sample, console):
    assert main(["stats", sample], console=console) == 0
    out = output(console)
    assert "Unique words" in out
    assert "the(3)" in out


def test_predict_uses_previous_word(sample, console):
    assert main(["predict", sample, "b", "--prev", "quick"], console=console) == 0
    assert output(console).strip() == "brown"


def test_candidates_limit(sample, console):
    assert main(["--max-candidates", "9", "candidates", sample, "b", "--limit", "1"], console=console) == 0
    out = output(console)
    assert "brown" in out
    assert "bear" not in out


def test_explain(sample, console):
    assert main(["explain", sample, "br", "--prev", "quick"], console=console) == 0
    out = output(console)
    assert "bigram" in out
    assert "own" in out


def test_missing_file(tmp_path, console):
    assert main(["stats", str(tmp_path / "nope.txt")], console=console) == 1
    assert "cannot read" in output(console)


def test_bad_config_value(sample, console):
    assert main(["--max-candidates", "-1", "stats", sample], console=console) == 2
    assert "config error" in output(console)


def run_repl(console, lines, text="the quick brown fox\nthe quick brown bear"):
    feed = iter(lines + ["/quit"])
    wp = WordPredictor()
    cli = CLI(wp, "doc", text, console=console, read_line=lambda: next(feed))
    cli.run()
    return cli


def test_repl_predict_cycle_accept(console):
    cli = run_repl(console, ["the quick b", "/next", "/accept"])
    out = output(console)
    assert "brown" in out
    assert "Accepted:" in out
    # cursor moved once from brown, so the accepted word is the second candidate
    assert cli.lines[-1] == "the quick bear"
    assert cli.predictor.stats("doc")["version"] == 2


def test_repl_learn_and_config(console):
    cli = run_repl(console, ["/learn zebra zebra zone", "/config max_candidates 1", "/config nope 1", "z", "/stats"])
    out = output(console)
    assert "Learnt:" in out
    assert cli.predictor.cfg.get("max_candidates") == 1
    assert "no such option" in out
    assert "zebra" in out


def test_repl_commands_without_session(console):
    run_repl(console, ["/next", "/accept", "xyzzy", "/bogus", "/timings", "/explain"])
    out = output(console)
    assert "nothing to cycle" in out
    assert "nothing to accept" in out
    assert "no predictions" in out
    assert "Unknown command" in out
