import pytest

from word_predictor.core.candidate_cycler import CandidateCycler, CyclerState
from word_predictor.core.prediction_engine import Candidate, Source


class StubEngine:
    def __init__(self, results):
        self.results = results
        self.calls = []

    def candidates(self, prefix, doc_id, previous_word=""):
        self.calls.append((prefix, doc_id, previous_word))
        return list(self.results)


THREE = [
    Candidate("brown", 2, Source.BIGRAM, 4.0),
    Candidate("bear", 3, Source.UNIGRAM, 3.0),
    Candidate("bee", 1, Source.UNIGRAM, 1.0),
]


@pytest.fixture
def cycler():
    return CandidateCycler(StubEngine(THREE))


def test_starts_idle(cycler):
    assert cycler.state is CyclerState.IDLE
    assert cycler.current() is None
    assert cycler.next() is None
    assert cycler.previous() is None
    assert cycler.current_completion() == ""


def test_query_activates_at_cursor_zero(cycler):
    session = cycler.query("b", "doc", "quick")
    assert cycler.state is CyclerState.ACTIVE
    assert session.cursor == 0
    assert session.active_prefix_length == 1
    assert cycler.current().word == "brown"
    assert cycler.engine.calls == [("b", "doc", "quick")]


def test_next_wraps_to_start(cycler):
    cycler.query("b", "doc")
    cycler.next()
    assert cycler.next().word == "bee"
    assert cycler.session.cursor == 2
    assert cycler.next().word == "brown"
    assert cycler.session.cursor == 0


def test_previous_wraps_to_end(cycler):
    cycler.query("b", "doc")
    assert cycler.previous().word == "bee"
    assert cycler.session.cursor == 2


def test_new_query_resets_cursor(cycler):
    cycler.query("b", "doc")
    cycler.next()
    cycler.query("be", "doc")
    assert cycler.session.cursor == 0
    assert cycler.session.active_prefix_length == 2


def test_empty_result_goes_idle():
    engine = StubEngine(THREE)
    cycler = CandidateCycler(engine)
    cycler.query("b", "doc")
    engine.results = []
    assert cycler.query("zz", "doc") is None
    assert cycler.state is CyclerState.IDLE
    assert cycler.current() is None


def test_current_completion(cycler):
    cycler.query("bro", "doc")
    assert cycler.current_completion() == "wn"
    cycler.query("b", "doc")
    cycler.next()
    assert cycler.current_completion() == "ear"


def test_reset_and_invalidate(cycler):
    cycler.query("b", "doc")
    cycler.invalidate("other")
    assert cycler.is_active
    cycler.invalidate("doc")
    assert not cycler.is_active

    cycler.query("b", "doc")
    cycler.reset()
    assert cycler.state is CyclerState.IDLE
