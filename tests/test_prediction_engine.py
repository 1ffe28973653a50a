# tests/test_prediction_engine.py
# unit tests for merged unigram/bigram ranking

import pytest

from word_predictor.core.frequency_model import FrequencyModel
from word_predictor.core.prediction_engine import PredictionEngine, Source
from word_predictor.core.protocols import FrequencySource
from word_predictor.utils.config_manager import Config


class StubModel:
    """Frequencies no real text can produce: bigram count above unigram count."""

    def __init__(self, words, bigrams):
        self.words = words
        self.bigrams = bigrams
        self.bigram_calls = 0

    def words_with_prefix(self, doc_id, prefix):
        return {w: f for w, f in self.words.items() if w.startswith(prefix) and len(w) > len(prefix)}

    def bigrams_with_prefix(self, doc_id, first_word, prefix):
        self.bigram_calls += 1
        following = self.bigrams.get(first_word, {})
        return {w: f for w, f in following.items() if w.startswith(prefix) and len(w) > len(prefix)}


@pytest.fixture
def cfg():
    return Config()


@pytest.fixture
def engine(cfg):
    model = FrequencyModel()
    # quick:2 brown:2 bear:3, (quick,brown):2 (brown,bear):1
    model.update("doc", "quick brown quick brown bear bear bear", 1)
    return PredictionEngine(model, cfg)


def test_stub_satisfies_protocol():
    assert isinstance(StubModel({}, {}), FrequencySource)


def test_weighted_bigram_beats_unigram():
    stub = StubModel({"brown": 1}, {"quick": {"brown": 2}})
    out = PredictionEngine(stub, Config()).candidates("b", "doc", "quick")
    assert out[0].word == "brown"
    assert out[0].source is Source.BIGRAM
    assert out[0].score == 4.0
    assert out[0].frequency == 2


def test_merge_keeps_one_candidate_per_word(engine):
    out = engine.candidates("b", "doc", "quick")
    assert [(c.word, c.source, c.score) for c in out] == [
        ("brown", Source.BIGRAM, 4.0),
        ("bear", Source.UNIGRAM, 3.0),
    ]


def test_unigram_takes_over_when_strictly_greater(engine, cfg):
    cfg.set("bigram_weight", 1)
    out = engine.candidates("b", "doc", "brown")
    bear = next(c for c in out if c.word == "bear")
    assert bear.source is Source.UNIGRAM
    assert bear.score == 3.0
    assert bear.frequency == 3


def test_tie_stays_with_bigram(engine, cfg):
    cfg.set("bigram_weight", 1)
    out = engine.candidates("br", "doc", "quick")
    assert out[0].word == "brown"
    assert out[0].source is Source.BIGRAM
    assert out[0].score == 2.0


def test_equal_scores_sort_lexicographically():
    model = FrequencyModel()
    model.update("doc", "apple alpha avocado", 1)
    out = PredictionEngine(model, Config()).candidates("a", "doc")
    assert [c.word for c in out] == ["alpha", "apple", "avocado"]


def test_limit_and_max_candidates():
    model = FrequencyModel()
    model.update("doc", "aaaa aaab aaac aaad aaae aaaf aaag", 1)
    cfg = Config()
    engine = PredictionEngine(model, cfg)
    assert len(engine.candidates("a", "doc")) == 5
    assert len(engine.candidates("a", "doc", limit=2)) == 2
    assert engine.candidates("a", "doc", limit=0) == []
    cfg.set("max_candidates", 7)
    assert len(engine.candidates("a", "doc")) == 7


def test_min_prefix_length_read_each_call(engine, cfg):
    assert engine.candidates("b", "doc")
    cfg.set("min_prefix_length", 3)
    assert engine.candidates("br", "doc") == []
    assert [c.word for c in engine.candidates("bro", "doc")] == ["brown"]


def test_empty_prefix_and_unknown_document(engine):
    assert engine.candidates("", "doc", "quick") == []
    assert engine.candidates("b", "missing", "quick") == []
    assert engine.predict("b", "missing") == ""


def test_no_previous_word_skips_bigrams():
    stub = StubModel({"brown": 1}, {"quick": {"brown": 2}})
    out = PredictionEngine(stub, Config()).candidates("b", "doc", "")
    assert stub.bigram_calls == 0
    assert out[0].source is Source.UNIGRAM


def test_prefix_and_previous_word_case_insensitive(engine):
    out = engine.candidates("BR", "doc", "QUICK")
    assert out[0].word == "brown"
    assert out[0].source is Source.BIGRAM


def test_exact_word_is_not_predicted(engine):
    assert engine.candidates("brown", "doc") == []


def test_predict(engine):
    assert engine.predict("b", "doc", "quick") == "brown"
    assert engine.predict("b", "doc") == "bear"


def test_per_source_candidates(engine):
    uni = engine.unigram_candidates("b", "doc")
    assert [(c.word, c.frequency) for c in uni] == [("bear", 3), ("brown", 2)]
    bi = engine.bigram_candidates("brown", "b", "doc")
    assert [(c.word, c.frequency, c.score) for c in bi] == [("bear", 1, 2.0)]
    assert engine.bigram_candidates("", "b", "doc") == []


def test_explain(engine):
    info = engine.explain("b", "doc", "quick")
    assert info.prediction == "brown"
    assert info.completion == "rown"
    assert info.source == "bigram"
    assert info.unigram_prediction == "bear"
    assert info.bigram_prediction == "brown"

    none = engine.explain("zz", "doc")
    assert none.prediction == "" and none.source == "none"


def test_candidate_to_dict(engine):
    top = engine.candidates("b", "doc", "quick")[0]
    assert top.to_dict() == {"word": "brown", "frequency": 2, "source": "bigram"}
