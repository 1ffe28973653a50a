# word_predictor/core/prediction_engine.py
"""
PredictionEngine - ranks completions for a typed prefix.

Signals:
 - unigram: every known word extending the prefix, scored by its count
 - bigram: words seen right after `previous_word` extending the prefix,
   scored by count * bigram_weight

Merging keeps one candidate per word. Bigram entries go in first; a unigram
entry only takes over when its raw count is strictly greater than the
bigram's weighted score, so ties stay with the bigram. The unigram side of
that comparison is NOT weighted.

Ordering is deterministic: score descending, then word ascending.
Settings (min_prefix_length, bigram_weight, max_candidates) are read from
Config on every call.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from word_predictor.context.cursor import completion_suffix
from word_predictor.core.protocols import CandidateDict, DocumentId, FrequencySource
from word_predictor.utils.config_manager import Config

logger = logging.getLogger(__name__)


class Source(str, enum.Enum):
    UNIGRAM = "unigram"
    BIGRAM = "bigram"


@dataclass(frozen=True)
class Candidate:
    word: str
    frequency: int
    source: Source
    score: float

    def to_dict(self) -> CandidateDict:
        return {"word": self.word, "frequency": self.frequency, "source": self.source.value}


@dataclass(frozen=True)
class PredictionInfo:
    """Breakdown of a prediction, for debugging and the CLI `explain` output."""
    prefix: str
    previous_word: str
    unigram_prediction: str
    bigram_prediction: str
    prediction: str
    completion: str
    source: str  # "bigram", "unigram" or "none"


def _ranked(cands: List[Candidate]) -> List[Candidate]:
    return sorted(cands, key=lambda c: (-c.score, c.word))


class PredictionEngine:
    """
    Public API:
      - candidates(prefix, doc_id, previous_word="", limit=None)
      - predict(prefix, doc_id, previous_word="")
      - unigram_candidates(prefix, doc_id, limit=None)
      - bigram_candidates(previous_word, prefix, doc_id, limit=None)
      - explain(prefix, doc_id, previous_word="")
    """

    def __init__(self, model: FrequencySource, config: Optional[Config] = None):
        self.model = model
        self.cfg = config or Config()

    # -------------------------
    # Helpers
    # -------------------------
    def _limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return int(self.cfg.get("max_candidates"))
        return int(limit)

    def _prefix_ok(self, prefix: str) -> bool:
        return bool(prefix) and len(prefix) >= int(self.cfg.get("min_prefix_length"))

    # -------------------------
    # Per-source candidates
    # -------------------------
    def unigram_candidates(self, prefix: str, doc_id: DocumentId, limit: Optional[int] = None) -> List[Candidate]:
        n = self._limit(limit)
        if n <= 0 or not self._prefix_ok(prefix):
            return []
        matches = self.model.words_with_prefix(doc_id, prefix)
        cands = [Candidate(w, f, Source.UNIGRAM, float(f)) for w, f in matches.items()]
        return _ranked(cands)[:n]

    def bigram_candidates(self, previous_word: str, prefix: str, doc_id: DocumentId,
                          limit: Optional[int] = None) -> List[Candidate]:
        """Bigram continuations ranked by raw count (score carries the weight)."""
        n = self._limit(limit)
        if n <= 0 or not previous_word or not self._prefix_ok(prefix):
            return []
        weight = float(self.cfg.get("bigram_weight"))
        matches = self.model.bigrams_with_prefix(doc_id, previous_word, prefix)
        cands = [Candidate(w, f, Source.BIGRAM, f * weight) for w, f in matches.items()]
        return sorted(cands, key=lambda c: (-c.frequency, c.word))[:n]

    # -------------------------
    # Merged ranking (hot-path)
    # -------------------------
    def candidates(self, prefix: str, doc_id: DocumentId, previous_word: str = "",
                   limit: Optional[int] = None) -> List[Candidate]:
        n = self._limit(limit)
        if n <= 0 or not self._prefix_ok(prefix):
            return []

        merged: Dict[str, Candidate] = {}

        if previous_word:
            weight = float(self.cfg.get("bigram_weight"))
            for w, f in self.model.bigrams_with_prefix(doc_id, previous_word, prefix).items():
                merged[w] = Candidate(w, f, Source.BIGRAM, f * weight)

        for w, f in self.model.words_with_prefix(doc_id, prefix).items():
            have = merged.get(w)
            if have is None or f > have.score:
                merged[w] = Candidate(w, f, Source.UNIGRAM, float(f))

        out = _ranked(list(merged.values()))[:n]
        logger.debug("candidates prefix=%r prev=%r doc=%r -> %d", prefix, previous_word, doc_id, len(out))
        return out

    def predict(self, prefix: str, doc_id: DocumentId, previous_word: str = "") -> str:
        best = self.candidates(prefix, doc_id, previous_word, limit=1)
        return best[0].word if best else ""

    # -------------------------
    # Explainability
    # -------------------------
    def explain(self, prefix: str, doc_id: DocumentId, previous_word: str = "") -> PredictionInfo:
        """Which model produced the prediction, next to each model's own best guess."""
        uni = self.unigram_candidates(prefix, doc_id, limit=1)
        bi = self.bigram_candidates(previous_word, prefix, doc_id, limit=1)
        best = self.candidates(prefix, doc_id, previous_word, limit=1)

        prediction = best[0].word if best else ""
        return PredictionInfo(
            prefix=prefix or "",
            previous_word=previous_word or "",
            unigram_prediction=uni[0].word if uni else "",
            bigram_prediction=bi[0].word if bi else "",
            prediction=prediction,
            completion=completion_suffix(prefix, prediction),
            source=best[0].source.value if best else "none",
        )
