# autocompleter.py
"""
WordPredictor - application facade.

Purpose:
 - Own the FrequencyModel, PredictionEngine and CandidateCycler
 - Small public API for editor integrations, the CLI, the TUI and tests:
     update(doc, text, marker), candidates(doc, prefix, prev), predict(...),
     cycle_query/next/previous/current/reset, clear, forget_document, stats
 - Time updates and queries into Metrics

Editor glue (debouncing, skipping huge buffers, rendering) stays outside:
call update() whenever the buffer changed, then query.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from word_predictor.context.cursor import cursor_context
from word_predictor.context.tokenizer import Text
from word_predictor.core.candidate_cycler import CandidateCycler, PredictionSession
from word_predictor.core.frequency_model import FrequencyModel, check_document_id
from word_predictor.core.prediction_engine import Candidate, PredictionEngine, PredictionInfo
from word_predictor.core.protocols import CandidateDict, DocumentId, ModelStats
from word_predictor.utils.config_manager import Config
from word_predictor.utils.metrics_tracker import Metrics

logger = logging.getLogger(__name__)


class WordPredictor:
    """Application facade exposing the prediction API.
    Public API:
      - update(document_id, text, change_marker=None) -> bool
      - word_frequency / bigram_frequency
      - candidates(document_id, prefix, previous_word="", limit=None) -> List[dict]
      - predict(document_id, prefix, previous_word="") -> str
      - explain(document_id, prefix, previous_word="") -> PredictionInfo
      - clear / forget_document / prune_documents
      - stats(document_id)
      - cycle_query / cycle_next / cycle_previous / cycle_current / cycle_reset
      - suggest_at(document_id, line, col)
    """

    def __init__(self, config: Optional[Config] = None, metrics: Optional[Metrics] = None):
        self.cfg = config or Config()
        self.metrics = metrics or Metrics()
        self.model = FrequencyModel()
        self.engine = PredictionEngine(self.model, self.cfg)
        self.cycler = CandidateCycler(self.engine)

    # Model ---------------------------------------------------------
    def update(self, document_id: DocumentId, text: Text, change_marker: Optional[int] = None) -> bool:
        t0 = time.perf_counter()
        rebuilt = self.model.update(document_id, text, change_marker)
        if rebuilt:
            self.metrics.record("update_ms", (time.perf_counter() - t0) * 1000.0)
        return rebuilt

    def word_frequency(self, document_id: DocumentId, word: str) -> int:
        return self.model.word_frequency(document_id, word)

    def bigram_frequency(self, document_id: DocumentId, first: str, second: str) -> int:
        return self.model.bigram_frequency(document_id, first, second)

    def stats(self, document_id: DocumentId) -> ModelStats:
        return self.model.stats(document_id)

    def clear(self, document_id: DocumentId) -> None:
        self.model.clear(document_id)
        self.cycler.invalidate(document_id)

    def forget_document(self, document_id: DocumentId) -> None:
        self.model.forget_document(document_id)
        self.cycler.invalidate(document_id)

    def prune_documents(self, is_valid: Callable[[DocumentId], bool]) -> List[DocumentId]:
        gone = self.model.prune(is_valid)
        for d in gone:
            self.cycler.invalidate(d)
        return gone

    # Prediction ---------------------------------------------------------
    def _ranked(self, document_id: DocumentId, prefix: str, previous_word: str,
                limit: Optional[int]) -> List[Candidate]:
        check_document_id(document_id)
        t0 = time.perf_counter()
        out = self.engine.candidates(prefix, document_id, previous_word, limit)
        self.metrics.record("predict_ms", (time.perf_counter() - t0) * 1000.0)
        return out

    def candidates(self, document_id: DocumentId, prefix: str, previous_word: str = "",
                   limit: Optional[int] = None) -> List[CandidateDict]:
        return [c.to_dict() for c in self._ranked(document_id, prefix, previous_word, limit)]

    def predict(self, document_id: DocumentId, prefix: str, previous_word: str = "") -> str:
        best = self._ranked(document_id, prefix, previous_word, 1)
        return best[0].word if best else ""

    def explain(self, document_id: DocumentId, prefix: str, previous_word: str = "") -> PredictionInfo:
        check_document_id(document_id)
        return self.engine.explain(prefix, document_id, previous_word)

    # Cycling ---------------------------------------------------------
    def cycle_query(self, document_id: DocumentId, prefix: str,
                    previous_word: str = "") -> Optional[PredictionSession]:
        check_document_id(document_id)
        t0 = time.perf_counter()
        session = self.cycler.query(prefix, document_id, previous_word)
        self.metrics.record("predict_ms", (time.perf_counter() - t0) * 1000.0)
        return session

    def cycle_next(self) -> Optional[Candidate]:
        return self.cycler.next()

    def cycle_previous(self) -> Optional[Candidate]:
        return self.cycler.previous()

    def cycle_current(self) -> Optional[Candidate]:
        return self.cycler.current()

    def cycle_reset(self) -> None:
        self.cycler.reset()

    def suggest_at(self, document_id: DocumentId, line: str, col: int) -> Optional[PredictionSession]:
        """Query with the prefix and previous word found at a cursor position."""
        prefix, prev = cursor_context(line, col)
        if not prefix:
            self.cycler.reset()
            return None
        return self.cycle_query(document_id, prefix, prev)

    # Diagnostics ---------------------------------------------------------
    def timings(self) -> Dict[str, Dict[str, Any]]:
        return self.metrics.summary()
