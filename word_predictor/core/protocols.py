# word_predictor/core/protocols.py
"""
Typed shapes and the small interface the prediction engine depends on.

PredictionEngine only needs prefix queries from its model, so tests and
alternative stores can stand in for FrequencyModel by satisfying
FrequencySource.
"""

from __future__ import annotations

from typing import Dict, Hashable, Protocol, runtime_checkable

from typing_extensions import TypedDict


DocumentId = Hashable


class ModelStats(TypedDict):
    """Shape returned by FrequencyModel.stats()."""
    unique_words: int
    unique_bigrams: int
    version: int


class CandidateDict(TypedDict):
    """Plain-data form of a Candidate, as handed to editor integrations."""
    word: str
    frequency: int
    source: str


@runtime_checkable
class FrequencySource(Protocol):
    """Prefix lookups used by PredictionEngine."""

    def words_with_prefix(self, doc_id: DocumentId, prefix: str) -> Dict[str, int]:
        ...

    def bigrams_with_prefix(self, doc_id: DocumentId, first_word: str, prefix: str) -> Dict[str, int]:
        ...
