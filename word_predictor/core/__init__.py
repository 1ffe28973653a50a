"""
word_predictor.core

The prediction core:
 - per-document unigram/bigram counts with prefix indexes (FrequencyModel)
 - merged unigram/bigram ranking (PredictionEngine)
 - next/previous cycling over the last ranking (CandidateCycler)
"""

from .frequency_model import FrequencyModel, DocumentState, InvalidDocumentId
from .prediction_engine import PredictionEngine, Candidate, Source, PredictionInfo
from .candidate_cycler import CandidateCycler, CyclerState, PredictionSession
from .trie import Trie

__all__ = [
    "FrequencyModel",
    "DocumentState",
    "InvalidDocumentId",
    "PredictionEngine",
    "Candidate",
    "Source",
    "PredictionInfo",
    "CandidateCycler",
    "CyclerState",
    "PredictionSession",
    "Trie",
]
