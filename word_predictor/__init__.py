"""
word_predictor

Next-word prediction from the text of an editing session: per-document
unigram/bigram counts, merged prefix ranking and candidate cycling.
"""

from .autocompleter import WordPredictor
from .core import (
    Candidate,
    CandidateCycler,
    CyclerState,
    FrequencyModel,
    InvalidDocumentId,
    PredictionEngine,
    PredictionInfo,
    PredictionSession,
    Source,
)
from .context import extract
from .utils import Config, ConfigError

__all__ = [
    "WordPredictor",
    "Candidate",
    "CandidateCycler",
    "CyclerState",
    "FrequencyModel",
    "InvalidDocumentId",
    "PredictionEngine",
    "PredictionInfo",
    "PredictionSession",
    "Source",
    "extract",
    "Config",
    "ConfigError",
]

__version__ = "0.1.0"
