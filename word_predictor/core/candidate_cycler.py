# candidate_cycler.py
# Holds the last ranked candidate list and a cursor over it.
# IDLE: nothing to show. ACTIVE: a non-empty session with a valid cursor.

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from word_predictor.core.prediction_engine import Candidate, PredictionEngine
from word_predictor.core.protocols import DocumentId

logger = logging.getLogger(__name__)


class CyclerState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass
class PredictionSession:
    document_id: DocumentId
    candidates: Tuple[Candidate, ...]
    cursor: int = 0
    active_prefix_length: int = 0

    @property
    def current(self) -> Candidate:
        return self.candidates[self.cursor]


class CandidateCycler:
    """
    query() replaces the session wholesale (cursor back to 0) or drops to IDLE
    when the engine has nothing. next()/previous() wrap around and are no-ops
    while IDLE.
    """

    def __init__(self, engine: PredictionEngine):
        self.engine = engine
        self._session: Optional[PredictionSession] = None

    @property
    def session(self) -> Optional[PredictionSession]:
        return self._session

    @property
    def state(self) -> CyclerState:
        return CyclerState.ACTIVE if self._session is not None else CyclerState.IDLE

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def query(self, prefix: str, doc_id: DocumentId, previous_word: str = "") -> Optional[PredictionSession]:
        found = self.engine.candidates(prefix, doc_id, previous_word)
        if not found:
            self._session = None
            return None
        self._session = PredictionSession(
            document_id=doc_id,
            candidates=tuple(found),
            cursor=0,
            active_prefix_length=len(prefix),
        )
        return self._session

    def _step(self, delta: int) -> Optional[Candidate]:
        s = self._session
        if s is None:
            return None
        s.cursor = (s.cursor + delta) % len(s.candidates)
        return s.current

    def next(self) -> Optional[Candidate]:
        return self._step(1)

    def previous(self) -> Optional[Candidate]:
        return self._step(-1)

    def current(self) -> Optional[Candidate]:
        return self._session.current if self._session is not None else None

    def current_completion(self) -> str:
        """Text to show after the cursor: the current word minus the typed prefix."""
        s = self._session
        if s is None:
            return ""
        return s.current.word[s.active_prefix_length:]

    def reset(self) -> None:
        self._session = None

    def invalidate(self, doc_id: DocumentId) -> None:
        """Reset if the active session was built from `doc_id`."""
        if self._session is not None and self._session.document_id == doc_id:
            logger.debug("session for doc=%r invalidated", doc_id)
            self._session = None
