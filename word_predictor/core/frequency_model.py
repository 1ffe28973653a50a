# frequency_model.py
# Per-document unigram and bigram counts, rebuilt from the full buffer text.

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from word_predictor.context.tokenizer import Text, extract
from word_predictor.core.protocols import DocumentId, ModelStats
from word_predictor.core.trie import Trie
from word_predictor.utils.logger_utils import Log

logger = logging.getLogger(__name__)

Word = str
Bigram = Tuple[Word, Word]


class InvalidDocumentId(TypeError):
    """A caller passed None or an unhashable object as a document id."""


def check_document_id(doc_id: DocumentId) -> None:
    if doc_id is None:
        raise InvalidDocumentId("document id must not be None")
    try:
        hash(doc_id)
    except TypeError:
        raise InvalidDocumentId(f"document id must be hashable, got {type(doc_id).__name__}") from None


@dataclass
class DocumentState:
    """
    Everything known about one document.
    words/bigrams are the count tables, word_index and continuations are the
    prefix indexes built from them (continuations: first word -> trie of
    second words). marker is the caller's change marker for the build, None
    when the caller gave none. version is reported by stats.
    """
    version: int = 0
    marker: Optional[int] = None
    words: Counter = field(default_factory=Counter)
    bigrams: Counter = field(default_factory=Counter)
    word_index: Trie = field(default_factory=Trie)
    continuations: Dict[Word, Trie] = field(default_factory=dict)

    @classmethod
    def build(cls, tokens: List[Word], version: int, marker: Optional[int] = None) -> "DocumentState":
        words = Counter(tokens)
        bigrams = Counter(zip(tokens, tokens[1:]))

        following: Dict[Word, Counter] = defaultdict(Counter)
        for (a, b), c in bigrams.items():
            following[a][b] += c

        return cls(
            version=version,
            marker=marker,
            words=words,
            bigrams=bigrams,
            word_index=Trie.from_counts(words),
            continuations={a: Trie.from_counts(nxt) for a, nxt in following.items()},
        )


class FrequencyModel:
    """
    Owns one DocumentState per document id.

    update() is the only writer: it replaces a document's tables wholesale and
    is skipped when the caller's change marker matches the recorded one.
    Every read treats an unknown document as one with empty tables.
    """

    def __init__(self) -> None:
        self._docs: Dict[DocumentId, DocumentState] = {}

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def update(self, doc_id: DocumentId, text: Text, change_marker: Optional[int] = None) -> bool:
        """
        Rebuild the document from `text` (a string or an iterable of lines,
        joined with single spaces so bigrams span line breaks).
        Returns False when skipped because `change_marker` is unchanged.
        change_marker=None always rebuilds and bumps the version by one; the
        next marked update is then compared against no marker and rebuilds.
        """
        check_document_id(doc_id)
        old = self._docs.get(doc_id)

        if old is not None and change_marker is not None and old.marker == change_marker:
            logger.debug("skip rebuild doc=%r, marker %r unchanged", doc_id, change_marker)
            return False

        if change_marker is None:
            version = (old.version if old is not None else 0) + 1
        else:
            version = change_marker

        with Log.time_block(f"rebuild doc={doc_id!r}"):
            tokens = extract(text)
            self._docs[doc_id] = DocumentState.build(tokens, version, change_marker)

        logger.debug(
            "rebuilt doc=%r version=%r tokens=%d words=%d bigrams=%d",
            doc_id, version, len(tokens),
            len(self._docs[doc_id].words), len(self._docs[doc_id].bigrams),
        )
        return True

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _state(self, doc_id: DocumentId) -> Optional[DocumentState]:
        check_document_id(doc_id)
        return self._docs.get(doc_id)

    def word_frequency(self, doc_id: DocumentId, word: Word) -> int:
        state = self._state(doc_id)
        if state is None or not word:
            return 0
        return state.words.get(word.lower(), 0)

    def bigram_frequency(self, doc_id: DocumentId, first: Word, second: Word) -> int:
        state = self._state(doc_id)
        if state is None or not first or not second:
            return 0
        return state.bigrams.get((first.lower(), second.lower()), 0)

    def words_with_prefix(self, doc_id: DocumentId, prefix: str) -> Dict[Word, int]:
        state = self._state(doc_id)
        if state is None:
            return {}
        return state.word_index.with_prefix(prefix)

    def bigrams_with_prefix(self, doc_id: DocumentId, first_word: Word, prefix: str) -> Dict[Word, int]:
        state = self._state(doc_id)
        if state is None or not first_word:
            return {}
        following = state.continuations.get(first_word.lower())
        if following is None:
            return {}
        return following.with_prefix(prefix)

    def most_common(self, doc_id: DocumentId, n: int = 10) -> List[Tuple[Word, int]]:
        """Top words by count, ties in alphabetical order."""
        state = self._state(doc_id)
        if state is None:
            return []
        return sorted(state.words.items(), key=lambda kv: (-kv[1], kv[0]))[:n]

    def stats(self, doc_id: DocumentId) -> ModelStats:
        state = self._state(doc_id)
        if state is None:
            return {"unique_words": 0, "unique_bigrams": 0, "version": 0}
        return {
            "unique_words": len(state.words),
            "unique_bigrams": len(state.bigrams),
            "version": state.version,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def clear(self, doc_id: DocumentId) -> None:
        check_document_id(doc_id)
        if self._docs.pop(doc_id, None) is not None:
            logger.debug("cleared doc=%r", doc_id)

    def forget_document(self, doc_id: DocumentId) -> None:
        """Drop a closed document so long sessions do not accumulate state."""
        check_document_id(doc_id)
        if self._docs.pop(doc_id, None) is not None:
            logger.debug("forgot doc=%r", doc_id)

    def prune(self, is_valid: Callable[[DocumentId], bool]) -> List[DocumentId]:
        """Forget every document `is_valid` rejects. Returns the removed ids."""
        gone = [d for d in self._docs if not is_valid(d)]
        for d in gone:
            del self._docs[d]
        if gone:
            logger.debug("pruned %d documents", len(gone))
        return gone

    def documents(self) -> List[DocumentId]:
        return list(self._docs)

    def __contains__(self, doc_id: object) -> bool:
        try:
            return doc_id in self._docs
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._docs)
