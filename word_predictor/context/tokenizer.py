# word_predictor/context/tokenizer.py
# word extraction used for both unigram and bigram counting

from __future__ import annotations

from itertools import groupby
from typing import Iterable, List, Union

TOKEN_MIN_LEN = 3

Text = Union[str, Iterable[str]]


def join_lines(text: Text) -> str:
    """Join buffer lines with a single space so the buffer reads as one stream."""
    if text is None:
        return ""
    if isinstance(text, str):
        return text
    return " ".join(text)


def extract(text: Text) -> List[str]:
    """
    Return the lower-cased words of `text` in source order.
    A word is a maximal run of at least TOKEN_MIN_LEN alphabetic characters,
    shorter runs are dropped entirely.
    """
    s = join_lines(text)
    if not s:
        return []
    # split after lowering: some capitals lower to a letter plus a combining mark
    runs = ("".join(g) for letters, g in groupby(s.lower(), key=str.isalpha) if letters)
    return [w for w in runs if len(w) >= TOKEN_MIN_LEN]
