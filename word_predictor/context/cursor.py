# word_predictor/context/cursor.py
# Reads the prefix being typed and the word before it from a line of text.
# Editors hand us a line and a 0-based cursor column, nothing else.

from __future__ import annotations

from typing import Tuple


def _is_letter(ch: str) -> bool:
    return ch.isalpha()


def _word_start(line: str, col: int) -> int:
    start = col
    while start > 0 and _is_letter(line[start - 1]):
        start -= 1
    return start


def _clamp(line: str, col: int) -> int:
    return max(0, min(int(col), len(line)))


def current_word(line: str, col: int) -> str:
    """Alphabetic run ending at the cursor, original case kept. '' if none."""
    if not line:
        return ""
    col = _clamp(line, col)
    return line[_word_start(line, col):col]


def previous_word(line: str, col: int) -> str:
    """
    The word before the one under the cursor, lower-cased.
    Only whitespace may separate the two words, so "end. Next" has no
    previous word for "Next".
    """
    if not line:
        return ""
    col = _clamp(line, col)
    pos = _word_start(line, col)

    while pos > 0 and line[pos - 1].isspace():
        pos -= 1

    end = pos
    start = _word_start(line, end)
    if start < end:
        return line[start:end].lower()
    return ""


def cursor_context(line: str, col: int) -> Tuple[str, str]:
    """(prefix, previous_word) for a cursor position."""
    return current_word(line, col), previous_word(line, col)


def completion_suffix(prefix: str, word: str) -> str:
    """Characters the prediction adds after the typed prefix."""
    if not word or word.lower() == (prefix or "").lower():
        return ""
    return word[len(prefix or ""):]
