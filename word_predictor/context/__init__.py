# word_predictor/context/__init__.py
# text helpers: word extraction and cursor context

from .tokenizer import extract, join_lines, TOKEN_MIN_LEN  # buffer text -> normalized tokens
from .cursor import (
    current_word,
    previous_word,
    cursor_context,
    completion_suffix,
)  # prefix/previous word under an editor cursor

__all__ = [
    "extract",
    "join_lines",
    "TOKEN_MIN_LEN",
    "current_word",
    "previous_word",
    "cursor_context",
    "completion_suffix",
]
