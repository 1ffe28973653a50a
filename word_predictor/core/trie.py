# trie.py
# Prefix tree carrying word counts. Backs the prefix queries of FrequencyModel:
# one trie for all words of a document, one per first word for bigram continuations.

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

Word = str
Count = int


class TrieNode:
    """
    A single node in the Trie.
    children: char -> TrieNode
    count: occurrences of the word ending here (0 = not a word)
    """

    __slots__ = ("children", "count")

    def __init__(self) -> None:
        self.children: Dict[str, TrieNode] = {}
        self.count = 0


class Trie:
    """
    Stores already-normalized words with their counts.
    Keys are inserted lower-cased by the tokenizer; lookups lower-case the query.
    """

    __slots__ = ("_root", "_size")

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    @classmethod
    def from_counts(cls, counts: Dict[Word, Count]) -> "Trie":
        t = cls()
        for w, c in counts.items():
            t.insert(w, c)
        return t

    # insertion -----------------------------------------------------
    def insert(self, word: Word, count: Count = 1) -> None:
        if not word or count <= 0:
            return
        node = self._root
        for ch in word:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = TrieNode()
            node = nxt
        if node.count == 0:
            self._size += 1
        node.count += count

    # search/traversal ---------------------------------------------------------
    def _find(self, prefix: str):
        node = self._root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def count(self, word: Word) -> Count:
        node = self._find(word.lower()) if word else None
        return node.count if node is not None else 0

    def with_prefix(self, prefix: str) -> Dict[Word, Count]:
        """
        Every word that starts with `prefix` and is strictly longer than it.
        The prefix itself is never returned, a completion must add characters.
        """
        prefix = (prefix or "").lower()
        node = self._find(prefix)
        if node is None:
            return {}
        out: Dict[Word, Count] = {}
        for ch, child in node.children.items():
            for w, c in self._collect(child, prefix + ch):
                out[w] = c
        return out

    @staticmethod
    def _collect(node: TrieNode, prefix: str) -> Iterator[Tuple[Word, Count]]:
        """DFS over a subtree, iterative so long words cannot hit the recursion limit."""
        stack: List[Tuple[TrieNode, str]] = [(node, prefix)]
        while stack:
            n, p = stack.pop()
            if n.count:
                yield p, n.count
            for ch, child in n.children.items():
                stack.append((child, p + ch))

    # convenience -----------------------------------------------------
    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.count(word) > 0

    def items(self) -> Iterator[Tuple[Word, Count]]:
        return self._collect(self._root, "")
