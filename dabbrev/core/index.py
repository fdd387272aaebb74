"""Prefix index: a ternary search tree stored as an arena of nodes.

Each node holds one character. ``lesser``/``greater`` link siblings that
share the same parent path (a binary search tree per level) and ``child``
links to the level holding the next character. Links are indices into the
arena, so the structure has no cycles and no back-references.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass
class Node:
    """One character at one position of one or more stored tokens."""

    char: str
    is_terminal: bool = False
    lesser: int | None = None
    greater: int | None = None
    child: int | None = None


class PrefixIndex:
    """Append-only token store answering ordered prefix queries."""

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._root: int | None = None
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[str]:
        return iter(self.gather())

    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str) or not token:
            return False
        node = self._locate(token)
        return node is not None and self._nodes[node].is_terminal

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def _new_node(self, char: str) -> int:
        self._nodes.append(Node(char))
        return len(self._nodes) - 1

    def insert(self, token: str) -> None:
        """Store ``token``. Re-inserting a stored token changes nothing."""
        if not token:
            return
        if self._root is None:
            self._root = self._new_node(token[0])

        current = self._root
        pos = 0
        while True:
            node = self._nodes[current]
            char = token[pos]
            if char == node.char:
                pos += 1
                if pos == len(token):
                    if not node.is_terminal:
                        node.is_terminal = True
                        self._count += 1
                    return
                if node.child is None:
                    node.child = self._new_node(token[pos])
                current = node.child
            elif char < node.char:
                if node.lesser is None:
                    node.lesser = self._new_node(char)
                current = node.lesser
            else:
                if node.greater is None:
                    node.greater = self._new_node(char)
                current = node.greater

    def _locate(self, prefix: str) -> int | None:
        """Return the node holding the last character of ``prefix``."""
        current = self._root
        pos = 0
        while current is not None:
            node = self._nodes[current]
            char = prefix[pos]
            if char == node.char:
                pos += 1
                if pos == len(prefix):
                    return current
                current = node.child
            elif char < node.char:
                current = node.lesser
            else:
                current = node.greater
        return None

    def prefix_subtree(self, prefix: str) -> int | None:
        """Return the root of the level holding every continuation of ``prefix``.

        An empty prefix yields the root level. ``None`` means the prefix is
        absent or nothing continues past it.
        """
        if not prefix:
            return self._root
        node = self._locate(prefix)
        if node is None:
            return None
        return self._nodes[node].child

    def gather(self, prefix: str = "") -> list[str]:
        """Return every stored token starting with ``prefix``, sorted.

        Args:
            prefix: Leading text shared by all results. May be empty.

        Returns:
            Tokens in lexicographic order, each exactly once. ``prefix``
            itself is included when it was stored. An absent prefix gives an
            empty list.
        """
        words: list[str] = []
        if prefix:
            node = self._locate(prefix)
            if node is None:
                return words
            if self._nodes[node].is_terminal:
                words.append(prefix)
            start = self._nodes[node].child
        else:
            start = self._root
        if start is None:
            return words

        # In-order walk: lesser, self, child, greater. Entries are either a
        # node to expand or a finished word to emit, pushed in reverse.
        stack: list[tuple[int | None, str]] = [(start, prefix)]
        while stack:
            current, text = stack.pop()
            if current is None:
                words.append(text)
                continue
            node = self._nodes[current]
            word = text + node.char
            if node.greater is not None:
                stack.append((node.greater, text))
            if node.child is not None:
                stack.append((node.child, word))
            if node.is_terminal:
                stack.append((None, word))
            if node.lesser is not None:
                stack.append((node.lesser, text))
        return words
