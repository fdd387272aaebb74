"""Completion queries over a character source.

Every call scans the source into a fresh index; nothing is cached between
calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .exceptions import HintError
from .index import PrefixIndex
from .tokenizer import Tokenizer

logger = logging.getLogger("dabbrev.query")


def build_index(source: Iterable[str], tracer: logging.Logger | None = None) -> PrefixIndex:
    """Scan ``source`` into a new PrefixIndex."""
    tokenizer = Tokenizer(tracer=tracer)
    index = tokenizer.scan(source)
    logger.debug("Indexed %d words (%d nodes)", len(index), index.node_count)
    return index


def query(
    source: Iterable[str],
    prefix: str,
    *,
    tracer: logging.Logger | None = None,
) -> list[str]:
    """Return every word in ``source`` starting with ``prefix``, sorted.

    Args:
        source: A CharacterSource, or any iterable of code points.
        prefix: The text being completed. Empty matches every word.
        tracer: Optional logger receiving tokenizer transitions.

    Returns:
        Matching words in lexicographic order; empty when nothing matches.
    """
    matches = build_index(source, tracer).gather(prefix)
    logger.debug("Prefix %r matched %d words", prefix, len(matches))
    return matches


def last_word(source: Iterable[str], *, tracer: logging.Logger | None = None) -> str:
    """Return the unfinished word at the end of ``source``.

    This is the text left in the tokenizer once the stream ends, e.g. what
    is being typed at a prompt that has no trailing newline yet.
    """
    tokenizer = Tokenizer(tracer=tracer)
    tokenizer.scan(source)
    return tokenizer.pending


def prefix_hint(line: str, cursor: int) -> str:
    """Return the run of non-whitespace characters ending at ``cursor``.

    ``cursor`` is a column in ``line``; columns past the end are clamped.
    """
    if cursor < 0:
        raise HintError(f"Cursor column must not be negative: {cursor}")
    text = line[:cursor]
    start = len(text)
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return text[start:]


def suffixes(matches: list[str], prefix: str) -> list[str]:
    """Return the keystrokes that complete ``prefix`` into each match."""
    return [match[len(prefix) :] for match in matches]
