# Tokenizer, prefix index and completion queries

from .exceptions import DabbrevError, HintError, TokenizerStuck
from .index import PrefixIndex
from .query import build_index, last_word, prefix_hint, query, suffixes
from .source import (
    REPLACEMENT_CHARACTER,
    Cell,
    ChainSource,
    CharacterSource,
    GridLine,
    GridSource,
    TextSource,
)
from .tokenizer import CharClass, Effect, State, Tokenizer, Transition, classify, step

__all__ = [
    "DabbrevError",
    "HintError",
    "TokenizerStuck",
    "PrefixIndex",
    "build_index",
    "last_word",
    "prefix_hint",
    "query",
    "suffixes",
    "REPLACEMENT_CHARACTER",
    "Cell",
    "ChainSource",
    "CharacterSource",
    "GridLine",
    "GridSource",
    "TextSource",
    "CharClass",
    "Effect",
    "State",
    "Tokenizer",
    "Transition",
    "classify",
    "step",
]
