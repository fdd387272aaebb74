# dabbrev: dynamic abbreviation completion from previously shown text

from .completer import DabbrevCompleter
from .config import Settings
from .console_app import ConsoleApp
from .core import PrefixIndex, Tokenizer, last_word, prefix_hint, query

__all__ = [
    "DabbrevCompleter",
    "Settings",
    "ConsoleApp",
    "PrefixIndex",
    "Tokenizer",
    "last_word",
    "prefix_hint",
    "query",
]
