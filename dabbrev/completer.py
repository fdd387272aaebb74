"""Dynamic abbreviation completion for prompt_toolkit."""

import logging
from collections.abc import Callable, Iterable
from string import ascii_lowercase

from prompt_toolkit.completion import Completer, Completion

from .core.query import prefix_hint, query


def menu_key(position: int) -> str:
    """Menu shortcut for the ``position``-th completion: a, b, ... z, then none."""
    if position < len(ascii_lowercase):
        return ascii_lowercase[position]
    return ""


class DabbrevCompleter(Completer):
    """Completes the word before the cursor from previously shown text."""

    def __init__(
        self,
        get_source: Callable[[], Iterable[str]],
        max_completions: int = 26,
        tracer: logging.Logger | None = None,
    ):
        self.get_source = get_source
        self.max_completions = max_completions
        self.tracer = tracer

    def matches(self, hint: str) -> list[str]:
        """Words from the scrollback that would complete ``hint``."""
        if not hint:
            return []
        found = query(self.get_source(), hint, tracer=self.tracer)
        return [word for word in found if word != hint][: self.max_completions]

    def get_completions(self, document, complete_event) -> Iterable[Completion]:
        """Get completions for the word before the cursor.

        Rules:
        - The hint is the non-whitespace run ending at the cursor.
        - The hint is replaced by the chosen word, so only its suffix is typed.
        - Menu entries carry a letter shortcut as their meta text.
        """
        hint = prefix_hint(document.current_line_before_cursor, document.cursor_position_col)
        for position, word in enumerate(self.matches(hint)):
            yield Completion(
                word,
                start_position=-len(hint),
                display=word,
                display_meta=menu_key(position),
            )
