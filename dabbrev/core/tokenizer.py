"""Word and URI tokenizer.

A table-driven state machine reads one code point at a time. Each state owns
an ordered list of transitions; the first one whose character class matches
wins. Its effect runs on the accumulation buffer, then the machine moves to
the transition's next state, if any.

Only explicit boundary characters emit tokens. Whatever is still in the
buffer when the stream ends is left in ``Tokenizer.pending``.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, Flag, auto

from .exceptions import TokenizerStuck
from .index import PrefixIndex

logger = logging.getLogger("dabbrev.tokenizer")

URI_SCHEME_EXTRA = "+-."
QUOTES = "'\""
# Everything outside these categories is printable, as with glibc iswprint.
CONTROL_CATEGORIES = ("Cc", "Zl", "Zp")


class State(str, Enum):
    """Scanner states."""

    GROUND = "ground"
    WORD = "word"
    WORD_QUOTED = "word_quoted"
    URI_MAYBE = "uri_maybe"
    URI_END_SCHEME = "uri_end_scheme"
    URI_POST_SCHEME = "uri_post_scheme"
    URI_AUTH = "uri_auth"
    URI_PATH = "uri_path"


class CharClass(Flag):
    """Character classes a single code point can belong to."""

    NONE = 0
    SPACE = auto()
    QUOTE = auto()
    CLOSE_QUOTE = auto()
    ALPHA = auto()
    SCHEME = auto()
    COLON = auto()
    PIPE = auto()
    SLASH = auto()
    PRINT = auto()
    GRAPH = auto()
    CNTRL = auto()


class Effect(str, Enum):
    """What a transition does to the accumulation buffer."""

    NONE = "none"
    BEGIN = "begin"
    COLLECT = "collect"
    EMIT = "emit"
    EMIT_SCHEME = "emit_scheme"


@dataclass(frozen=True)
class Transition:
    """One entry of a state's transition table."""

    char_class: CharClass
    effect: Effect = Effect.NONE
    next_state: State | None = None


def classify(ch: str, quote: str | None = None) -> CharClass:
    """Return every class ``ch`` belongs to.

    ``quote`` is the character that opened the quoted word in progress, if
    any; only that character closes it.
    """
    classes = CharClass.NONE
    if ch.isspace():
        classes |= CharClass.SPACE
    if ch in QUOTES:
        classes |= CharClass.QUOTE
        if ch == quote:
            classes |= CharClass.CLOSE_QUOTE
    if ch.isalpha():
        classes |= CharClass.ALPHA
    if ch.isalnum() or ch in URI_SCHEME_EXTRA:
        classes |= CharClass.SCHEME
    if ch == ":":
        classes |= CharClass.COLON
    elif ch == "|":
        classes |= CharClass.PIPE
    elif ch == "/":
        classes |= CharClass.SLASH
    if unicodedata.category(ch) in CONTROL_CATEGORIES:
        classes |= CharClass.CNTRL
    else:
        classes |= CharClass.PRINT
        if not ch.isspace():
            classes |= CharClass.GRAPH
    return classes


TRANSITIONS: dict[State, tuple[Transition, ...]] = {
    State.GROUND: (
        Transition(CharClass.SPACE),
        Transition(CharClass.QUOTE, Effect.BEGIN, State.WORD_QUOTED),
        Transition(CharClass.ALPHA, Effect.BEGIN, State.URI_MAYBE),
        Transition(CharClass.PRINT, Effect.BEGIN, State.WORD),
    ),
    State.URI_MAYBE: (
        Transition(CharClass.COLON, Effect.EMIT_SCHEME, State.URI_END_SCHEME),
        Transition(CharClass.SCHEME, Effect.COLLECT),
        Transition(CharClass.PIPE, Effect.EMIT, State.GROUND),
        Transition(CharClass.SPACE, Effect.EMIT, State.GROUND),
        Transition(CharClass.GRAPH, Effect.COLLECT, State.WORD),
    ),
    # "scheme:" seen; "//" continues the URI, anything else is a plain path.
    State.URI_END_SCHEME: (
        Transition(CharClass.SLASH, Effect.COLLECT, State.URI_POST_SCHEME),
        Transition(CharClass.GRAPH, Effect.BEGIN, State.URI_PATH),
        Transition(CharClass.SPACE, Effect.NONE, State.GROUND),
    ),
    State.URI_POST_SCHEME: (
        Transition(CharClass.SLASH, Effect.COLLECT, State.URI_AUTH),
        Transition(CharClass.GRAPH, Effect.BEGIN, State.URI_PATH),
        Transition(CharClass.SPACE, Effect.NONE, State.GROUND),
    ),
    State.URI_AUTH: (
        Transition(CharClass.SLASH, Effect.COLLECT, State.URI_PATH),
        Transition(CharClass.GRAPH, Effect.COLLECT),
        Transition(CharClass.SPACE, Effect.EMIT, State.GROUND),
    ),
    State.URI_PATH: (
        Transition(CharClass.GRAPH, Effect.COLLECT),
        Transition(CharClass.SPACE, Effect.EMIT, State.GROUND),
    ),
    State.WORD: (
        Transition(CharClass.COLON, Effect.EMIT, State.GROUND),
        Transition(CharClass.PIPE, Effect.EMIT, State.GROUND),
        Transition(CharClass.SPACE, Effect.EMIT, State.GROUND),
        Transition(CharClass.GRAPH, Effect.COLLECT),
    ),
    State.WORD_QUOTED: (
        Transition(CharClass.CLOSE_QUOTE, Effect.COLLECT, State.WORD),
        Transition(CharClass.PRINT, Effect.COLLECT),
        Transition(CharClass.CNTRL, Effect.NONE, State.GROUND),
    ),
}


def step(state: State, classes: CharClass) -> Transition | None:
    """Return the first transition of ``state`` matching ``classes``."""
    for transition in TRANSITIONS[state]:
        if transition.char_class & classes:
            return transition
    return None


class Tokenizer:
    """Feeds characters through the state machine into a PrefixIndex.

    ``tracer`` is an optional logger that receives every state change and
    emitted token at DEBUG level. Nothing is traced without one.
    """

    def __init__(
        self,
        index: PrefixIndex | None = None,
        tracer: logging.Logger | None = None,
    ) -> None:
        self.index = index if index is not None else PrefixIndex()
        self.tracer = tracer
        self.state = State.GROUND
        self.error: TokenizerStuck | None = None
        self._buffer: list[str] = []
        self._quote: str | None = None
        self.last_char = ""

    @property
    def pending(self) -> str:
        """The unfinished token still being accumulated."""
        return "".join(self._buffer)

    def _emit(self) -> None:
        word = "".join(self._buffer)
        if self.tracer is not None:
            self.tracer.debug("Word: |%s|", word)
        self.index.insert(word)

    def _apply(self, effect: Effect, ch: str) -> None:
        if effect is Effect.BEGIN:
            self._buffer = [ch]
        elif effect is Effect.COLLECT:
            self._buffer.append(ch)
        elif effect is Effect.EMIT:
            self._emit()
            self._buffer = []
        elif effect is Effect.EMIT_SCHEME:
            self._emit()
            self._buffer.append(ch)

    def _set_state(self, state: State, ch: str) -> None:
        if self.tracer is not None:
            self.tracer.debug(
                "%s --%r--> %s (word %r)", self.state.value, ch, state.value, self.pending
            )
        if state is State.GROUND:
            self._buffer = []
            self._quote = None
        elif state is State.WORD_QUOTED:
            self._quote = ch
        elif self.state is State.WORD_QUOTED:
            self._quote = None
        self.state = state

    def feed(self, ch: str) -> None:
        """Run one transition for ``ch``.

        Raises:
            TokenizerStuck: no transition of the current state matches.
        """
        self.last_char = ch
        transition = step(self.state, classify(ch, self._quote))
        if transition is None:
            raise TokenizerStuck(
                f"No transition from state {self.state.value} for {ch!r}",
                state=self.state,
                char=ch,
            )
        self._apply(transition.effect, ch)
        if transition.next_state is not None:
            self._set_state(transition.next_state, ch)

    def scan(self, source: Iterable[str]) -> PrefixIndex:
        """Feed every character of ``source`` and return the populated index.

        A stuck transition ends the scan early: it is logged and kept in
        ``self.error``, the tokens emitted so far stay in the index and the
        unfinished buffer is dropped.
        """
        for ch in source:
            try:
                self.feed(ch)
            except TokenizerStuck as e:
                logger.warning("Tokenizer stopped: %s", e)
                self.error = e
                self._buffer = []
                break
        return self.index
