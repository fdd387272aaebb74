"""Character sources: terminal content streamed as code points.

A source yields code points in reading order. Rows that were soft-wrapped
run straight into the next row; every other row ends with a synthesized
newline. Padding cells that follow a wide glyph are skipped and cells that
fail to decode become U+FFFD.
"""

from __future__ import annotations

import logging
import unicodedata
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger("dabbrev.source")

REPLACEMENT_CHARACTER = "\ufffd"


@dataclass(frozen=True)
class Cell:
    """One grid cell: the UTF-8 bytes (or text) of a single glyph."""

    data: bytes | str
    padding: bool = False

    def decode(self) -> str:
        if isinstance(self.data, str):
            return self.data
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Undecodable cell %r", self.data)
            return REPLACEMENT_CHARACTER


PADDING = Cell(b"", padding=True)


def is_wide(ch: str) -> bool:
    """True if ``ch`` occupies two terminal cells."""
    return unicodedata.east_asian_width(ch) in ("W", "F")


@dataclass(frozen=True)
class GridLine:
    """A row of cells; ``wrapped`` means the row continues on the next one."""

    cells: tuple[Cell, ...]
    wrapped: bool = False

    @classmethod
    def from_text(cls, text: str, wrapped: bool = False) -> GridLine:
        cells: list[Cell] = []
        for ch in text:
            cells.append(Cell(ch))
            if is_wide(ch):
                cells.append(PADDING)
        return cls(tuple(cells), wrapped)

    @property
    def width(self) -> int:
        return len(self.cells)

    def text(self) -> str:
        return "".join(cell.decode() for cell in self.cells if not cell.padding)


class CharacterSource(ABC):
    """Abstract base class for terminal content."""

    @abstractmethod
    def lines(self) -> Iterator[GridLine]:
        """Yield the rows to scan, top to bottom."""
        pass

    def __iter__(self) -> Iterator[str]:
        for line in self.lines():
            for cell in line.cells:
                if cell.padding:
                    continue
                yield from cell.decode()
            if not line.wrapped:
                yield "\n"


class GridSource(CharacterSource):
    """History plus visible rows of one screen.

    ``start_line`` and ``end_line`` are inclusive row numbers; negative
    numbers count back from the last row. Out-of-range bounds are clamped.
    """

    def __init__(
        self,
        lines: Iterable[GridLine],
        start_line: int | None = None,
        end_line: int | None = None,
    ) -> None:
        self.grid: list[GridLine] = list(lines)
        self.start_line = start_line
        self.end_line = end_line

    def _bound(self, line: int | None, default: int) -> int:
        if line is None:
            return default
        if line < 0:
            line += len(self.grid)
        return max(0, min(line, len(self.grid) - 1))

    def lines(self) -> Iterator[GridLine]:
        if not self.grid:
            return
        top = self._bound(self.start_line, 0)
        bottom = self._bound(self.end_line, len(self.grid) - 1)
        yield from self.grid[top : bottom + 1]


class TextSource(GridSource):
    """Plain text laid out as grid rows.

    With ``width`` set, lines longer than ``width`` cells are split into
    soft-wrapped rows the way a terminal of that width would show them.
    With ``open_end`` set, a last line without a trailing newline is left
    open, like the row the cursor is still on, so its unfinished word is not
    terminated.
    """

    def __init__(
        self,
        text: str,
        width: int | None = None,
        start_line: int | None = None,
        end_line: int | None = None,
        open_end: bool = False,
    ) -> None:
        if width is not None and width < 2:
            raise ValueError("width must be at least 2 cells")
        self.width = width
        self.open_end = open_end
        super().__init__(self._layout(text), start_line, end_line)

    def _layout(self, text: str) -> Iterator[GridLine]:
        if not text:
            return
        rows = text.split("\n")
        # A trailing newline ends the last line, it does not open a new one.
        if text.endswith("\n"):
            rows.pop()
        last = len(rows) - 1
        for number, row in enumerate(rows):
            lines = [GridLine.from_text(row)] if self.width is None else list(self._wrap(row))
            if self.open_end and number == last and not text.endswith("\n"):
                lines[-1] = GridLine(lines[-1].cells, wrapped=True)
            yield from lines

    def _wrap(self, row: str) -> Iterator[GridLine]:
        current = ""
        used = 0
        for ch in row:
            size = 2 if is_wide(ch) else 1
            if used + size > self.width:
                yield GridLine.from_text(current, wrapped=True)
                current, used = "", 0
            current += ch
            used += size
        yield GridLine.from_text(current)


class ChainSource(CharacterSource):
    """Several sources scanned one after another, e.g. every pane."""

    def __init__(self, *sources: CharacterSource) -> None:
        self.sources = sources

    def lines(self) -> Iterator[GridLine]:
        for source in self.sources:
            yield from source.lines()
