"""Render targets: destinations for the cell stream.

The render engine only needs three operations from its output, described
by the RenderTarget protocol. LayoutBuffer is the in-memory target used by
the CLI and the tests: it places successive glyphs side by side.
"""

from typing import Protocol

from retrofont.domain import BLANK_CELL, Cell


class RenderTarget(Protocol):
    """Sink consumed by the render engine.

    Exceptions raised by any method propagate out of the render call
    unchanged; cells already drawn are not retracted.
    """

    def draw(self, cell: Cell) -> None:
        """Accept one cell at the current position."""
        ...

    def next_line(self) -> None:
        """Move to the next line of the current glyph."""
        ...

    def next_char(self) -> None:
        """Move on to the next character of the rendered string."""
        ...


class LayoutBuffer:
    """Collects cells into lines, laying glyphs out horizontally.

    next_line() moves down within the current glyph while keeping its left
    edge. next_char() starts the next glyph at the top, right of the widest
    line drawn so far. Shorter lines are padded with blanks when a later
    glyph draws on them.

    Attributes:
        lines: Rows of cells, top to bottom
    """

    def __init__(self) -> None:
        self.lines: list[list[Cell]] = [[]]
        self._line = 0
        self._x = 0

    def draw(self, cell: Cell) -> None:
        while self._line >= len(self.lines):
            self.lines.append([])
        row = self.lines[self._line]
        if len(row) < self._x:
            row.extend([BLANK_CELL] * (self._x - len(row)))
        row.append(cell)

    def next_line(self) -> None:
        self._line += 1

    def next_char(self) -> None:
        self._x = max(len(row) for row in self.lines)
        self._line = 0

    @property
    def width(self) -> int:
        """Widest row in cells."""
        return max(len(row) for row in self.lines)

    def rows(self) -> list[str]:
        """Return each row as plain text, colors dropped."""
        return ["".join(cell.ch for cell in row) for row in self.lines]

    def to_text(self) -> str:
        """Return the buffer as newline separated plain text."""
        return "\n".join(self.rows())
