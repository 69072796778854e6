"""Render engine: glyph parts to a positioned cell stream.

The engine walks a glyph's parts in order and sends cells to a render
target. How structural parts appear depends on the render mode:

    part                 display          edit
    HardBlank            space            middle dot
    FillMarker           space            '@'
    OutlineHole          space            'O'
    EndMarker            (nothing)        '&'
    OutlinePlaceholder   outline style table lookup in both modes

One call renders one glyph. Laying out a string is the caller's loop:
render a character, then call the target's next_char(); render_text()
does exactly that.
"""

from dataclasses import dataclass

import structlog

from retrofont.config import RenderMode, RenderOptions
from retrofont.core.outline import resolve_outline
from retrofont.core.targets import RenderTarget
from retrofont.domain import (
    BLANK_CELL,
    Cell,
    Char,
    Colored,
    EndMarker,
    FillMarker,
    Font,
    Glyph,
    GlyphPart,
    HardBlank,
    NewLine,
    OutlineHole,
    OutlinePlaceholder,
)
from retrofont.exceptions import UndefinedGlyphError

logger = structlog.get_logger(__name__)

HARD_BLANK_MARK = "·"


@dataclass(frozen=True, slots=True)
class Cursor:
    """Position inside the glyph being rendered.

    Attributes:
        line: Line within the glyph, from 0
        column: Cells drawn on the current line
    """

    line: int = 0
    column: int = 0

    def advance(self) -> "Cursor":
        """Position after drawing one cell."""
        return Cursor(self.line, self.column + 1)

    def new_line(self) -> "Cursor":
        """Position at the start of the next line."""
        return Cursor(self.line + 1, 0)


def part_to_cell(part: GlyphPart, options: RenderOptions) -> Cell | None:
    """Compute the cell drawn for one non-NewLine part.

    Args:
        part: Glyph part
        options: Render mode and outline style

    Returns:
        Cell to draw, or None if the part draws nothing
    """
    edit = options.mode is RenderMode.EDIT

    if isinstance(part, Char):
        return Cell(part.ch)
    if isinstance(part, Colored):
        return Cell(part.ch, fg=part.fg, bg=part.bg, blink=part.blink)
    if isinstance(part, OutlinePlaceholder):
        if not options.resolve_outline:
            return Cell(part.slot)
        return Cell(resolve_outline(options.outline_style, part))
    if isinstance(part, HardBlank):
        return Cell(HARD_BLANK_MARK) if edit else BLANK_CELL
    if isinstance(part, FillMarker):
        return Cell("@") if edit else BLANK_CELL
    if isinstance(part, OutlineHole):
        return Cell("O") if edit else BLANK_CELL
    if isinstance(part, EndMarker):
        return Cell("&") if edit else None
    raise TypeError(f"Unknown glyph part: {part!r}")


def render_glyph(glyph: Glyph, target: RenderTarget, options: RenderOptions) -> Cursor:
    """Render one glyph onto a target.

    Args:
        glyph: Glyph to render
        target: Destination of the cell stream
        options: Render mode and outline style

    Returns:
        Cursor position after the last part
    """
    cursor = Cursor()
    for part in glyph.parts:
        if isinstance(part, NewLine):
            target.next_line()
            cursor = cursor.new_line()
            continue
        cell = part_to_cell(part, options)
        if cell is None:
            continue
        target.draw(cell)
        cursor = cursor.advance()
    return cursor


def render_char(font: Font, ch: str, target: RenderTarget, options: RenderOptions) -> Cursor:
    """Render the glyph of one character.

    A character without a glyph draws `font.spacing` blank cells, or raises
    when strict rendering is requested.

    Args:
        font: FIGlet font or TDF record
        ch: Character to render
        target: Destination of the cell stream
        options: Render options

    Returns:
        Cursor position after the glyph

    Raises:
        UndefinedGlyphError: Missing glyph in strict mode
    """
    glyph = font.glyph_for(ch)
    if glyph is not None:
        return render_glyph(glyph, target, options)

    if options.strict:
        raise UndefinedGlyphError(ch, font.name)

    logger.debug("Glyph missing, drawing spacing", char=ch, font=font.name, spacing=font.spacing)
    cursor = Cursor()
    for _ in range(font.spacing):
        target.draw(BLANK_CELL)
        cursor = cursor.advance()
    return cursor


def render_text(font: Font, text: str, target: RenderTarget, options: RenderOptions) -> None:
    """Render a string, advancing the target between characters."""
    for ch in text:
        render_char(font, ch, target, options)
        target.next_char()
