"""Domain models for retrofont.

This module contains the semantic model both font formats normalize into.
All models are designed to be:

- Immutable (frozen dataclasses, read-only glyph mappings)
- Safe to share between independent render calls
- Independent of the byte-level encodings

Key classes:
- GlyphPart variants: Char, Colored, HardBlank, NewLine, FillMarker,
  OutlineHole, OutlinePlaceholder, EndMarker
- Glyph: Artwork for one character
- FontRecord: One TDF font
- FigletFont: One FIGlet font
- Cell: A rendered character cell
"""

from retrofont.domain.cell import BLANK_CELL, Cell
from retrofont.domain.font import (
    FIGLET_FALLBACK_SPACING,
    FIRST_CHAR,
    LAST_CHAR,
    TDF_CHARACTERS,
    TDF_NAME_LENGTH,
    FigletFont,
    FigletHeader,
    Font,
    FontRecord,
    FontType,
    font_format,
    is_tdf_char,
)
from retrofont.domain.glyph import Glyph
from retrofont.domain.parts import (
    END_MARKER,
    FILL_MARKER,
    HARD_BLANK,
    NEW_LINE,
    OUTLINE_HOLE,
    OUTLINE_SLOTS,
    Char,
    Colored,
    EndMarker,
    FillMarker,
    GlyphPart,
    HardBlank,
    NewLine,
    OutlineHole,
    OutlinePlaceholder,
)

__all__: list[str] = [
    "BLANK_CELL",
    "END_MARKER",
    "FIGLET_FALLBACK_SPACING",
    "FILL_MARKER",
    "FIRST_CHAR",
    "HARD_BLANK",
    "LAST_CHAR",
    "NEW_LINE",
    "OUTLINE_HOLE",
    "OUTLINE_SLOTS",
    "TDF_CHARACTERS",
    "TDF_NAME_LENGTH",
    # Glyph parts
    "Char",
    "Colored",
    "EndMarker",
    "FillMarker",
    "GlyphPart",
    "HardBlank",
    "NewLine",
    "OutlineHole",
    "OutlinePlaceholder",
    # Core types
    "Cell",
    "FigletFont",
    "FigletHeader",
    "Font",
    "FontRecord",
    "FontType",
    "Glyph",
    "font_format",
    "is_tdf_char",
]
