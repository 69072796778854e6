"""Glyph parts: the semantic units of a glyph stream.

A glyph is stored as an ordered sequence of parts. Both font formats
normalize into this vocabulary:

- Char: a plain character cell
- Colored: a character cell with foreground/background/blink attributes
- HardBlank: a blank that must not collapse during layout
- NewLine: a line break inside the glyph
- FillMarker: outline fill marker ('@' in the TDF stream)
- OutlineHole: outline hole marker ('O' in the TDF stream)
- OutlinePlaceholder: letter slot resolved through an outline style table
- EndMarker: end-of-line marker ('&' in the TDF stream)
"""

from dataclasses import dataclass

OUTLINE_SLOTS = "ABCDEFGHIJKLMNOPQR"


@dataclass(frozen=True, slots=True)
class Char:
    """A plain character cell.

    Attributes:
        ch: Single unicode character
    """

    ch: str

    def __post_init__(self) -> None:
        if len(self.ch) != 1:
            raise ValueError(f"Char expects a single character, got {self.ch!r}")


@dataclass(frozen=True, slots=True)
class Colored:
    """A character cell with DOS text attributes.

    Attributes:
        ch: Single unicode character
        fg: Foreground color 0-15 (bit 3 is intensity)
        bg: Background color 0-15
        blink: Blink attribute
    """

    ch: str
    fg: int
    bg: int
    blink: bool = False

    def __post_init__(self) -> None:
        if len(self.ch) != 1:
            raise ValueError(f"Colored expects a single character, got {self.ch!r}")
        if not 0 <= self.fg <= 15:
            raise ValueError(f"Foreground must be 0-15, got {self.fg}")
        if not 0 <= self.bg <= 15:
            raise ValueError(f"Background must be 0-15, got {self.bg}")


@dataclass(frozen=True, slots=True)
class HardBlank:
    """A non-collapsible blank cell."""


@dataclass(frozen=True, slots=True)
class NewLine:
    """A line break within the glyph."""


@dataclass(frozen=True, slots=True)
class FillMarker:
    """Outline fill marker, invisible when displayed."""


@dataclass(frozen=True, slots=True)
class OutlineHole:
    """Outline hole marker, invisible when displayed."""


@dataclass(frozen=True, slots=True)
class OutlinePlaceholder:
    """Letter slot resolved to a box-drawing character at render time.

    Attributes:
        slot: One of the 18 letters 'A'..'R'
    """

    slot: str

    def __post_init__(self) -> None:
        if len(self.slot) != 1 or self.slot not in OUTLINE_SLOTS:
            raise ValueError(f"Outline slot must be one of A..R, got {self.slot!r}")

    @property
    def index(self) -> int:
        """Column of this slot in an outline style table."""
        return OUTLINE_SLOTS.index(self.slot)


@dataclass(frozen=True, slots=True)
class EndMarker:
    """End-of-line marker, only visible in edit mode."""


GlyphPart = (
    Char
    | Colored
    | HardBlank
    | NewLine
    | FillMarker
    | OutlineHole
    | OutlinePlaceholder
    | EndMarker
)

# Marker parts carry no data, so one instance of each is shared
HARD_BLANK = HardBlank()
NEW_LINE = NewLine()
FILL_MARKER = FillMarker()
OUTLINE_HOLE = OutlineHole()
END_MARKER = EndMarker()
