"""Font records for both supported formats.

A load operation yields a sequence of `Font` values, a closed union of:

- FontRecord: one TheDraw (TDF) font from a bundle
- FigletFont: a FIGlet (.flf) text font

Call sites dispatch on the variant explicitly with isinstance().
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType

from retrofont.domain.glyph import Glyph

FIRST_CHAR = "!"
LAST_CHAR = "~"
TDF_CHARACTERS = "".join(chr(code) for code in range(ord(FIRST_CHAR), ord(LAST_CHAR) + 1))
TDF_NAME_LENGTH = 12

# FIGlet fonts carry no letter spacing; missing glyphs fall back to one blank
FIGLET_FALLBACK_SPACING = 1


class FontType(IntEnum):
    """TDF font type, valued as stored in the record type byte."""

    OUTLINE = 0
    BLOCK = 1
    COLOR = 2

    @property
    def label(self) -> str:
        """Human readable type name."""
        return self.name.capitalize()


def is_tdf_char(ch: str) -> bool:
    """Check if a character falls in the TDF range '!'..'~'."""
    return len(ch) == 1 and FIRST_CHAR <= ch <= LAST_CHAR


def _freeze(glyphs: Mapping[str, Glyph]) -> Mapping[str, Glyph]:
    return MappingProxyType(dict(glyphs))


@dataclass(frozen=True)
class FontRecord:
    """One font of a TDF bundle.

    Attributes:
        name: Font name, at most 12 bytes once encoded
        font_type: Outline, block or color
        spacing: Letter spacing in cells (0-255)
        glyphs: Glyph per character; keys only from '!'..'~'
    """

    name: str
    font_type: FontType
    spacing: int = 0
    glyphs: Mapping[str, Glyph] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0 <= self.spacing <= 255:
            raise ValueError(f"Spacing must be 0-255, got {self.spacing}")
        invalid = [ch for ch in self.glyphs if not is_tdf_char(ch)]
        if invalid:
            raise ValueError(f"TDF fonts only hold '!'..'~', got {invalid!r}")
        object.__setattr__(self, "font_type", FontType(self.font_type))
        object.__setattr__(self, "glyphs", _freeze(self.glyphs))

    @property
    def glyph_count(self) -> int:
        """Number of defined characters."""
        return len(self.glyphs)

    def has_char(self, ch: str) -> bool:
        """Check if the font defines a glyph for exactly this character."""
        return ch in self.glyphs

    def glyph_for(self, ch: str) -> Glyph | None:
        """Find the glyph for a character.

        Many TDF fonts only draw one letter case, so a missing letter falls
        back to the other case.

        Args:
            ch: Character to look up

        Returns:
            The glyph, or None if neither case is defined
        """
        glyph = self.glyphs.get(ch)
        if glyph is None and ch.isalpha():
            glyph = self.glyphs.get(ch.upper()) or self.glyphs.get(ch.lower())
        return glyph

    def iter_glyphs(self) -> Iterator[tuple[str, Glyph]]:
        """Yield (character, glyph) pairs in '!'..'~' order."""
        for ch in TDF_CHARACTERS:
            glyph = self.glyphs.get(ch)
            if glyph is not None:
                yield ch, glyph


@dataclass(frozen=True)
class FigletHeader:
    """Parameters of a FIGlet 'flf2a' header line.

    Attributes:
        hard_blank: Character standing for a hard blank in glyph lines
        height: Lines per character
        baseline: Lines from the top to the baseline
        max_length: Longest glyph line including end marks
        old_layout: Legacy layout bits
        comment_lines: Number of comment lines after the header
        print_direction: 0 left-to-right, 1 right-to-left (None if absent)
        full_layout: Full layout bits (None if absent)
        codetag_count: Number of code-tagged characters (None if absent)
    """

    hard_blank: str
    height: int
    baseline: int
    max_length: int
    old_layout: int
    comment_lines: int
    print_direction: int | None = None
    full_layout: int | None = None
    codetag_count: int | None = None

    def to_line(self) -> str:
        """Generate the header line this header was parsed from."""
        fields = [
            f"flf2a{self.hard_blank}",
            str(self.height),
            str(self.baseline),
            str(self.max_length),
            str(self.old_layout),
            str(self.comment_lines),
        ]
        for optional in (self.print_direction, self.full_layout, self.codetag_count):
            if optional is None:
                break
            fields.append(str(optional))
        return " ".join(fields)


@dataclass(frozen=True)
class FigletFont:
    """A FIGlet text font.

    Glyphs use only Char, NewLine and HardBlank parts. Keys may fall outside
    the TDF range (space, German extras, code-tagged characters).

    Attributes:
        name: Font name (file stem when loaded from disk)
        header: Parsed header line
        comments: Comment lines following the header
        glyphs: Glyph per character
    """

    name: str
    header: FigletHeader
    comments: tuple[str, ...] = ()
    glyphs: Mapping[str, Glyph] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "comments", tuple(self.comments))
        object.__setattr__(self, "glyphs", _freeze(self.glyphs))

    @property
    def spacing(self) -> int:
        """Blank cells emitted for a missing glyph."""
        return FIGLET_FALLBACK_SPACING

    @property
    def glyph_count(self) -> int:
        """Number of defined characters."""
        return len(self.glyphs)

    def has_char(self, ch: str) -> bool:
        """Check if the font defines a glyph for this character."""
        return ch in self.glyphs

    def glyph_for(self, ch: str) -> Glyph | None:
        """Find the glyph for a character, None if undefined."""
        return self.glyphs.get(ch)

    def iter_glyphs(self) -> Iterator[tuple[str, Glyph]]:
        """Yield (character, glyph) pairs in code point order."""
        for ch in sorted(self.glyphs):
            yield ch, self.glyphs[ch]


Font = FigletFont | FontRecord


def font_format(font: Font) -> str:
    """Name of the format a font came from."""
    if isinstance(font, FigletFont):
        return "FIGlet"
    return "TDF"
