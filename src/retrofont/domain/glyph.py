"""Glyph representation.

This module defines the glyph domain model: the stored artwork for one
character as an ordered sequence of glyph parts.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from retrofont.domain.parts import EndMarker, GlyphPart, NewLine


@dataclass(frozen=True, slots=True)
class Glyph:
    """Artwork for a single character.

    Immutable; conversion and serialization build new glyphs instead of
    changing existing ones.

    Attributes:
        width: Widest line in cells
        height: Number of lines
        parts: Ordered glyph parts
    """

    width: int
    height: int
    parts: tuple[GlyphPart, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, "parts", tuple(self.parts))
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Glyph size must not be negative: {self.width}x{self.height}")

    @classmethod
    def from_parts(cls, parts: Iterable[GlyphPart]) -> "Glyph":
        """Build a glyph and measure its size from the parts.

        Every part except NewLine and EndMarker occupies one cell.

        Args:
            parts: Glyph parts in stream order

        Returns:
            Glyph with computed width and height
        """
        parts = tuple(parts)
        if not parts:
            return cls(width=0, height=0, parts=())

        width = 0
        line_width = 0
        height = 1
        for part in parts:
            if isinstance(part, NewLine):
                width = max(width, line_width)
                line_width = 0
                height += 1
            elif not isinstance(part, EndMarker):
                line_width += 1
        width = max(width, line_width)
        return cls(width=width, height=height, parts=parts)

    def is_empty(self) -> bool:
        """Check if glyph has no parts."""
        return len(self.parts) == 0

    def iter_lines(self) -> Iterator[tuple[GlyphPart, ...]]:
        """Yield the parts of each line, without the NewLine separators."""
        line: list[GlyphPart] = []
        for part in self.parts:
            if isinstance(part, NewLine):
                yield tuple(line)
                line = []
            else:
                line.append(part)
        yield tuple(line)
