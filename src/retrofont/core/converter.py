"""FIGlet to TDF conversion.

Conversion is split into a feasibility check and the transform itself so
callers can branch on the check without attempting a failing conversion:

- check_compatibility: pure check returning the blocking error, if any
- compatible: the same check as a boolean
- convert: builds a new FontRecord (raises the error the check reports)

The space character is not part of the TDF range; TDF renders it through
the font's spacing, so it never blocks a conversion and is not copied.
"""

from dataclasses import replace

import structlog

from retrofont.config import ConversionConfig
from retrofont.domain import (
    TDF_NAME_LENGTH,
    Char,
    Colored,
    FigletFont,
    FontRecord,
    FontType,
    Glyph,
    GlyphPart,
    is_tdf_char,
)
from retrofont.exceptions import (
    ConversionError,
    IncompatibleCharacterSetError,
    UnsupportedFontTypeError,
)

logger = structlog.get_logger(__name__)

SPACE = " "


def _is_convertible(ch: str) -> bool:
    return ch == SPACE or is_tdf_char(ch)


def check_compatibility(source: FigletFont, target_type: FontType) -> ConversionError | None:
    """Check whether a FIGlet font can become a TDF font of a type.

    Args:
        source: FIGlet font to convert
        target_type: Requested TDF font type

    Returns:
        The error a conversion would raise, or None if it would succeed
    """
    if target_type is FontType.OUTLINE:
        return UnsupportedFontTypeError(
            FontType.OUTLINE.label,
            "outline fonts need placeholder decomposition data that flat text does not carry",
        )

    outside = sorted(ch for ch in source.glyphs if not _is_convertible(ch))
    if outside:
        return IncompatibleCharacterSetError(outside)
    return None


def compatible(source: FigletFont, target_type: FontType) -> bool:
    """Check if convert() would succeed for this source and type."""
    return check_compatibility(source, target_type) is None


def restrict_to_printable(source: FigletFont) -> FigletFont:
    """Build a copy of a FIGlet font without characters TDF cannot hold.

    For callers that explicitly accept losing those characters.
    """
    glyphs = {ch: glyph for ch, glyph in source.glyphs.items() if _is_convertible(ch)}
    dropped = source.glyph_count - len(glyphs)
    if dropped:
        logger.info("Dropped characters outside TDF range", font=source.name, dropped=dropped)
    return replace(source, glyphs=glyphs)


def _transcode(part: GlyphPart, target_type: FontType, config: ConversionConfig) -> GlyphPart:
    if isinstance(part, Char) and target_type is FontType.COLOR:
        return Colored(part.ch, fg=config.default_fg, bg=config.default_bg)
    return part


def convert(
    source: FigletFont,
    target_type: FontType,
    config: ConversionConfig | None = None,
) -> FontRecord:
    """Convert a FIGlet font into a TDF font record.

    Plain cells become Char (block) or Colored with the configured default
    colors (color); line breaks and hard blanks carry over. Glyph sizes are
    measured again and the name is cut to the 12-byte field.

    Args:
        source: FIGlet font to convert
        target_type: Block or color
        config: Default colors and spacing

    Returns:
        New font record

    Raises:
        IncompatibleCharacterSetError: Source holds characters outside '!'..'~'
        UnsupportedFontTypeError: Target type is outline
    """
    error = check_compatibility(source, target_type)
    if error is not None:
        raise error

    config = config or ConversionConfig()
    if SPACE in source.glyphs:
        logger.info(
            "Space glyph not copied, rendered through spacing",
            font=source.name,
            spacing=config.spacing,
        )

    glyphs: dict[str, Glyph] = {}
    for ch, glyph in source.iter_glyphs():
        if ch == SPACE:
            continue
        glyphs[ch] = Glyph.from_parts(
            _transcode(part, target_type, config) for part in glyph.parts
        )

    record = FontRecord(
        name=source.name[:TDF_NAME_LENGTH],
        font_type=target_type,
        spacing=config.spacing,
        glyphs=glyphs,
    )
    logger.info(
        "Converted FIGlet font",
        name=record.name,
        font_type=target_type.label,
        glyphs=record.glyph_count,
    )
    return record
