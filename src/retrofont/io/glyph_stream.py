"""Glyph part stream decoder and encoder.

A TDF glyph is stored as a width byte, a height byte and a tagged byte
stream ending at 0x00. The tag vocabulary depends on the font type:

- all types: 0x0D line break, '&' end marker
- outline: '@' fill, 'O' hole, 'A'..'R' outline placeholders, 0xFF hard blank
- block: 0xFF hard blank, everything else a CP437 character
- color: every cell is a character byte followed by an attribute byte;
  character 0xFF is a hard blank

Character cells that encode to one of their font type's tag bytes cannot
be stored and are refused by the encoder.
"""

import structlog

from retrofont.domain import (
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
    FontType,
    Glyph,
    GlyphPart,
    HardBlank,
    NewLine,
    OutlineHole,
    OutlinePlaceholder,
)
from retrofont.exceptions import (
    BackgroundOutOfRangeError,
    GlyphTooLargeError,
    MissingTerminatorError,
    ReservedCharacterError,
)
from retrofont.io.cp437 import decode_byte, encode_char

logger = structlog.get_logger(__name__)

TERMINATOR = 0x00
LINE_BREAK = 0x0D
HARD_BLANK_BYTE = 0xFF
END_MARKER_BYTE = ord("&")
FILL_MARKER_BYTE = ord("@")
OUTLINE_HOLE_BYTE = ord("O")
OUTLINE_SLOT_BYTES = frozenset(OUTLINE_SLOTS.encode("ascii"))

# Light gray on black, used when a plain Char lands in a color font
DEFAULT_ATTRIBUTE = 0x07
MAX_ATTRIBUTE_BG = 7

# Cell characters encoding to these bytes would read back as tags
_RESERVED_COMMON = frozenset((TERMINATOR, LINE_BREAK, END_MARKER_BYTE, HARD_BLANK_BYTE))
_RESERVED_OUTLINE = OUTLINE_SLOT_BYTES | {FILL_MARKER_BYTE, OUTLINE_HOLE_BYTE}


def unpack_attribute(attribute: int) -> tuple[int, int, bool]:
    """Split a DOS attribute byte.

    Low nibble is the foreground (bit 3 intensity), bits 4-6 the
    background and bit 7 blink.

    Args:
        attribute: Attribute byte

    Returns:
        Tuple of (fg, bg, blink)
    """
    return attribute & 0x0F, (attribute >> 4) & 0x07, bool(attribute & 0x80)


def pack_attribute(fg: int, bg: int, blink: bool) -> int:
    """Build a DOS attribute byte from its fields.

    Only three background bits fit; callers reject backgrounds above 7.
    """
    return (fg & 0x0F) | ((bg & 0x07) << 4) | (0x80 if blink else 0x00)


def _decode_outline_byte(value: int) -> GlyphPart:
    if value == FILL_MARKER_BYTE:
        return FILL_MARKER
    if value == OUTLINE_HOLE_BYTE:
        return OUTLINE_HOLE
    if value in OUTLINE_SLOT_BYTES:
        return OutlinePlaceholder(chr(value))
    return Char(decode_byte(value))


def decode_glyph(
    block: bytes,
    offset: int,
    font_type: FontType,
    *,
    strict: bool = True,
    char: str = "?",
) -> Glyph | None:
    """Decode one glyph starting at an offset in the glyph block.

    Decoding never reads past the end of the block. A stream that runs
    out before its 0x00 terminator raises in strict mode; in lenient mode
    the glyph ends where the block does, and a glyph too short to hold
    its size bytes is dropped.

    Args:
        block: Glyph block of one font record
        offset: Start of the glyph within the block
        font_type: Type of the owning font, selects the tag vocabulary
        strict: Treat a missing terminator as an error
        char: Character being decoded, for error messages

    Returns:
        Decoded glyph, or None if a lenient decode had nothing to keep

    Raises:
        MissingTerminatorError: Stream exhausted in strict mode
    """
    end = len(block)
    if offset + 2 > end:
        if strict:
            raise MissingTerminatorError(char, end)
        logger.debug("Glyph header truncated, dropping glyph", char=char, offset=offset)
        return None

    width = block[offset]
    height = block[offset + 1]
    pos = offset + 2
    parts: list[GlyphPart] = []

    while True:
        if pos >= end:
            if strict:
                raise MissingTerminatorError(char, pos)
            logger.debug("Glyph stream ended without terminator", char=char, offset=offset)
            break

        value = block[pos]
        pos += 1

        if value == TERMINATOR:
            break
        if value == LINE_BREAK:
            parts.append(NEW_LINE)
            continue
        if value == END_MARKER_BYTE:
            parts.append(END_MARKER)
            continue

        if font_type is FontType.COLOR:
            if pos >= end:
                if strict:
                    raise MissingTerminatorError(char, pos)
                logger.debug("Color cell missing attribute byte", char=char, offset=offset)
                break
            attribute = block[pos]
            pos += 1
            if value == HARD_BLANK_BYTE:
                parts.append(HARD_BLANK)
            else:
                fg, bg, blink = unpack_attribute(attribute)
                parts.append(Colored(decode_byte(value), fg, bg, blink))
        elif value == HARD_BLANK_BYTE:
            parts.append(HARD_BLANK)
        elif font_type is FontType.OUTLINE:
            parts.append(_decode_outline_byte(value))
        else:
            parts.append(Char(decode_byte(value)))

    return Glyph(width=width, height=height, parts=tuple(parts))


def reserved_bytes(font_type: FontType) -> frozenset[int]:
    """Bytes a character cell of the given font type must not encode to."""
    if font_type is FontType.OUTLINE:
        return _RESERVED_COMMON | _RESERVED_OUTLINE
    return _RESERVED_COMMON


def _encode_cell(part: Char | Colored, font_type: FontType, char: str) -> int:
    value = encode_char(part.ch)
    if value in reserved_bytes(font_type):
        raise ReservedCharacterError(char, part.ch, font_type.label)
    return value


def _encode_part(part: GlyphPart, font_type: FontType, char: str) -> bytes:
    is_color = font_type is FontType.COLOR

    if isinstance(part, NewLine):
        return bytes((LINE_BREAK,))
    if isinstance(part, EndMarker):
        return bytes((END_MARKER_BYTE,))
    if isinstance(part, HardBlank):
        return bytes((HARD_BLANK_BYTE, 0x00)) if is_color else bytes((HARD_BLANK_BYTE,))
    if isinstance(part, FillMarker):
        return bytes((FILL_MARKER_BYTE,))
    if isinstance(part, OutlineHole):
        return bytes((OUTLINE_HOLE_BYTE,))
    if isinstance(part, OutlinePlaceholder):
        return part.slot.encode("ascii")
    if isinstance(part, Colored):
        value = _encode_cell(part, font_type, char)
        if not is_color:
            return bytes((value,))
        if part.bg > MAX_ATTRIBUTE_BG:
            raise BackgroundOutOfRangeError(char, part.bg)
        return bytes((value, pack_attribute(part.fg, part.bg, part.blink)))
    if isinstance(part, Char):
        value = _encode_cell(part, font_type, char)
        return bytes((value, DEFAULT_ATTRIBUTE)) if is_color else bytes((value,))
    raise TypeError(f"Unknown glyph part: {part!r}")


def encode_glyph(glyph: Glyph, font_type: FontType, char: str = "?") -> bytes:
    """Encode a glyph into its byte stream.

    Characters without a CP437 byte are written as '?'. Colors are only
    kept in color fonts; a plain Char in a color font gets the default
    light gray on black attribute.

    Args:
        glyph: Glyph to encode
        font_type: Type of the owning font
        char: Character being encoded, for error messages

    Returns:
        Width, height, tagged stream and 0x00 terminator

    Raises:
        GlyphTooLargeError: Width or height does not fit a byte
        ReservedCharacterError: A cell character encodes to a tag byte
        BackgroundOutOfRangeError: A color cell background is above 7
    """
    if glyph.width > 0xFF or glyph.height > 0xFF:
        raise GlyphTooLargeError(char, glyph.width, glyph.height)

    out = bytearray((glyph.width, glyph.height))
    for part in glyph.parts:
        out.extend(_encode_part(part, font_type, char))
    out.append(TERMINATOR)
    return bytes(out)
