"""TheDraw font (TDF) bundle codec.

Layout of a bundle (all integers little endian):

    id length (1) = 19 | "TheDraw FONTS file" (18) | 0x1A
    repeated font records
    0x00 bundle terminator

Each font record:

    indicator 0xFF00AA55 (4) | name length (1) | name, NUL padded (12)
    reserved (4) | type (1) | spacing (1) | glyph block length (2)
    offset table: 94 x 2 bytes for '!'..'~', 0xFFFF = no glyph
    glyph block

Several table entries may point at the same offset; such characters share
one glyph.
"""

import struct

import structlog

from retrofont.domain import TDF_CHARACTERS, TDF_NAME_LENGTH, FontRecord, FontType, Glyph
from retrofont.exceptions import (
    GlyphBlockTooLargeError,
    GlyphOffsetOutOfBlockError,
    IdLengthMismatchError,
    IdMismatchError,
    IndicatorMismatchError,
    NameTooLongError,
    TooShortError,
    TruncatedRecordError,
    UnsupportedTypeError,
)
from retrofont.io.cp437 import cp437_to_unicode, unicode_to_cp437
from retrofont.io.glyph_stream import decode_glyph, encode_glyph

logger = structlog.get_logger(__name__)

SIGNATURE = b"TheDraw FONTS file"
ID_LENGTH = len(SIGNATURE) + 1
CTRL_Z = 0x1A
HEADER = bytes((ID_LENGTH,)) + SIGNATURE + bytes((CTRL_Z,))
BUNDLE_TERMINATOR = 0x00

FONT_INDICATOR = 0xFF00AA55
NO_GLYPH = 0xFFFF
CHAR_TABLE_SIZE = len(TDF_CHARACTERS)
MAX_BLOCK_LENGTH = 0xFFFF

_INDICATOR = struct.Struct("<I")
# name length, name, reserved, type, spacing, block length
_RECORD_FIELDS = struct.Struct(f"<B{TDF_NAME_LENGTH}s4sBBH")
_OFFSET_TABLE = struct.Struct(f"<{CHAR_TABLE_SIZE}H")


def is_bundle(data: bytes) -> bool:
    """Check if data looks like a TDF bundle.

    Either the id length byte or the signature text is enough, so a
    damaged header still reaches the parser and fails with the specific
    header error.
    """
    return data[:1] == HEADER[:1] or data[1 : 1 + len(SIGNATURE)] == SIGNATURE


def _check_header(data: bytes) -> None:
    if not data:
        raise TooShortError(0)
    if data[0] != ID_LENGTH:
        raise IdLengthMismatchError(data[0])
    if len(data) < len(HEADER) - 1:
        raise TooShortError(len(data))
    if data[1 : 1 + len(SIGNATURE)] != SIGNATURE:
        raise IdMismatchError()
    if len(data) < len(HEADER) or data[len(HEADER) - 1] != CTRL_Z:
        raise TooShortError(len(HEADER) - 1)


def _require(data: bytes, pos: int, size: int, field: str) -> None:
    if pos + size > len(data):
        raise TruncatedRecordError(field, pos)


def _decode_name(raw: bytes, declared_length: int) -> str:
    name = raw[: min(declared_length, TDF_NAME_LENGTH)]
    nul = name.find(b"\x00")
    if nul >= 0:
        name = name[:nul]
    return cp437_to_unicode(name)


def _parse_record(data: bytes, pos: int, strict: bool) -> tuple[FontRecord, int]:
    """Parse one font record starting at the indicator.

    Returns:
        Tuple of (record, position after its glyph block)
    """
    start = pos

    _require(data, pos, _INDICATOR.size, "font indicator")
    (indicator,) = _INDICATOR.unpack_from(data, pos)
    if indicator != FONT_INDICATOR:
        raise IndicatorMismatchError(indicator, pos)
    pos += _INDICATOR.size

    _require(data, pos, _RECORD_FIELDS.size, "record header")
    name_length, raw_name, _reserved, type_byte, spacing, block_length = (
        _RECORD_FIELDS.unpack_from(data, pos)
    )
    type_offset = pos + 1 + TDF_NAME_LENGTH + 4
    try:
        font_type = FontType(type_byte)
    except ValueError:
        raise UnsupportedTypeError(type_byte, type_offset) from None
    pos += _RECORD_FIELDS.size

    _require(data, pos, _OFFSET_TABLE.size, "offset table")
    offsets = _OFFSET_TABLE.unpack_from(data, pos)
    pos += _OFFSET_TABLE.size

    for ch, glyph_offset in zip(TDF_CHARACTERS, offsets):
        if glyph_offset != NO_GLYPH and glyph_offset >= block_length:
            raise GlyphOffsetOutOfBlockError(glyph_offset, block_length, ch)

    _require(data, pos, block_length, "glyph block")
    block = data[pos : pos + block_length]
    pos += block_length

    decoded: dict[int, Glyph | None] = {}
    glyphs: dict[str, Glyph] = {}
    for ch, glyph_offset in zip(TDF_CHARACTERS, offsets):
        if glyph_offset == NO_GLYPH:
            continue
        if glyph_offset not in decoded:
            decoded[glyph_offset] = decode_glyph(
                block, glyph_offset, font_type, strict=strict, char=ch
            )
        glyph = decoded[glyph_offset]
        if glyph is not None:
            glyphs[ch] = glyph

    record = FontRecord(
        name=_decode_name(raw_name, name_length),
        font_type=font_type,
        spacing=spacing,
        glyphs=glyphs,
    )
    logger.debug(
        "Parsed font record",
        name=record.name,
        font_type=font_type.label,
        spacing=spacing,
        glyphs=record.glyph_count,
        shared_offsets=len(glyphs) - len(decoded),
        offset=start,
    )
    return record, pos


def parse_bundle(data: bytes, *, strict: bool = True) -> list[FontRecord]:
    """Parse a TDF bundle into its font records.

    Any error aborts the whole bundle; no partial list is returned. End of
    input in place of the 0x00 terminator is accepted as the end of the
    bundle.

    Args:
        data: Complete bundle bytes
        strict: Treat glyph streams without terminator as errors

    Returns:
        Font records in file order

    Raises:
        ParseError: Any subclass describing the first structural problem
    """
    _check_header(data)

    records: list[FontRecord] = []
    pos = len(HEADER)
    while pos < len(data):
        if data[pos] == BUNDLE_TERMINATOR:
            break
        record, pos = _parse_record(data, pos, strict)
        records.append(record)
    else:
        logger.debug("Bundle ended without terminator", records=len(records))

    logger.info("Parsed TDF bundle", records=len(records), size=len(data))
    return records


def serialize_record(record: FontRecord) -> bytes:
    """Encode one font record.

    Every present character gets its own glyph copy in the block; offsets
    are never shared.

    Args:
        record: Font record to encode

    Returns:
        Record bytes from indicator through glyph block

    Raises:
        NameTooLongError: Encoded name exceeds 12 bytes
        GlyphBlockTooLargeError: Glyph block exceeds 65535 bytes
        GlyphTooLargeError: A glyph size does not fit one byte
        ReservedCharacterError: A cell character encodes to a tag byte
        BackgroundOutOfRangeError: A color cell background is above 7
    """
    name = unicode_to_cp437(record.name)
    if len(name) > TDF_NAME_LENGTH:
        raise NameTooLongError(record.name, len(name))

    table: list[int] = []
    block = bytearray()
    for ch in TDF_CHARACTERS:
        glyph = record.glyphs.get(ch)
        if glyph is None:
            table.append(NO_GLYPH)
            continue
        table.append(len(block))
        block.extend(encode_glyph(glyph, record.font_type, ch))

    if len(block) > MAX_BLOCK_LENGTH:
        raise GlyphBlockTooLargeError(record.name, len(block))

    logger.debug(
        "Encoded font record",
        name=record.name,
        glyphs=record.glyph_count,
        block_length=len(block),
    )
    return (
        _INDICATOR.pack(FONT_INDICATOR)
        + _RECORD_FIELDS.pack(
            len(name), name, bytes(4), int(record.font_type), record.spacing, len(block)
        )
        + _OFFSET_TABLE.pack(*table)
        + bytes(block)
    )


def serialize_bundle(records: list[FontRecord]) -> bytes:
    """Encode font records as a complete bundle with terminator."""
    body = b"".join(serialize_record(record) for record in records)
    return HEADER + body + bytes((BUNDLE_TERMINATOR,))
