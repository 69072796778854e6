"""Font I/O layer for retrofont.

This module handles the byte-level encodings and file access:

- CP437 byte/character table
- TDF glyph part streams and bundle records
- FIGlet text fonts
- Format detection and archive unwrapping

Key classes:
- FontReader: Load font files and expose their fonts
- FontWriter: Save font records as a TDF bundle
"""

from retrofont.io.bundle import is_bundle, parse_bundle, serialize_bundle, serialize_record
from retrofont.io.cp437 import (
    FALLBACK_BYTE,
    cp437_to_unicode,
    decode_byte,
    encode_char,
    unicode_to_cp437,
)
from retrofont.io.figlet import is_figlet, parse_figlet, parse_header
from retrofont.io.glyph_stream import decode_glyph, encode_glyph, pack_attribute, unpack_attribute
from retrofont.io.reader import FontReader, load_fonts_from_bytes, unwrap_archive
from retrofont.io.writer import FontWriter

__all__ = [
    "FALLBACK_BYTE",
    "FontReader",
    "FontWriter",
    "cp437_to_unicode",
    "decode_byte",
    "decode_glyph",
    "encode_char",
    "encode_glyph",
    "is_bundle",
    "is_figlet",
    "load_fonts_from_bytes",
    "pack_attribute",
    "parse_bundle",
    "parse_figlet",
    "parse_header",
    "serialize_bundle",
    "serialize_record",
    "unicode_to_cp437",
    "unpack_attribute",
    "unwrap_archive",
]
