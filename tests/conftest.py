"""Shared fixtures: fonts and bundle bytes built in memory."""

import struct

import pytest

from retrofont.domain import (
    END_MARKER,
    FILL_MARKER,
    HARD_BLANK,
    NEW_LINE,
    OUTLINE_HOLE,
    TDF_CHARACTERS,
    Char,
    Colored,
    FontRecord,
    FontType,
    Glyph,
    OutlinePlaceholder,
)
from retrofont.io.bundle import HEADER
from retrofont.io.figlet import GERMAN_CODES

NO_GLYPH = 0xFFFF


def build_record(
    name: bytes,
    type_byte: int,
    spacing: int,
    block: bytes,
    offsets: dict[str, int] | None = None,
    block_length: int | None = None,
) -> bytes:
    """Assemble raw record bytes, indicator through glyph block."""
    offsets = offsets or {}
    table = [offsets.get(ch, NO_GLYPH) for ch in TDF_CHARACTERS]
    if block_length is None:
        block_length = len(block)
    fields = struct.pack(
        "<B12s4sBBH", len(name), name, bytes(4), type_byte, spacing, block_length
    )
    return struct.pack("<I", 0xFF00AA55) + fields + struct.pack("<94H", *table) + block


def build_bundle(*records: bytes, terminator: bool = True) -> bytes:
    """Wrap raw records in a bundle header (and terminator)."""
    return HEADER + b"".join(records) + (b"\x00" if terminator else b"")


def build_figlet(extra: str = "", german: bool = False) -> str:
    """FIGlet font of height 2 defining 32..126 as '<ch>|' on both lines.

    '&' is drawn with '+' so converted fonts stay encodable. The seven
    German characters follow the printable range; they are left empty
    (undefined) unless ``german`` is set.
    """
    lines = ["flf2a$ 2 1 4 0 1", "test font"]
    for code in range(32, 127):
        art = "+" if code == ord("&") else chr(code)
        lines.append(f"{art}|@")
        lines.append(f"{art}|@@")
    for code in GERMAN_CODES:
        art = f"{chr(code)}|" if german else ""
        lines.append(f"{art}@")
        lines.append(f"{art}@@")
    return "\n".join(lines) + "\n" + extra


@pytest.fixture
def record_builder():
    """Builder for raw record bytes."""
    return build_record


@pytest.fixture
def bundle_builder():
    """Builder for raw bundle bytes."""
    return build_bundle


@pytest.fixture
def funtopia_bundle() -> bytes:
    """Single block font 'Funtopia', spacing 3, 0xE4 byte glyph block."""
    glyph_a = bytes((3, 2)) + b"ABC\rDEF\x00"
    block = glyph_a.ljust(0xE4, b"\x00")
    return build_bundle(build_record(b"Funtopia", 1, 3, block, {"A": 0}))


@pytest.fixture
def figlet_text() -> str:
    """FIGlet source holding only the required printable characters."""
    return build_figlet()


@pytest.fixture
def figlet_text_with_umlaut() -> str:
    """FIGlet source with an extra code-tagged 'Ä' (196)."""
    return build_figlet("196\nÄ|@\nÄ|@@\n")


@pytest.fixture
def figlet_text_with_german() -> str:
    """FIGlet source whose seven German characters carry art."""
    return build_figlet(german=True)


@pytest.fixture
def block_record() -> FontRecord:
    """Block font with a two-line 'A' and a hard blank in 'B'."""
    return FontRecord(
        name="BLOCKY",
        font_type=FontType.BLOCK,
        spacing=2,
        glyphs={
            "A": Glyph.from_parts([Char("█"), Char("▀"), NEW_LINE, Char("█"), Char("▄")]),
            "B": Glyph.from_parts([Char("B"), HARD_BLANK, Char("B")]),
        },
    )


@pytest.fixture
def color_record() -> FontRecord:
    """Color font with one blinking cell."""
    return FontRecord(
        name="COLORS",
        font_type=FontType.COLOR,
        spacing=1,
        glyphs={
            "C": Glyph.from_parts(
                [Colored("▓", 4, 1), HARD_BLANK, NEW_LINE, Colored("▒", 14, 0, blink=True)]
            ),
        },
    )


@pytest.fixture
def outline_record() -> FontRecord:
    """Outline font exercising every outline marker."""
    return FontRecord(
        name="OUTLINE",
        font_type=FontType.OUTLINE,
        spacing=1,
        glyphs={
            "O": Glyph.from_parts(
                [
                    OutlinePlaceholder("E"),
                    OutlinePlaceholder("A"),
                    OutlinePlaceholder("F"),
                    END_MARKER,
                    NEW_LINE,
                    OutlinePlaceholder("C"),
                    FILL_MARKER,
                    OUTLINE_HOLE,
                    HARD_BLANK,
                    END_MARKER,
                ]
            ),
        },
    )
