"""Unit tests for the TDF bundle codec."""

import pytest

from retrofont.domain import NEW_LINE, TDF_CHARACTERS, Char, FontRecord, FontType, Glyph
from retrofont.exceptions import (
    GlyphBlockTooLargeError,
    GlyphOffsetOutOfBlockError,
    IdLengthMismatchError,
    IdMismatchError,
    IndicatorMismatchError,
    MissingTerminatorError,
    NameTooLongError,
    ParseError,
    TooShortError,
    TruncatedRecordError,
    UnsupportedTypeError,
)
from retrofont.io.bundle import (
    FONT_INDICATOR,
    HEADER,
    NO_GLYPH,
    is_bundle,
    parse_bundle,
    serialize_bundle,
    serialize_record,
)

SINGLE_GLYPH = bytes((1, 1)) + b"x\x00"


class TestBundleHeader:
    """Tests for header validation."""

    def test_header_bytes(self):
        """Test the header layout."""
        assert HEADER == b"\x13TheDraw FONTS file\x1a"
        assert is_bundle(HEADER)
        assert not is_bundle(b"flf2a$ 1 1 1 0 0")

    @pytest.mark.parametrize(
        "data",
        [b"\x14TheDraw FONTS file\x1a", b"\x13TheDraw", b"\x13" + b"X" * 18 + b"\x1a"],
    )
    def test_damaged_header_detected(self, data):
        """Test a header with only the id length or only the signature still counts."""
        assert is_bundle(data)

    def test_empty_input(self):
        """Test empty input is too short."""
        with pytest.raises(TooShortError):
            parse_bundle(b"")

    def test_id_length_mismatch(self):
        """Test a wrong first byte."""
        with pytest.raises(IdLengthMismatchError) as exc_info:
            parse_bundle(b"\x14TheDraw FONTS file\x1a")
        assert exc_info.value.id_length == 0x14

    def test_header_cut_short(self):
        """Test input ending inside the signature."""
        with pytest.raises(TooShortError):
            parse_bundle(b"\x13TheDraw")

    def test_signature_mismatch(self):
        """Test a wrong signature text."""
        with pytest.raises(IdMismatchError):
            parse_bundle(b"\x13" + b"X" * 18 + b"\x1a")

    def test_missing_ctrl_z(self):
        """Test a header without its 0x1A byte."""
        with pytest.raises(TooShortError):
            parse_bundle(HEADER[:-1])
        with pytest.raises(TooShortError):
            parse_bundle(HEADER[:-1] + b"\x00")

    def test_errors_are_parse_errors(self):
        """Test header errors share the ParseError base."""
        with pytest.raises(ParseError, match="at byte"):
            parse_bundle(b"\x00")


class TestParseBundle:
    """Tests for parse_bundle."""

    def test_funtopia_sample(self, funtopia_bundle):
        """Test the sample record parses with its stored values."""
        assert funtopia_bundle[0] == 0x13
        records = parse_bundle(funtopia_bundle)

        assert len(records) == 1
        record = records[0]
        assert record.name == "Funtopia"
        assert record.font_type is FontType.BLOCK
        assert record.spacing == 3
        assert record.glyph_count == 1
        glyph = record.glyphs["A"]
        assert (glyph.width, glyph.height) == (3, 2)
        assert [part.ch for line in glyph.iter_lines() for part in line] == list("ABCDEF")

    def test_header_only(self, bundle_builder):
        """Test empty bundles with and without terminator."""
        assert parse_bundle(bundle_builder()) == []
        assert parse_bundle(bundle_builder(terminator=False)) == []

    def test_several_records(self, record_builder, bundle_builder):
        """Test records come back in file order."""
        data = bundle_builder(
            record_builder(b"ONE", 0, 1, SINGLE_GLYPH, {"A": 0}),
            record_builder(b"TWO", 1, 2, SINGLE_GLYPH, {"B": 0}),
            record_builder(b"THREE", 2, 3, bytes((1, 1)) + b"x\x1f\x00", {"C": 0}),
        )
        records = parse_bundle(data)
        assert [r.name for r in records] == ["ONE", "TWO", "THREE"]
        assert [r.font_type for r in records] == [
            FontType.OUTLINE,
            FontType.BLOCK,
            FontType.COLOR,
        ]

    def test_data_after_terminator_ignored(self, record_builder, bundle_builder):
        """Test parsing stops at the bundle terminator."""
        data = bundle_builder(record_builder(b"ONE", 1, 1, SINGLE_GLYPH, {"A": 0}))
        assert len(parse_bundle(data + b"garbage")) == 1

    def test_missing_bundle_terminator(self, record_builder, bundle_builder):
        """Test end of input is accepted in place of the terminator."""
        data = bundle_builder(
            record_builder(b"ONE", 1, 1, SINGLE_GLYPH, {"A": 0}), terminator=False
        )
        assert len(parse_bundle(data)) == 1

    def test_empty_font(self, record_builder, bundle_builder):
        """Test a record without glyphs."""
        records = parse_bundle(bundle_builder(record_builder(b"EMPTY", 1, 0, b"")))
        assert records[0].glyph_count == 0

    def test_shared_offsets(self, record_builder, bundle_builder):
        """Test characters pointing at one offset share the glyph."""
        data = bundle_builder(record_builder(b"ALIAS", 1, 1, SINGLE_GLYPH, {"A": 0, "a": 0}))
        record = parse_bundle(data)[0]
        assert record.glyphs["A"] is record.glyphs["a"]

    def test_name_length_byte(self, record_builder, bundle_builder):
        """Test the name is cut at the declared length and at NUL."""
        data = bundle_builder(record_builder(b"Funtopia", 1, 0, b""))
        data = data.replace(b"\x08Funtopia", b"\x03Funtopia")
        assert parse_bundle(data)[0].name == "Fun"

    def test_name_cp437(self, record_builder, bundle_builder):
        """Test names decode through CP437."""
        data = bundle_builder(record_builder(b"\x8eRGER", 1, 0, b""))
        assert parse_bundle(data)[0].name == "ÄRGER"


class TestParseErrors:
    """Tests for record level parse errors."""

    def test_indicator_mismatch(self, bundle_builder):
        """Test a record not starting with the indicator."""
        with pytest.raises(IndicatorMismatchError) as exc_info:
            parse_bundle(bundle_builder(b"\x01\x02\x03\x04"))
        assert exc_info.value.indicator == 0x04030201
        assert exc_info.value.offset == len(HEADER)

    def test_truncated_indicator(self):
        """Test input ending inside the indicator."""
        with pytest.raises(TruncatedRecordError, match="font indicator"):
            parse_bundle(HEADER + b"\x55\xaa")

    def test_unsupported_type(self, record_builder, bundle_builder):
        """Test a type byte other than 0, 1 or 2."""
        with pytest.raises(UnsupportedTypeError) as exc_info:
            parse_bundle(bundle_builder(record_builder(b"BAD", 3, 0, b"")))
        assert exc_info.value.type_byte == 3

    def test_truncated_record_header(self, record_builder):
        """Test input ending inside the fixed record fields."""
        record = record_builder(b"CUT", 1, 0, b"")
        with pytest.raises(TruncatedRecordError, match="record header"):
            parse_bundle(HEADER + record[:10])

    def test_truncated_offset_table(self, record_builder):
        """Test input ending in the middle of the offset table."""
        record = record_builder(b"CUT", 1, 1, SINGLE_GLYPH, {"A": 0})
        with pytest.raises(TruncatedRecordError, match="offset table"):
            parse_bundle(HEADER + record[: 4 + 20 + 50])

    def test_offset_out_of_block(self, record_builder, bundle_builder):
        """Test an offset past the glyph block."""
        data = bundle_builder(record_builder(b"OUT", 1, 1, SINGLE_GLYPH, {"B": 10}))
        with pytest.raises(GlyphOffsetOutOfBlockError) as exc_info:
            parse_bundle(data)
        assert exc_info.value.char == "B"
        assert exc_info.value.glyph_offset == 10
        assert exc_info.value.block_length == len(SINGLE_GLYPH)

    def test_truncated_glyph_block(self, record_builder):
        """Test a block length larger than the remaining input."""
        record = record_builder(b"CUT", 1, 1, SINGLE_GLYPH, {"A": 0}, block_length=100)
        with pytest.raises(TruncatedRecordError, match="glyph block"):
            parse_bundle(HEADER + record)

    def test_missing_terminator_policies(self, record_builder, bundle_builder):
        """Test strict and lenient handling of an unterminated glyph."""
        data = bundle_builder(record_builder(b"OPEN", 1, 1, bytes((1, 1)) + b"x", {"A": 0}))

        with pytest.raises(MissingTerminatorError):
            parse_bundle(data)

        record = parse_bundle(data, strict=False)[0]
        assert record.glyphs["A"].parts == (Char("x"),)


class TestSerialize:
    """Tests for serialize_record and serialize_bundle."""

    def test_record_layout(self):
        """Test the fixed fields and fresh offsets."""
        glyph = Glyph.from_parts([Char("x")])
        record = FontRecord(
            name="Fun", font_type=FontType.BLOCK, spacing=3, glyphs={"!": glyph, "#": glyph}
        )
        data = serialize_record(record)

        assert int.from_bytes(data[:4], "little") == FONT_INDICATOR
        assert data[4] == 3
        assert data[5:17] == b"Fun" + bytes(9)
        assert data[21:23] == bytes((1, 3))
        assert int.from_bytes(data[23:25], "little") == 2 * len(SINGLE_GLYPH)

        table = data[25 : 25 + 188]
        assert int.from_bytes(table[0:2], "little") == 0
        assert int.from_bytes(table[2:4], "little") == NO_GLYPH
        assert int.from_bytes(table[4:6], "little") == len(SINGLE_GLYPH)
        assert data[25 + 188 :] == SINGLE_GLYPH * 2

    def test_every_offset_inside_block(self, block_record):
        """Test written offsets all point inside the block."""
        data = serialize_record(block_record)
        block_length = int.from_bytes(data[23:25], "little")
        table = data[25 : 25 + 188]
        offsets = [int.from_bytes(table[i : i + 2], "little") for i in range(0, 188, 2)]
        assert all(o < block_length for o in offsets if o != NO_GLYPH)

    def test_name_too_long(self):
        """Test names over 12 bytes are rejected."""
        record = FontRecord(name="ThirteenChars", font_type=FontType.BLOCK)
        with pytest.raises(NameTooLongError):
            serialize_record(record)

    def test_block_too_large(self):
        """Test glyph blocks over 65535 bytes are rejected."""
        row = [Char("#")] * 240
        big = Glyph.from_parts(row + [NEW_LINE] + row + [NEW_LINE] + row)
        record = FontRecord(
            name="HUGE",
            font_type=FontType.BLOCK,
            glyphs={ch: big for ch in TDF_CHARACTERS},
        )
        with pytest.raises(GlyphBlockTooLargeError):
            serialize_record(record)

    def test_bundle_framing(self, block_record):
        """Test a bundle is header, records and terminator."""
        data = serialize_bundle([block_record])
        assert data.startswith(HEADER)
        assert data.endswith(b"\x00")
        assert data[len(HEADER) : -1] == serialize_record(block_record)

    def test_empty_bundle(self):
        """Test an empty bundle is header plus terminator."""
        assert serialize_bundle([]) == HEADER + b"\x00"
