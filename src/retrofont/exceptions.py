"""Exception hierarchy for retrofont."""


class RetrofontError(Exception):
    """Base exception for all retrofont errors."""

    pass


class FontError(RetrofontError):
    """Errors related to font loading or saving."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontSaveError(FontError):
    """Error saving a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class ParseError(FontError):
    """A font source could not be decoded.

    Parse errors are fatal to the whole load: no partial font list is
    returned.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte 0x{offset:X})"
        super().__init__(message)


class TooShortError(ParseError):
    """Input ends before the bundle header is complete."""

    def __init__(self, offset: int | None = None) -> None:
        super().__init__("tdf: file too short", offset)


class IdLengthMismatchError(ParseError):
    """The header id length byte has an unexpected value."""

    def __init__(self, id_length: int) -> None:
        self.id_length = id_length
        super().__init__(f"tdf: id length mismatch {id_length}", 0)


class IdMismatchError(ParseError):
    """The header signature text is wrong."""

    def __init__(self) -> None:
        super().__init__("tdf: id mismatch", 1)


class IndicatorMismatchError(ParseError):
    """A font record does not start with the record indicator."""

    def __init__(self, indicator: int, offset: int) -> None:
        self.indicator = indicator
        super().__init__(f"tdf: font indicator mismatch 0x{indicator:08X}", offset)


class UnsupportedTypeError(ParseError):
    """A font record declares a type other than outline, block or color."""

    def __init__(self, type_byte: int, offset: int) -> None:
        self.type_byte = type_byte
        super().__init__(f"tdf: unsupported font type {type_byte}", offset)


class GlyphOffsetOutOfBlockError(ParseError):
    """An offset table entry points past the end of the glyph block."""

    def __init__(self, glyph_offset: int, block_length: int, char: str) -> None:
        self.glyph_offset = glyph_offset
        self.block_length = block_length
        self.char = char
        super().__init__(
            f"tdf: glyph '{char}' offset {glyph_offset} outside block of {block_length} bytes"
        )


class TruncatedRecordError(ParseError):
    """A font record field runs past the end of the input."""

    def __init__(self, field: str, offset: int) -> None:
        self.field = field
        super().__init__(f"tdf: truncated record, missing {field}", offset)


class MissingTerminatorError(ParseError):
    """A glyph stream ends without its 0x00 terminator."""

    def __init__(self, char: str, offset: int) -> None:
        self.char = char
        super().__init__(f"tdf: glyph '{char}' has no terminator", offset)


class FigletParseError(ParseError):
    """Malformed FIGlet (.flf) font data."""

    def __init__(self, reason: str, line: int | None = None) -> None:
        self.reason = reason
        self.line = line
        message = f"figlet: {reason}"
        if line is not None:
            message += f" (line {line})"
        super().__init__(message)


class SerializationError(FontError):
    """A font record cannot be represented in the bundle format."""

    pass


class NameTooLongError(SerializationError):
    """Font name exceeds the 12-byte name field."""

    def __init__(self, name: str, length: int) -> None:
        self.name = name
        self.length = length
        super().__init__(f"tdf: name '{name}' is {length} bytes, maximum is 12")


class GlyphBlockTooLargeError(SerializationError):
    """Encoded glyphs do not fit the 16-bit block length."""

    def __init__(self, font_name: str, size: int) -> None:
        self.font_name = font_name
        self.size = size
        super().__init__(f"tdf: glyph block of '{font_name}' is {size} bytes")


class GlyphTooLargeError(SerializationError):
    """Glyph width or height exceeds one byte."""

    def __init__(self, char: str, width: int, height: int) -> None:
        self.char = char
        super().__init__(f"tdf: glyph '{char}' is {width}x{height}, maximum is 255x255")


class ReservedCharacterError(SerializationError):
    """A glyph cell holds a character whose byte is a stream tag."""

    def __init__(self, char: str, cell: str, font_type: str) -> None:
        self.char = char
        self.cell = cell
        self.font_type = font_type
        super().__init__(
            f"tdf: glyph '{char}' contains {cell!r}, which is a tag byte in {font_type} fonts"
        )


class BackgroundOutOfRangeError(SerializationError):
    """A color cell background does not fit the three attribute bits."""

    def __init__(self, char: str, bg: int) -> None:
        self.char = char
        self.bg = bg
        super().__init__(f"tdf: glyph '{char}' uses background {bg}, maximum is 7")


class ConversionError(RetrofontError):
    """Errors converting between font formats.

    Conversion errors are recoverable: the caller may pick another target
    type, and already loaded fonts are left untouched.
    """

    pass


class IncompatibleCharacterSetError(ConversionError):
    """Source font defines characters the target format cannot hold."""

    def __init__(self, characters: list[str]) -> None:
        self.characters = characters
        shown = ", ".join(repr(c) for c in characters[:10])
        if len(characters) > 10:
            shown += f" (+{len(characters) - 10} more)"
        super().__init__(f"Characters outside '!'..'~' cannot be converted: {shown}")


class UnsupportedFontTypeError(ConversionError):
    """Target font type cannot be synthesized from the source."""

    def __init__(self, font_type: str, reason: str) -> None:
        self.font_type = font_type
        self.reason = reason
        super().__init__(f"Cannot convert to {font_type} font: {reason}")


class RenderError(RetrofontError):
    """Errors related to glyph rendering."""

    pass


class UndefinedGlyphError(RenderError):
    """Requested character has no glyph (strict rendering only)."""

    def __init__(self, char: str, font_name: str) -> None:
        self.char = char
        self.font_name = font_name
        super().__init__(f"Glyph {char!r} not defined in font '{font_name}'")
