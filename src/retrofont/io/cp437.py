"""CP437 (IBM PC) character set conversion.

Both font formats store character cells as bytes of the DOS code page.
Control bytes 0x01-0x1F map to their visible glyphs (smileys, arrows,
card suits), except the few that carry meaning in a text stream.
"""

from types import MappingProxyType

_LOW_CONTROL = (
    "\x00☺☻♥♦♣♠•"
    "\x08\x09\x0a♂♀\x0d♫☼"
    "►◄↕‼¶§▬↨"
    "↑↓\x1a\x1b∟↔▲▼"
)

CP437_TO_UNICODE: tuple[str, ...] = tuple(
    _LOW_CONTROL
    + bytes(range(0x20, 0x80)).decode("ascii")
    + bytes(range(0x80, 0x100)).decode("cp437")
)

# Built once at import; NUL is never a reverse target so stray '\0'
# characters cannot sneak into output.
UNICODE_TO_CP437: MappingProxyType[str, int] = MappingProxyType(
    {
        char: idx
        for idx, char in reversed(list(enumerate(CP437_TO_UNICODE)))
        if char != "\x00"
    }
)

FALLBACK_BYTE = 0x3F  # '?'


def decode_byte(value: int) -> str:
    """Convert one CP437 byte to its unicode character."""
    return CP437_TO_UNICODE[value]


def encode_char(char: str) -> int:
    """Convert a unicode character to its CP437 byte, '?' if unmappable."""
    return UNICODE_TO_CP437.get(char, FALLBACK_BYTE)


def cp437_to_unicode(data: bytes) -> str:
    """Convert CP437-encoded bytes to Unicode string."""
    return "".join(CP437_TO_UNICODE[b] for b in data)


def unicode_to_cp437(text: str) -> bytes:
    """Convert Unicode string to CP437 bytes."""
    return bytes(encode_char(char) for char in text)
