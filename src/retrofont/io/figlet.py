"""FIGlet (.flf) font parser.

A FIGlet font is a text file:

- header line: ``flf2a<hardblank> height baseline max_length old_layout
  comment_lines [print_direction [full_layout [codetag_count]]]``
- ``comment_lines`` lines of free text
- required characters 32..126 followed by the seven German extras, each
  ``height`` lines terminated by an end mark (usually ``@``, doubled on
  the last line)
- optional code-tagged characters: a line holding the character code,
  then ``height`` glyph lines

Hard blank characters become HardBlank parts; everything else is a Char.
"""

import structlog

from retrofont.domain import HARD_BLANK, NEW_LINE, Char, FigletFont, FigletHeader, Glyph, GlyphPart
from retrofont.exceptions import FigletParseError

logger = structlog.get_logger(__name__)

SIGNATURE = "flf2a"
REQUIRED_CODES = tuple(range(32, 127))
GERMAN_CODES = (196, 214, 220, 228, 246, 252, 223)


def is_figlet(data: bytes) -> bool:
    """Check if data starts with a FIGlet header."""
    return data.startswith(SIGNATURE.encode("ascii"))


def parse_header(line: str) -> FigletHeader:
    """Parse a FIGlet header line.

    Args:
        line: First line of the font file

    Returns:
        Parsed header

    Raises:
        FigletParseError: If the signature or a numeric field is invalid
    """
    if not line.startswith(SIGNATURE) or len(line) <= len(SIGNATURE):
        raise FigletParseError("not a flf2a header", 1)

    hard_blank = line[len(SIGNATURE)]
    fields = line[len(SIGNATURE) + 1 :].split()
    if len(fields) < 5:
        raise FigletParseError("incomplete header", 1)
    try:
        values = [int(field) for field in fields[:8]]
    except ValueError as e:
        raise FigletParseError(f"invalid header field: {e}", 1) from e

    optional = values[5:] + [None] * (8 - len(values))
    return FigletHeader(
        hard_blank=hard_blank,
        height=values[0],
        baseline=values[1],
        max_length=values[2],
        old_layout=values[3],
        comment_lines=values[4],
        print_direction=optional[0],
        full_layout=optional[1],
        codetag_count=optional[2],
    )


def _strip_end_marks(line: str) -> str:
    line = line.rstrip()
    if not line:
        return line
    end_mark = line[-1]
    return line.rstrip(end_mark)


def _parse_code(token: str, line_no: int) -> int:
    negative = token.startswith("-")
    digits = token[1:] if negative else token
    try:
        if digits[:2].lower() == "0x":
            value = int(digits[2:], 16)
        elif len(digits) > 1 and digits.startswith("0"):
            value = int(digits[1:], 8)
        else:
            value = int(digits)
    except ValueError:
        raise FigletParseError(f"invalid character code {token!r}", line_no) from None
    return -value if negative else value


def _rows_to_glyph(rows: list[str], hard_blank: str) -> Glyph | None:
    if not any(rows):
        return None
    parts: list[GlyphPart] = []
    for idx, row in enumerate(rows):
        if idx > 0:
            parts.append(NEW_LINE)
        for ch in row:
            parts.append(HARD_BLANK if ch == hard_blank else Char(ch))
    return Glyph(width=max(len(row) for row in rows), height=len(rows), parts=tuple(parts))


class _LineCursor:
    """Sequential access to the font's lines with 1-based line numbers."""

    def __init__(self, lines: list[str], start: int) -> None:
        self._lines = lines
        self._pos = start

    @property
    def line_no(self) -> int:
        return self._pos + 1

    def at_end(self) -> bool:
        return self._pos >= len(self._lines)

    def next_line(self) -> str:
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def read_rows(self, height: int) -> list[str]:
        rows: list[str] = []
        for _ in range(height):
            if self.at_end():
                raise FigletParseError("incomplete character", self.line_no)
            rows.append(_strip_end_marks(self.next_line()))
        return rows


def parse_figlet(text: str, name: str = "figlet") -> FigletFont:
    """Parse FIGlet font text.

    A font that stops before all required characters is accepted with the
    characters it has. Characters whose lines are all empty are treated
    as undefined.

    Args:
        text: Complete .flf file content
        name: Name to give the font

    Returns:
        Parsed FIGlet font

    Raises:
        FigletParseError: If the header or a character block is malformed
    """
    lines = text.splitlines()
    if not lines:
        raise FigletParseError("missing header")

    header = parse_header(lines[0])
    if header.height < 1:
        raise FigletParseError(f"invalid height {header.height}", 1)

    comment_end = 1 + header.comment_lines
    if comment_end > len(lines):
        raise FigletParseError("file ends inside the comment block", len(lines))
    comments = tuple(lines[1:comment_end])

    cursor = _LineCursor(lines, comment_end)
    glyphs: dict[str, Glyph] = {}

    for code in REQUIRED_CODES + GERMAN_CODES:
        if cursor.at_end():
            logger.debug("FIGlet font ends before required character", code=code)
            break
        glyph = _rows_to_glyph(cursor.read_rows(header.height), header.hard_blank)
        if glyph is not None:
            glyphs[chr(code)] = glyph

    while not cursor.at_end():
        tag_line_no = cursor.line_no
        tag = cursor.next_line().strip()
        if not tag:
            continue
        code = _parse_code(tag.split()[0], tag_line_no)
        rows = cursor.read_rows(header.height)
        if code < 0 or code > 0x10FFFF:
            logger.debug("Skipping code-tagged character", code=code, line=tag_line_no)
            continue
        glyph = _rows_to_glyph(rows, header.hard_blank)
        if glyph is not None:
            glyphs[chr(code)] = glyph

    logger.info("Parsed FIGlet font", name=name, glyphs=len(glyphs), height=header.height)
    return FigletFont(name=name, header=header, comments=comments, glyphs=glyphs)
