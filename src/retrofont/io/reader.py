"""Font reader for loading TDF bundles and FIGlet fonts.

This module provides the FontReader class for loading font files and
detecting their format. ZIP and gzip archives are unwrapped before
parsing, so the parsers only ever see plain font bytes.
"""

import gzip
import io
import zipfile
import zlib
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

import structlog

from retrofont.config import ParserConfig
from retrofont.domain import Font, font_format
from retrofont.exceptions import FontFormatError, FontLoadError
from retrofont.io.bundle import is_bundle, parse_bundle
from retrofont.io.figlet import is_figlet, parse_figlet

logger = structlog.get_logger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
GZIP_MAGIC = b"\x1f\x8b"
FONT_SUFFIXES = (".flf", ".tdf")


def unwrap_archive(data: bytes, name: str) -> tuple[bytes, str]:
    """Extract font bytes from a ZIP or gzip container.

    Plain data is returned unchanged. From a ZIP archive the first member
    with a .flf or .tdf suffix is used.

    Args:
        data: Raw file content
        name: Font name derived from the file name

    Returns:
        Tuple of (font bytes, font name)

    Raises:
        FontFormatError: If the archive holds no font or is corrupt
    """
    if data.startswith(GZIP_MAGIC):
        try:
            return gzip.decompress(data), name
        except (OSError, EOFError, zlib.error) as e:
            raise FontFormatError(name, f"corrupt gzip stream: {e}") from e

    if data.startswith(ZIP_MAGIC):
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                for member in archive.namelist():
                    member_path = PurePosixPath(member)
                    if member_path.suffix.lower() in FONT_SUFFIXES:
                        logger.debug("Using archive member", member=member)
                        return archive.read(member), member_path.stem
        except zipfile.BadZipFile as e:
            raise FontFormatError(name, f"corrupt zip archive: {e}") from e
        raise FontFormatError(name, "zip archive contains no .flf or .tdf font")

    return data, name


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def load_fonts_from_bytes(
    data: bytes,
    name: str = "font",
    config: ParserConfig | None = None,
) -> list[Font]:
    """Detect the format of font bytes and parse them.

    Args:
        data: File content, optionally inside a ZIP or gzip archive
        name: Name for FIGlet fonts (TDF records carry their own names)
        config: Parsing policy

    Returns:
        One FIGlet font, or one record per font in a TDF bundle

    Raises:
        FontFormatError: If the data is neither format
        ParseError: If the data is malformed
    """
    config = config or ParserConfig()
    data, name = unwrap_archive(data, name)

    if is_bundle(data):
        fonts: list[Font] = list(parse_bundle(data, strict=config.strict_terminator))
    elif is_figlet(data):
        fonts = [parse_figlet(_decode_text(data), name=name)]
    else:
        raise FontFormatError(name, "neither a TDF bundle nor a FIGlet font")

    return fonts


class FontReader:
    """Loads font files and exposes the fonts they contain.

    Example:
        reader = FontReader(Path("fonts.tdf"))
        reader.load()
        for font in reader.iter_fonts():
            print(font.name)
    """

    def __init__(self, font_path: Path, config: ParserConfig | None = None) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to a .tdf, .flf or archived font file
            config: Parsing policy
        """
        self._font_path = font_path
        self._config = config or ParserConfig()
        self._fonts: list[Font] | None = None

    def load(self) -> None:
        """Load and parse the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be read
            FontFormatError: If the format is not recognized
            ParseError: If the file content is malformed
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            data = self._font_path.read_bytes()
        except OSError as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        self._fonts = load_fonts_from_bytes(data, name=self._font_path.stem, config=self._config)
        logger.info(
            "Font file loaded",
            path=str(self._font_path),
            fonts=len(self._fonts),
            format=self.format,
        )

    @property
    def fonts(self) -> list[Font]:
        """Return all fonts in file order.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._fonts is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return list(self._fonts)

    @property
    def format(self) -> str:
        """Return 'TDF' or 'FIGlet'.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        fonts = self.fonts
        if not fonts:
            return "TDF"
        return font_format(fonts[0])

    @property
    def font_count(self) -> int:
        """Return the number of fonts in the file."""
        return len(self.fonts)

    def iter_fonts(self) -> Iterator[Font]:
        """Iterate over fonts in file order."""
        yield from self.fonts

    def get_font(self, number: int) -> Font:
        """Get a font by its 1-based position in the file.

        Raises:
            IndexError: If no font has that number
        """
        fonts = self.fonts
        if not 1 <= number <= len(fonts):
            raise IndexError(
                f"Font #{number} does not exist, file contains {len(fonts)} font(s)"
            )
        return fonts[number - 1]

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self._fonts = None
