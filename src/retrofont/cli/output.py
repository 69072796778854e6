"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with font tables, formatted messages and colored rendering of cell
buffers in the DOS text mode palette.
"""

from collections.abc import Iterable

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from retrofont.domain import Cell, Font, FontRecord, font_format

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

# VGA text mode colors, indexed by attribute nibble
DOS_PALETTE = (
    "#000000",  # black
    "#0000aa",  # blue
    "#00aa00",  # green
    "#00aaaa",  # cyan
    "#aa0000",  # red
    "#aa00aa",  # magenta
    "#aa5500",  # brown
    "#aaaaaa",  # light gray
    "#555555",  # dark gray
    "#5555ff",  # light blue
    "#55ff55",  # light green
    "#55ffff",  # light cyan
    "#ff5555",  # light red
    "#ff55ff",  # light magenta
    "#ffff55",  # yellow
    "#ffffff",  # white
)


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Retrofont[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_format_name: str, font_count: int) -> None:
    """Print font file information.

    Args:
        font_path: Path to the font file
        font_format_name: "TDF" or "FIGlet"
        font_count: Number of fonts in the file
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    line.append(f" ({font_format_name})")
    console.print(line)
    plural = "font" if font_count == 1 else "fonts"
    console.print(f"  {font_count} {plural}")


def cell_style(cell: Cell) -> Style | None:
    """Map a cell's color attributes to a rich style.

    Returns:
        Style for colored or blinking cells, None for plain ones
    """
    if not cell.is_colored() and not cell.blink and not cell.bold:
        return None
    return Style(
        color=DOS_PALETTE[cell.fg % 16] if cell.fg is not None else None,
        bgcolor=DOS_PALETTE[cell.bg % 16] if cell.bg is not None else None,
        blink=cell.blink,
        bold=cell.bold,
    )


def cells_to_text(lines: Iterable[Iterable[Cell]]) -> Text:
    """Build a rich Text from rows of cells."""
    text = Text()
    for index, row in enumerate(lines):
        if index:
            text.append("\n")
        for cell in row:
            text.append(cell.ch, style=cell_style(cell))
    return text


def print_rendered(lines: Iterable[Iterable[Cell]]) -> None:
    """Print rendered cell rows with their colors."""
    console.print(cells_to_text(lines), soft_wrap=True, highlight=False)


def _characters(font: Font) -> str:
    return "".join(ch for ch, _ in font.iter_glyphs())


def print_font_table(fonts: list[Font]) -> None:
    """Print one table row per font.

    Args:
        fonts: Fonts in file order
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Format")
    table.add_column("Type")
    table.add_column("Spacing", justify="right")
    table.add_column("Glyphs", justify="right")
    table.add_column("Characters", overflow="fold")

    for number, font in enumerate(fonts, start=1):
        font_type = font.font_type.label if isinstance(font, FontRecord) else "-"
        table.add_row(
            str(number),
            Text(font.name),
            font_format(font),
            font_type,
            str(font.spacing),
            str(font.glyph_count),
            Text(_characters(font)),
        )

    console.print(table)


def print_success(output_path: str, file_size: int, font_name: str, glyph_count: int) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Bytes written
        font_name: Name stored in the record
        glyph_count: Glyphs in the record
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    # Output file info
    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size:,} B)")
    console.print(line)

    stats = Text("  ")
    stats.append(font_name)
    stats.append(f" {SYM_DOT} {glyph_count} glyphs")
    console.print(stats)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    # Messages quote font data, so they must not be read as markup
    line = Text("\n")
    line.append(f"{SYM_ERR} Error:", style="bold red")
    line.append(f" {message}")
    console.print(line)
    if details:
        console.print(Text(f"  {details}"))
