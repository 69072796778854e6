"""CLI application entry point for retrofont.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from retrofont import __version__
from retrofont.cli.output import (
    console,
    print_error,
    print_font_info,
    print_font_table,
    print_header,
    print_rendered,
    print_step,
    print_success,
)
from retrofont.config import (
    OUTLINE_STYLE_COUNT,
    ConversionConfig,
    LoggingConfig,
    ParserConfig,
    RenderMode,
    RenderOptions,
    RetrofontSettings,
    get_default_settings,
)
from retrofont.core import LayoutBuffer, convert, render_text, restrict_to_printable
from retrofont.domain import FigletFont, FontType
from retrofont.exceptions import FontLoadError, FontSaveError, RetrofontError
from retrofont.io import FontReader, FontWriter
from retrofont.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

FONT_TYPES = {
    "outline": FontType.OUTLINE,
    "block": FontType.BLOCK,
    "color": FontType.COLOR,
}

# Create the Typer app
app = typer.Typer(
    name="retrofont",
    help="Render, inspect and convert TheDraw and FIGlet fonts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Retrofont[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    lenient: Annotated[
        bool,
        typer.Option(
            "--lenient",
            help="Accept TDF glyphs that end without their terminator",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render, inspect and convert TheDraw (.tdf) and FIGlet (.flf) fonts."""
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = RetrofontSettings(
        parser=ParserConfig(strict_terminator=not lenient),
        logging=LoggingConfig(log_file=log_file, log_level=log_level.upper()),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
    )
    ctx.obj = settings


def _settings(ctx: typer.Context) -> RetrofontSettings:
    """Settings built by the global options, or the defaults."""
    if isinstance(ctx.obj, RetrofontSettings):
        return ctx.obj
    return get_default_settings()


def _require_file(path: Path) -> None:
    """Exit with an error unless path is an existing file."""
    if not path.exists():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not path.is_file():
        print_error(
            f"Input path is not a file: {path}",
            details="Please provide a path to a .tdf or .flf font file.",
        )
        raise typer.Exit(code=1)


@app.command()
def render(
    ctx: typer.Context,
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="Path to a .tdf or .flf font (may be zipped or gzipped)",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Option(
            "--text",
            "-t",
            help="Text to render",
            show_default=False,
        ),
    ],
    edit: Annotated[
        bool,
        typer.Option(
            "--edit",
            help="Show hard blanks and outline markers",
        ),
    ] = False,
    outline: Annotated[
        int,
        typer.Option(
            "--outline",
            help=f"Outline style (0-{OUTLINE_STYLE_COUNT - 1})",
            min=0,
            max=OUTLINE_STYLE_COUNT - 1,
        ),
    ] = 0,
    fg: Annotated[
        int | None,
        typer.Option(
            "--fg",
            help="Foreground for cells without color (0-15)",
            min=0,
            max=15,
        ),
    ] = None,
    bg: Annotated[
        int | None,
        typer.Option(
            "--bg",
            help="Background for cells without color (0-15)",
            min=0,
            max=15,
        ),
    ] = None,
    num: Annotated[
        int,
        typer.Option(
            "--num",
            "-n",
            help="Font number in a TDF bundle (1-based, see 'inspect')",
            min=1,
        ),
    ] = 1,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on characters the font does not define",
        ),
    ] = False,
) -> None:
    """Render text with a font.

    Example:
        retrofont render --font STAR.TDF --text HELLO --outline 5
    """
    _require_file(font)

    options = RenderOptions(
        mode=RenderMode.EDIT if edit else RenderMode.DISPLAY,
        outline_style=outline,
        strict=strict,
    )

    try:
        reader = FontReader(font, _settings(ctx).parser)
        reader.load()
        try:
            selected = reader.get_font(num)
        except IndexError as e:
            print_error(str(e), details="Use 'retrofont inspect' to list available fonts.")
            raise typer.Exit(code=1)

        buffer = LayoutBuffer()
        render_text(selected, text, buffer, options)
    except RetrofontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    lines = buffer.lines
    if fg is not None or bg is not None:
        lines = [[cell.with_default_colors(fg, bg) for cell in row] for row in lines]
    print_rendered(lines)


@app.command(name="convert")
def convert_font(
    ctx: typer.Context,
    input_path: Annotated[
        Path,
        typer.Option(
            "--input",
            "-i",
            help="Path to the FIGlet (.flf) font to convert",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.tdf)",
        ),
    ] = None,
    font_type: Annotated[
        str,
        typer.Option(
            "--type",
            help="Target font type (block|color|outline)",
        ),
    ] = "color",
    printable_only: Annotated[
        bool,
        typer.Option(
            "--printable-only",
            help="Drop characters outside '!'..'~' instead of failing",
        ),
    ] = False,
    spacing: Annotated[
        int,
        typer.Option(
            "--spacing",
            help="Letter spacing of the converted font",
            min=0,
            max=255,
        ),
    ] = 1,
    fg: Annotated[
        int,
        typer.Option(
            "--fg",
            help="Foreground of color fonts (0-15)",
            min=0,
            max=15,
        ),
    ] = 7,
    bg: Annotated[
        int,
        typer.Option(
            "--bg",
            help="Background of color fonts (0-7)",
            min=0,
            max=7,
        ),
    ] = 0,
) -> None:
    """Convert a FIGlet font to a TheDraw font.

    Example:
        retrofont convert --input doom.flf --type block

    This will create doom.tdf holding one block font.
    """
    _require_file(input_path)

    target_type = FONT_TYPES.get(font_type.lower())
    if target_type is None:
        print_error(
            f"Invalid font type: {font_type}",
            details=f"Valid values: {', '.join(FONT_TYPES)}",
        )
        raise typer.Exit(code=1)

    config = ConversionConfig(default_fg=fg, default_bg=bg, spacing=spacing)
    output_path = output if output is not None else FontWriter.get_converted_path(input_path)

    print_header(__version__)

    try:
        print_step("Loading font")
        reader = FontReader(input_path, _settings(ctx).parser)
        reader.load()
        print_font_info(str(input_path), reader.format, reader.font_count)

        source = reader.get_font(1)
        if not isinstance(source, FigletFont):
            print_error(
                "Convert only accepts FIGlet fonts",
                details=f"'{input_path}' is a {reader.format} file.",
            )
            raise typer.Exit(code=1)

        if printable_only:
            source = restrict_to_printable(source)

        print_step(f"Converting to {target_type.label}")
        record = convert(source, target_type, config)

        writer = FontWriter(output_path)
        writer.add_record(record)
        size = writer.save()
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save font: {e.reason}")
        raise typer.Exit(code=1)
    except RetrofontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_success(str(output_path), size, record.name, record.glyph_count)


@app.command(name="inspect")
def inspect_font(
    ctx: typer.Context,
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="Path to a .tdf or .flf font",
            show_default=False,
        ),
    ],
) -> None:
    """List the fonts in a file with their metadata."""
    _require_file(font)

    print_header(__version__)

    try:
        print_step("Loading font")
        reader = FontReader(font, _settings(ctx).parser)
        reader.load()
    except RetrofontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_font_info(str(font), reader.format, reader.font_count)
    print_font_table(reader.fonts)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
