"""Configuration settings for retrofont."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

OUTLINE_STYLE_COUNT = 19


class RenderMode(str, Enum):
    """How structural glyph markers are shown."""

    DISPLAY = "display"
    EDIT = "edit"


class RenderOptions(BaseModel):
    """Options for a single render call.

    Out of range values are rejected with a validation error; nothing is
    clamped.
    """

    model_config = {"frozen": True}

    mode: RenderMode = Field(
        default=RenderMode.DISPLAY,
        description="Display hides markers, edit reveals them",
    )
    outline_style: int = Field(
        default=0,
        ge=0,
        le=OUTLINE_STYLE_COUNT - 1,
        description="Outline substitution table (0-18)",
    )
    strict: bool = Field(
        default=False,
        description="Raise on missing glyphs instead of emitting spacing blanks",
    )
    resolve_outline: bool = Field(
        default=True,
        description="Substitute outline placeholders (False shows the raw letters)",
    )

    @classmethod
    def display(cls, outline_style: int = 0) -> "RenderOptions":
        """Options for normal viewing."""
        return cls(mode=RenderMode.DISPLAY, outline_style=outline_style)

    @classmethod
    def edit(cls, outline_style: int = 0) -> "RenderOptions":
        """Options that reveal hard blanks and outline markers."""
        return cls(mode=RenderMode.EDIT, outline_style=outline_style)


class ParserConfig(BaseModel):
    """Configuration for bundle parsing."""

    strict_terminator: bool = Field(
        default=True,
        description="Treat a glyph stream without 0x00 terminator as an error",
    )


class ConversionConfig(BaseModel):
    """Configuration for FIGlet to TDF conversion."""

    default_fg: int = Field(
        default=7,
        ge=0,
        le=15,
        description="Foreground applied to every cell of color targets",
    )
    default_bg: int = Field(
        default=0,
        ge=0,
        le=7,
        description="Background applied to every cell of color targets",
    )
    spacing: int = Field(
        default=1,
        ge=0,
        le=255,
        description="Letter spacing of the converted font",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RetrofontSettings(BaseModel):
    """Main application settings."""

    render: RenderOptions = Field(default_factory=RenderOptions)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RetrofontSettings:
    """Get default application settings."""
    return RetrofontSettings()
