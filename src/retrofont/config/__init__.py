"""Configuration management for retrofont.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RenderOptions: Per-render mode and outline style
- ParserConfig: Bundle parsing policy
- ConversionConfig: FIGlet to TDF conversion defaults
- LoggingConfig: Logging settings
- RetrofontSettings: Main application settings
"""

from retrofont.config.settings import (
    OUTLINE_STYLE_COUNT,
    ConversionConfig,
    LoggingConfig,
    ParserConfig,
    RenderMode,
    RenderOptions,
    RetrofontSettings,
    get_default_settings,
)

__all__ = [
    "OUTLINE_STYLE_COUNT",
    "ConversionConfig",
    "LoggingConfig",
    "ParserConfig",
    "RenderMode",
    "RenderOptions",
    "RetrofontSettings",
    "get_default_settings",
]
