"""Utility functions for retrofont.

This module provides utility functions including:

- Logging setup and configuration
"""

from retrofont.utils.logging import configure_logging

__all__ = [
    "configure_logging",
]
