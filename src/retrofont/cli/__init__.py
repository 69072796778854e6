"""Command-line interface for retrofont.

This module provides the CLI using Typer with rich output for
colored rendering and readable font listings.

Key features:
- Render text in DOS palette colors
- Edit mode revealing hard blanks and outline markers
- FIGlet to TDF conversion
- Font bundle inspection
"""

from retrofont.cli.app import cli, main

__all__ = ["cli", "main"]
