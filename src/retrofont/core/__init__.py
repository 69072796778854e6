"""Core algorithms for retrofont.

This module contains the format independent engines:

- Rendering (glyph parts to a positioned cell stream)
- Outline style substitution (placeholder letters to box drawing)
- Conversion (FIGlet fonts to TDF records)

All functions are:
- Stateless apart from the target passed in by the caller
- Pure with respect to the font model (fonts are never modified)

Key functions:
- render_glyph: Render one glyph onto a target
- render_char: Render a character, with the missing glyph policy
- render_text: Render a string glyph by glyph
- resolve_outline: Look up a placeholder in an outline style
- check_compatibility / compatible: Conversion feasibility
- convert: FIGlet to TDF conversion

Key classes:
- LayoutBuffer: In-memory target placing glyphs side by side
- RenderTarget: Protocol every target implements
"""

from retrofont.core.converter import check_compatibility, compatible, convert, restrict_to_printable
from retrofont.core.outline import OUTLINE_STYLES, resolve_outline
from retrofont.core.renderer import Cursor, part_to_cell, render_char, render_glyph, render_text
from retrofont.core.targets import LayoutBuffer, RenderTarget

__all__ = [
    "OUTLINE_STYLES",
    # Render classes
    "Cursor",
    "LayoutBuffer",
    "RenderTarget",
    # Conversion functions
    "check_compatibility",
    "compatible",
    "convert",
    "restrict_to_printable",
    # Render functions
    "part_to_cell",
    "render_char",
    "render_glyph",
    "render_text",
    "resolve_outline",
]
