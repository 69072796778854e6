"""Retrofont - Load, render and convert retro ANSI-art fonts.

Retrofont reads TheDraw (.tdf) font bundles and FIGlet (.flf) fonts into one
font model, renders text through them onto pluggable targets, converts
FIGlet fonts into TDF and writes TDF bundles back out.

Example:
    $ retrofont render --font STAR.TDF --text HELLO

This will print HELLO in the first font of the bundle, using the DOS palette.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
