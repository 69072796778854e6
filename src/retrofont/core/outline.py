"""Outline style substitution tables.

Outline fonts store their frame as placeholder letters 'A'..'R'. At render
time each letter is replaced by a box-drawing character from one of 19
styles (single/double line combinations and three block styles). Slots
'O'..'R' are blank in every style.
"""

from retrofont.config import OUTLINE_STYLE_COUNT
from retrofont.domain import OutlinePlaceholder

# One row per style, one column per slot A..R
OUTLINE_STYLES: tuple[str, ...] = (
    "──││┌┐┌┐└┘└┘┤├    ",
    "═─││╒╕┌┐╘╛└┘╡├    ",
    "─═││┌┐╒╕└┘╘╛┤╞    ",
    "══││╒╕╒╕╘╛╘╛╡╞    ",
    "──║│╓┐┌╖└╜╙┘╢├    ",
    "═─║│╔╕┌╖╘╝╙┘╣├    ",
    "─═║│╓┐╒╗└╜╚╛╢╞    ",
    "══║│╔╕╒╗╘╝╚╛╣╞    ",
    "──│║┌╖╓┐╙┘└╜┤╟    ",
    "═─│║╒╗╓┐╚╛└╜╡╟    ",
    "─═│║┌╖╔╕╙┘╘╝┤╠    ",
    "══│║╒╗╔╕╚╛╘╝╡╠    ",
    "──║║╓╖╓╖╙╜╙╜╢╟    ",
    "═─║║╔╗╓╖╚╝╙╜╣╟    ",
    "─═║║╓╖╔╗╙╜╚╝╢╠    ",
    "══║║╔╗╔╗╚╝╚╝╣╠    ",
    "▄▄██▄▄▄▄██████    ",
    "▀▀██████▀▀▀▀██    ",
    "▀▄▐▌▐▌▄▄▀▀▐▌██    ",
)


def resolve_outline(style: int, placeholder: OutlinePlaceholder) -> str:
    """Look up the character drawn for a placeholder in a style.

    Args:
        style: Outline style index 0-18
        placeholder: Placeholder part to resolve

    Returns:
        Box-drawing (or blank) character

    Raises:
        IndexError: If style is out of range
    """
    if not 0 <= style < OUTLINE_STYLE_COUNT:
        raise IndexError(f"Outline style must be 0-{OUTLINE_STYLE_COUNT - 1}, got {style}")
    return OUTLINE_STYLES[style][placeholder.index]
