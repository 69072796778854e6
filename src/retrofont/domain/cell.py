"""Rendered character cells."""

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Cell:
    """One positioned output character produced by rendering.

    Attributes:
        ch: Unicode character
        fg: Foreground color 0-15, None for the terminal default
        bg: Background color 0-15, None for the terminal default
        blink: Blink attribute
        bold: Bold attribute
    """

    ch: str
    fg: int | None = None
    bg: int | None = None
    blink: bool = False
    bold: bool = False

    def is_colored(self) -> bool:
        """Check if the cell carries any color attribute."""
        return self.fg is not None or self.bg is not None

    def with_default_colors(self, fg: int | None, bg: int | None) -> "Cell":
        """Fill in missing colors, keeping the ones already set."""
        return replace(
            self,
            fg=self.fg if self.fg is not None else fg,
            bg=self.bg if self.bg is not None else bg,
        )


BLANK_CELL = Cell(" ")
