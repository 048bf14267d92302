"""Formatted text fragments."""

from dataclasses import dataclass, replace
from typing import Optional

from .metrics import string_width


@dataclass(frozen=True)
class TextRun:
    """An immutable fragment of text with optional per-fragment formatting.

    font and font_size of None inherit the cell's font and fitted size.
    """
    text: str
    font: Optional[str] = None
    font_size: Optional[float] = None
    vertical_offset: float = 0.0
    underline: bool = False
    strike: bool = False

    def copy(self, text: str) -> "TextRun":
        """Return a run with the same formatting for a different string."""
        return replace(self, text=text)

    def resolve_font(self, font: str) -> str:
        return self.font if self.font is not None else font

    def resolve_size(self, font_size: float) -> float:
        if self.font_size is not None and self.font_size > 0:
            return self.font_size
        return font_size

    def width(self, font: str, font_size: float) -> float:
        """Advance width of this run when its formatting is inherited from font/font_size."""
        return string_width(self.text, self.resolve_font(font), self.resolve_size(font_size))

    def space_width(self, font: str, font_size: float) -> float:
        """Width of the single space that precedes this run on a line."""
        return string_width(" ", self.resolve_font(font), self.resolve_size(font_size))
