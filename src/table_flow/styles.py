"""Alignment enums and border handling shared by tables, rows, columns and cells."""

from enum import Enum
from typing import Optional


class HAlign(Enum):
    """Horizontal alignment of cell content."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @property
    def factor(self) -> float:
        """Share of the free horizontal space placed before the content."""
        return _ALIGN_FACTORS[self.value]


class VAlign(Enum):
    """Vertical alignment of cell content."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"

    @property
    def factor(self) -> float:
        """Share of the free vertical space placed above the content."""
        return _ALIGN_FACTORS[self.value]


_ALIGN_FACTORS = {
    "left": 0.0,
    "center": 0.5,
    "right": 1.0,
    "top": 0.0,
    "middle": 0.5,
    "bottom": 1.0,
}


class Bordered:
    """Four independent border line widths.

    A width of None means "inherit" (from the column, for cells); zero or
    negative widths are not drawn.
    """

    top_border: Optional[float] = None
    left_border: Optional[float] = None
    right_border: Optional[float] = None
    bottom_border: Optional[float] = None

    def set_border(
        self,
        top: Optional[float],
        left: Optional[float],
        right: Optional[float],
        bottom: Optional[float],
    ):
        self.top_border = top
        self.left_border = left
        self.right_border = right
        self.bottom_border = bottom
        return self

    def inherit_borders(self, other: "Bordered") -> None:
        """Copy every unset border width from another element."""
        if self.top_border is None:
            self.top_border = other.top_border
        if self.left_border is None:
            self.left_border = other.left_border
        if self.right_border is None:
            self.right_border = other.right_border
        if self.bottom_border is None:
            self.bottom_border = other.bottom_border

    @property
    def horizontal_border(self) -> float:
        """Half of the left and right border widths, the part inside the box."""
        return (border_width(self.left_border) + border_width(self.right_border)) / 2

    @property
    def vertical_border(self) -> float:
        """Half of the top and bottom border widths, the part inside the box."""
        return (border_width(self.top_border) + border_width(self.bottom_border)) / 2

    def draw_border(self, page, left: float, top: float, width: float, height: float) -> None:
        """Stroke each border side that has a positive width.

        Coordinates follow the PDF convention: top is the y of the upper
        edge and the box extends downward by height.
        """
        bottom = top - height
        right = left + width
        if border_width(self.top_border) > 0:
            page.line(left, top, right, top, self.top_border)
        if border_width(self.right_border) > 0:
            page.line(right, top, right, bottom, self.right_border)
        if border_width(self.bottom_border) > 0:
            page.line(right, bottom, left, bottom, self.bottom_border)
        if border_width(self.left_border) > 0:
            page.line(left, bottom, left, top, self.left_border)


def border_width(border: Optional[float]) -> float:
    """Drawn width of a border setting; unset or negative borders are not drawn."""
    if border is None or border < 0:
        return 0.0
    return border


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a standard font family."""
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family in ("Courier", "Helvetica"):
        return f"{font_family}-Bold"
    return font_family
