"""Background fill strategies deciding a colour per grid cell."""

from typing import Callable, Optional

from reportlab.lib.colors import Color


class CellFiller:
    """Decides the background colour of a cell from its row and column index."""

    def color_for(self, row: int, column: int) -> Optional[Color]:
        raise NotImplementedError

    def fill(self, page, row: int, column: int, left: float, top: float, width: float, height: float) -> None:
        """Paint the background of the cell at (row, column) if it gets a colour."""
        color = self.color_for(row, column)
        if color is not None:
            page.fill_rect(left, top - height, width, height, color)


class ColumnStripe(CellFiller):
    """Paints every other column, even columns unless inverted."""

    def __init__(self, color: Color, inverted: bool = False):
        self.color = color
        self.inverted = inverted

    def color_for(self, row: int, column: int) -> Optional[Color]:
        if column % 2 == (1 if self.inverted else 0):
            return self.color
        return None


class RowStripe(CellFiller):
    """Paints every other row, even rows unless inverted."""

    def __init__(self, color: Color, inverted: bool = False):
        self.color = color
        self.inverted = inverted

    def color_for(self, row: int, column: int) -> Optional[Color]:
        if row % 2 == (1 if self.inverted else 0):
            return self.color
        return None


class CustomFiller(CellFiller):
    """Wraps a plain (row, column) -> colour function."""

    def __init__(self, func: Callable[[int, int], Optional[Color]]):
        self.func = func

    def color_for(self, row: int, column: int) -> Optional[Color]:
        return self.func(row, column)
