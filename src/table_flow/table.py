"""Tables, rows and columns: width/height resolution and pagination."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .cells import DEFAULT_FONT, DEFAULT_FONT_SIZE, Cell, TextCell
from .events import EventSource, EventType
from .fillers import CellFiller
from .styles import Bordered, HAlign, VAlign

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_BORDER = 0.25
DEFAULT_TABLE_BORDER = 1.0


@dataclass
class Column(Bordered):
    """Width bounds and default formatting for one grid column.

    Cells added to the column inherit its font, font size range, alignment
    and borders unless they set their own. min_width == max_width makes a
    fixed-width column.
    """
    min_width: float
    max_width: float
    font: str = DEFAULT_FONT
    min_font_size: float = DEFAULT_FONT_SIZE
    max_font_size: float = DEFAULT_FONT_SIZE
    h_align: HAlign = HAlign.LEFT
    v_align: VAlign = VAlign.MIDDLE
    top_border: Optional[float] = DEFAULT_COLUMN_BORDER
    left_border: Optional[float] = DEFAULT_COLUMN_BORDER
    right_border: Optional[float] = DEFAULT_COLUMN_BORDER
    bottom_border: Optional[float] = DEFAULT_COLUMN_BORDER

    def __post_init__(self):
        if self.min_width > self.max_width:
            raise ValueError(f"min_width {self.min_width} exceeds max_width {self.max_width}")
        if self.min_font_size > self.max_font_size:
            raise ValueError(
                f"min_font_size {self.min_font_size} exceeds max_font_size {self.max_font_size}"
            )

    @classmethod
    def fixed(
        cls,
        width: float,
        font: str = DEFAULT_FONT,
        font_size: float = DEFAULT_FONT_SIZE,
        h_align: HAlign = HAlign.LEFT,
    ) -> "Column":
        """Create a column with fixed width and font size."""
        return cls(width, width, font, font_size, font_size, h_align)

    @property
    def is_fixed(self) -> bool:
        return self.min_width == self.max_width


@dataclass(frozen=True)
class TableLayout:
    """Resolved geometry of a table for one render width.

    A snapshot is never updated; resolving the table for another width
    yields a new one.
    """
    width: float
    column_widths: Tuple[float, ...]
    row_heights: Tuple[float, ...]

    @property
    def height(self) -> float:
        return sum(self.row_heights)

    def span_width(self, column: int, col_span: int) -> float:
        return sum(self.column_widths[column:column + col_span])

    def span_height(self, row: int, row_span: int) -> float:
        return sum(self.row_heights[row:row + row_span])


class Row(Bordered, EventSource):
    """An ordered sequence of cells whose column spans cover the table width."""

    def __init__(self, cells: Optional[Sequence[Cell]] = None):
        super().__init__()
        self.cells: List[Cell] = list(cells or [])
        self._heights: Dict[Tuple[float, ...], float] = {}

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def add_cell(self, cell: Cell) -> None:
        self.cells.append(cell)

    @property
    def column_count(self) -> int:
        """Number of grid columns covered by this row's cells."""
        return sum(cell.col_span for cell in self.cells)

    def placed_cells(self) -> Iterator[Tuple[int, Cell]]:
        """Yield (first column index, cell) pairs from left to right."""
        column = 0
        for cell in self.cells:
            yield column, cell
            column += cell.col_span

    def cell_at_column(self, index: int) -> Optional[Cell]:
        """The cell covering grid column index, found by cumulative column span."""
        for column, cell in self.placed_cells():
            if column <= index < column + cell.col_span:
                return cell
        return None

    def height(self, column_widths: Sequence[float]) -> float:
        """Tallest required height among cells spanning a single row.

        Cells spanning several rows are left out here; the table accounts for
        them when it aggregates row heights. Cached per column widths.
        """
        key = tuple(column_widths)
        if key not in self._heights:
            height = 0.0
            for column, cell in self.placed_cells():
                if cell.row_span > 1:
                    continue
                height = max(height, cell.height(sum(key[column:column + cell.col_span])))
            self._heights[key] = height
        return self._heights[key]

    def render(
        self,
        table: "Table",
        document,
        page,
        index: int,
        layout: TableLayout,
        filler: Optional[CellFiller],
        left: float,
        top: float,
        width: float,
        height: float,
    ) -> None:
        """Draw the row border, then each cell's background, hooks and content."""
        self.draw_border(page, left, top, width, height)

        x = left
        for column, cell in self.placed_cells():
            cell_width = layout.span_width(column, cell.col_span)
            cell_height = layout.span_height(index, cell.row_span)

            if filler is not None:
                filler.fill(page, index, column, x, top, cell_width, cell_height)

            for source in (table, self, cell):
                source.fire_event(EventType.BEFORE_CELL, document, page, x, top, cell_width, cell_height)

            cell.render(document, page, x, top, cell_width, cell_height)

            for source in (cell, self, table):
                source.fire_event(EventType.AFTER_CELL, document, page, x, top, cell_width, cell_height)

            x += cell_width


class Table(Bordered, EventSource):
    """A grid of rows over fixed columns, rendered across pages.

    The first header_rows rows are repeated at the top of every page that
    follows a page break.
    """

    def __init__(
        self,
        columns: Optional[Sequence[Column]] = None,
        header_rows: int = 1,
        filler: Optional[CellFiller] = None,
    ):
        super().__init__()
        self.columns: List[Column] = list(columns or [])
        self.rows: List[Row] = []
        self.header_rows = header_rows
        self.filler = filler
        self._layout: Optional[TableLayout] = None
        self.set_border(DEFAULT_TABLE_BORDER, DEFAULT_TABLE_BORDER, DEFAULT_TABLE_BORDER, DEFAULT_TABLE_BORDER)

    @property
    def num_columns(self) -> int:
        return len(self.columns)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    # ------------------------------------------------------------------
    # Building

    def add_column(self, column: Column) -> "Table":
        self.columns.append(column)
        return self

    def _to_cell(self, value) -> Cell:
        if isinstance(value, Cell):
            return value
        return TextCell(str(value))

    def _add_cell(self, cell: Cell, row: Row, column: int) -> None:
        """Add cell to row, filling unset formatting from the column it starts in."""
        col = self.columns[column]
        if cell.h_align is None:
            cell.h_align = col.h_align
        if cell.v_align is None:
            cell.v_align = col.v_align
        cell.inherit_borders(col)
        if isinstance(cell, TextCell):
            if cell.font is None:
                cell.font = col.font
            # An inherited bound never crosses the cell's own bound
            if cell.min_font_size is None:
                cell.min_font_size = col.min_font_size
                if cell.max_font_size is not None:
                    cell.min_font_size = min(cell.min_font_size, cell.max_font_size)
            if cell.max_font_size is None:
                cell.max_font_size = max(col.max_font_size, cell.min_font_size)
        row.add_cell(cell)
        self._layout = None

    def add_row(self, *cells) -> "Table":
        """Append a row, padding it with blank cells up to the column count.

        Values that are not cells become text cells of their str(); None
        values are skipped.
        """
        return self.add_row_at(len(self.rows), *cells)

    def add_row_at(self, index: int, *cells) -> "Table":
        """Insert a row at index, padded like add_row."""
        row = Row()
        column = 0
        for value in cells:
            if value is None:
                continue
            if column >= self.num_columns:
                break
            cell = self._to_cell(value)
            self._add_cell(cell, row, column)
            column += cell.col_span
        while column < self.num_columns:
            self._add_cell(Cell(), row, column)
            column += 1
        self.rows.insert(index, row)
        self._layout = None
        return self

    def add_cells(self, *cells) -> "Table":
        """Flow cells into the last row, starting new rows whenever one is full."""
        if not self.rows:
            self.rows.append(Row())
        row = self.rows[-1]
        column = row.column_count
        for value in cells:
            if value is None:
                continue
            if column >= self.num_columns:
                row = Row()
                self.rows.append(row)
                column = 0
            cell = self._to_cell(value)
            self._add_cell(cell, row, column)
            column += cell.col_span
        self._layout = None
        return self

    def complete_row(self) -> "Table":
        """Pad the last row with blank cells up to the column count."""
        if self.rows:
            row = self.rows[-1]
            column = row.column_count
            while column < self.num_columns:
                self._add_cell(Cell(), row, column)
                column += 1
        return self

    # ------------------------------------------------------------------
    # Measuring

    def column_width(self, index: int) -> float:
        """Width of one column from its bounds and its single-column cells."""
        column = self.columns[index]
        if column.is_fixed:
            return column.min_width
        result = column.min_width
        for row in self.rows:
            cell = row.cell_at_column(index)
            if cell is None or cell.col_span != 1:
                continue
            result = max(result, cell.width())
        return min(result, column.max_width)

    def resolve(self, width: float) -> TableLayout:
        """Resolve column widths and row heights for a render width.

        Every column but the last gets its content-driven width; the last one
        takes whatever remains of width, even if that is below its minimum.
        The snapshot is reused while the width stays the same.
        """
        if self._layout is not None and self._layout.width == width:
            return self._layout

        widths: List[float] = []
        if self.columns:
            widths = [self.column_width(index) for index in range(self.num_columns - 1)]
            widths.append(width - sum(widths))
        heights = self._row_heights(widths)
        self._layout = TableLayout(width, tuple(widths), tuple(heights))
        logger.debug("Resolved table at width %.2f: columns=%s", width, [round(w, 2) for w in widths])
        return self._layout

    def _row_heights(self, widths: Sequence[float]) -> List[float]:
        heights = [row.height(widths) for row in self.rows]
        # A cell spanning several rows grows the last row it covers if needed
        for index, row in enumerate(self.rows):
            for column, cell in row.placed_cells():
                if cell.row_span <= 1:
                    continue
                last = min(index + cell.row_span, len(self.rows))
                needed = cell.height(sum(widths[column:column + cell.col_span]))
                covered = sum(heights[index:last])
                if needed > covered:
                    heights[last - 1] += needed - covered
        return heights

    def column_widths(self, width: float) -> Tuple[float, ...]:
        return self.resolve(width).column_widths

    def height(self, width: float) -> float:
        """Total height of all rows at the given width."""
        return self.resolve(width).height

    # ------------------------------------------------------------------
    # Rendering

    def _next_page(self, document, page):
        self.fire_event(EventType.END_PAGE, document, page, 0, page.height, page.width, page.height)
        page = document.next_page(page)
        self.fire_event(EventType.BEGIN_PAGE, document, page, 0, page.height, page.width, page.height)
        return page

    def render(
        self,
        document,
        width: float,
        left: float,
        top: float,
        page_top_margin: float,
        page_bottom_margin: float,
    ) -> float:
        """Render the table into document starting at (left, top) on its last page.

        A table that fits on an empty page is kept together, moving to a new
        page first if it does not fit below top. Longer tables are placed row
        by row: a row that would cross page_bottom_margin starts a new page,
        page_top_margin below its top edge, beginning with the header rows.
        Rows are never split. Returns the y of the bottom edge of the last
        rendered row.
        """
        layout = self.resolve(width)
        page = document.open_page()
        try:
            y = top
            self.fire_event(EventType.BEFORE_TABLE, document, page, left, top, width, layout.height)

            if layout.height > page.height - page_top_margin - page_bottom_margin:
                header_rows = min(self.header_rows, self.num_rows)
                index = 0
                while index < self.num_rows:
                    if layout.row_heights[index] > y - page_bottom_margin:
                        if y < top:
                            self.draw_border(page, left, top, width, top - y)
                        page = self._next_page(document, page)
                        logger.debug("Page break before row %d, now on page %d", index, document.page_count)
                        top = y = page.height - page_top_margin
                        y = self.render_rows(document, page, 0, header_rows, width, left, y)
                        index = max(index, header_rows)
                        if index >= self.num_rows:
                            break
                    y = self.render_rows(document, page, index, index + 1, width, left, y)
                    index += 1
            else:
                if layout.height > top - page_bottom_margin:
                    page = self._next_page(document, page)
                    logger.debug("Moved table to page %d", document.page_count)
                    top = y = page.height - page_top_margin
                y = self.render_rows(document, page, 0, None, width, left, y)

            self.draw_border(page, left, top, width, top - y)
            self.fire_event(EventType.AFTER_TABLE, document, page, left, top, width, top - y)
        finally:
            page.close()
        return y

    def render_rows(
        self,
        document,
        page,
        start: int,
        end: Optional[int],
        width: float,
        left: float,
        top: float,
    ) -> float:
        """Render rows [start, end) downward from top; end None means through the last row.

        Returns the y of the bottom edge of the last rendered row. Also used
        for header repetition and by nested table cells.
        """
        layout = self.resolve(width)
        if end is None:
            end = self.num_rows

        y = top
        for index in range(start, end):
            row = self.rows[index]
            height = layout.row_heights[index]

            self.fire_event(EventType.BEFORE_ROW, document, page, left, y, width, height)
            row.fire_event(EventType.BEFORE_ROW, document, page, left, y, width, height)

            row.render(self, document, page, index, layout, self.filler, left, y, width, height)

            row.fire_event(EventType.AFTER_ROW, document, page, left, y, width, height)
            self.fire_event(EventType.AFTER_ROW, document, page, left, y, width, height)

            y -= height
        return y
