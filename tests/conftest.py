"""
Pytest configuration for table_flow
"""

import io
import logging
import sys
from typing import List, Tuple

import pytest

from table_flow.backend import PdfDocument
from table_flow.cells import Cell
from table_flow.table import Column, Table


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure console-only logging so layout debug output stays quiet."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


class RecordingPage:
    """Page handle that records drawing calls instead of writing PDF operators."""

    def __init__(self, index: int, page_size: Tuple[float, float]):
        self.page_index = index
        self.page_size = page_size
        self.calls: List[tuple] = []
        self.closed = False

    @property
    def width(self) -> float:
        return self.page_size[0]

    @property
    def height(self) -> float:
        return self.page_size[1]

    def line(self, x1, y1, x2, y2, line_width, color=None):
        self.calls.append(("line", x1, y1, x2, y2, line_width))

    def stroke_rect(self, x, y, width, height, line_width, color=None):
        self.calls.append(("stroke_rect", x, y, width, height, line_width))

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("fill_rect", x, y, width, height, color))

    def draw_text(self, x, y, text, font, font_size, color=None):
        self.calls.append(("draw_text", x, y, text, font, font_size))

    def draw_image(self, x, y, width, height, image):
        self.calls.append(("draw_image", x, y, width, height))

    def close(self):
        self.closed = True

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]


class RecordingDocument:
    """Stand-in for PdfDocument keeping every page handle it hands out."""

    def __init__(self, page_size: Tuple[float, float] = (612.0, 792.0)):
        self.page_size = page_size
        self.page_count = 1
        self.pages: List[RecordingPage] = []

    def open_page(self) -> RecordingPage:
        page = RecordingPage(self.page_count - 1, self.page_size)
        self.pages.append(page)
        return page

    def next_page(self, page: RecordingPage) -> RecordingPage:
        page.close()
        self.page_count += 1
        return self.open_page()


@pytest.fixture
def recording_document():
    """Fake document on US Letter pages."""
    return RecordingDocument()


@pytest.fixture
def recording_page():
    """A single fake Letter page."""
    return RecordingPage(0, (612.0, 792.0))


@pytest.fixture
def pdf_document():
    """Real ReportLab document written to memory."""
    buffer = io.BytesIO()
    document = PdfDocument(buffer)
    document.buffer = buffer
    return document


@pytest.fixture
def make_blank_table():
    """Build a two-column table of blank cells with the given row heights."""
    def _make(row_heights, header_rows=1, width=100.0):
        table = Table([Column.fixed(width), Column.fixed(width)], header_rows=header_rows)
        for height in row_heights:
            table.add_row(Cell(min_height=height), Cell(min_height=height))
        return table
    return _make
