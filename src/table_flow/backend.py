"""PDF document backend using ReportLab."""

import logging
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from reportlab.lib.colors import Color, black
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .errors import BackendError

logger = logging.getLogger(__name__)


class PageCanvas:
    """Drawing handle for one physical page.

    A handle is used exclusively while that page's rows are drawn and is
    released exactly once with close(). Drawing on a released handle raises
    BackendError.
    """

    def __init__(self, c: canvas.Canvas, page_index: int, page_size: Tuple[float, float]):
        self._canvas = c
        self.page_index = page_index
        self.page_size = page_size
        self.closed = False

    @property
    def width(self) -> float:
        return self.page_size[0]

    @property
    def height(self) -> float:
        return self.page_size[1]

    def _check_open(self) -> canvas.Canvas:
        if self.closed:
            raise BackendError(f"Page {self.page_index} has already been released")
        return self._canvas

    def line(self, x1: float, y1: float, x2: float, y2: float, line_width: float, color: Color = black) -> None:
        c = self._check_open()
        c.setStrokeColor(color)
        c.setLineWidth(line_width)
        c.line(x1, y1, x2, y2)

    def stroke_rect(self, x: float, y: float, width: float, height: float, line_width: float, color: Color = black) -> None:
        """Outline a rectangle whose lower-left corner is (x, y)."""
        c = self._check_open()
        c.setStrokeColor(color)
        c.setLineWidth(line_width)
        c.rect(x, y, width, height, fill=False, stroke=True)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        """Fill a rectangle whose lower-left corner is (x, y)."""
        c = self._check_open()
        c.setFillColor(color)
        c.rect(x, y, width, height, fill=True, stroke=False)

    def draw_text(self, x: float, y: float, text: str, font: str, font_size: float, color: Color = black) -> None:
        """Draw text with its baseline starting at (x, y)."""
        c = self._check_open()
        c.setFillColor(color)
        c.setFont(font, font_size)
        c.drawString(x, y, text)

    def draw_image(self, x: float, y: float, width: float, height: float, image: ImageReader) -> None:
        """Draw a decoded image scaled into the box with lower-left corner (x, y)."""
        c = self._check_open()
        c.drawImage(image, x, y, width, height)

    def close(self) -> None:
        self.closed = True


class PdfDocument:
    """A PDF being written page by page.

    ReportLab always has a current page; open_page() hands out a drawing
    handle for it and next_page() finishes it and starts another page of the
    same size.
    """

    def __init__(self, target: Union[str, Path, BinaryIO], page_size: Tuple[float, float] = LETTER):
        if isinstance(target, Path):
            target = str(target)
        self._canvas = canvas.Canvas(target, pagesize=page_size)
        self.page_size = page_size
        self.page_count = 1

    @property
    def page_width(self) -> float:
        return self.page_size[0]

    @property
    def page_height(self) -> float:
        return self.page_size[1]

    def open_page(self) -> PageCanvas:
        """Return a drawing handle for the last page of the document."""
        return PageCanvas(self._canvas, self.page_count - 1, self.page_size)

    def next_page(self, page: PageCanvas) -> PageCanvas:
        """Release page, finish it and return a handle for a new page of the same size."""
        page.close()
        self._canvas.showPage()
        self.page_count += 1
        logger.debug("Started page %d", self.page_count)
        return self.open_page()

    def save(self) -> None:
        """Finish the last page and write the document out."""
        self._canvas.save()
