"""Cell variants: blank, text, image and nested table."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from reportlab.lib.colors import Color, black
from reportlab.lib.utils import ImageReader

from .events import EventSource
from .metrics import get_font_metrics
from .styles import Bordered, HAlign, VAlign, border_width
from .text import TextRun
from .text_flow import Line, TextFlow, split_paragraphs

DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_SIZE = 10.0
DECORATION_WIDTH = 0.25
# Added to natural text widths so rounding never forces a wrap
WIDTH_SAFETY = 1.001

Padding = Tuple[float, float, float, float]


class Cell(Bordered, EventSource):
    """A blank cell and the default behaviour of every other cell.

    A cell occupies col_span x row_span grid positions. Unset alignment
    (None) and unset borders are inherited from the column the cell is added
    to. Padding is given as (top, left, right, bottom).
    """

    def __init__(
        self,
        col_span: int = 1,
        row_span: int = 1,
        min_width: float = 0.0,
        min_height: float = 0.0,
        padding: Padding = (0.0, 0.0, 0.0, 0.0),
        h_align: Optional[HAlign] = None,
        v_align: Optional[VAlign] = None,
        background: Optional[Color] = None,
        border: Optional[Tuple[Optional[float], ...]] = None,
    ):
        super().__init__()
        self.col_span = col_span
        self.row_span = row_span
        self.min_width = min_width
        self.min_height = min_height
        self.set_padding(*padding)
        self.h_align = h_align
        self.v_align = v_align
        self.background = background
        if border is not None:
            self.set_border(*border)

    def set_padding(self, top: float, left: float, right: float, bottom: float) -> "Cell":
        self.top_padding = top
        self.left_padding = left
        self.right_padding = right
        self.bottom_padding = bottom
        return self

    @property
    def horizontal_inset(self) -> float:
        return self.left_padding + self.right_padding + self.horizontal_border

    @property
    def vertical_inset(self) -> float:
        return self.top_padding + self.bottom_padding + self.vertical_border

    @property
    def h_factor(self) -> float:
        return (self.h_align or HAlign.LEFT).factor

    @property
    def v_factor(self) -> float:
        return (self.v_align or VAlign.MIDDLE).factor

    def content_origin(self, left: float, top: float) -> Tuple[float, float]:
        """Top-left corner of the content box inside padding and borders."""
        return (
            left + border_width(self.left_border) / 2 + self.left_padding,
            top - border_width(self.top_border) / 2 - self.top_padding,
        )

    def width(self) -> float:
        """Width this cell requires."""
        return self.min_width

    def height(self, width: float) -> float:
        """Height this cell requires when rendered at width."""
        return self.min_height

    def render(self, document, page, left: float, top: float, width: float, height: float) -> None:
        """Draw background and borders for the box whose upper-left corner is (left, top)."""
        if self.background is not None:
            page.fill_rect(left, top - height, width, height, self.background)
        self.draw_border(page, left, top, width, height)


class TextCell(Cell):
    """A cell holding formatted text that wraps and shrinks to fit.

    The font size is chosen per render box within [min_font_size,
    max_font_size]. With equally_spaced the runs are laid out on one line
    at fixed fractions of the width and never wrapped; with draw_rows thin
    separator lines are drawn between wrapped lines.
    """

    def __init__(
        self,
        text: Union[str, TextRun, None] = None,
        font: Optional[str] = None,
        min_font_size: Optional[float] = None,
        max_font_size: Optional[float] = None,
        equally_spaced: bool = False,
        draw_rows: bool = False,
        **kwargs,
    ):
        if min_font_size is not None and max_font_size is not None and min_font_size > max_font_size:
            raise ValueError(f"min_font_size {min_font_size} exceeds max_font_size {max_font_size}")
        kwargs.setdefault("padding", (0.0, 1.0, 1.0, 0.0))
        super().__init__(**kwargs)
        self.runs: List[TextRun] = []
        self.font = font
        self.min_font_size = min_font_size
        self.max_font_size = max_font_size
        self.equally_spaced = equally_spaced
        self.draw_rows = draw_rows
        self._flow: Optional[TextFlow] = None
        self._heights: Dict[float, float] = {}
        if text is not None:
            self.add_text(text)

    def add_text(self, text: Union[str, TextRun]) -> "TextCell":
        """Append a run; only valid before the cell is first measured."""
        self.runs.append(text if isinstance(text, TextRun) else TextRun(text))
        return self

    @property
    def flow(self) -> TextFlow:
        """Text layout for this cell, built on first measurement and never rebuilt."""
        if self._flow is None:
            font = self.font or DEFAULT_FONT
            max_size = self.max_font_size if self.max_font_size is not None else DEFAULT_FONT_SIZE
            min_size = self.min_font_size if self.min_font_size is not None else max_size
            self._flow = TextFlow(
                split_paragraphs(self.runs),
                font,
                min_size,
                max_size,
                horizontal_inset=self.horizontal_inset,
                vertical_inset=self.vertical_inset,
            )
        return self._flow

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def width(self) -> float:
        if self.col_span > 1:
            return 0.0
        flow = self.flow
        if self.equally_spaced:
            natural = self.horizontal_inset + sum(
                run.width(flow.font, flow.min_font_size) for run in self.runs
            )
        else:
            natural = flow.natural_width()
        return max(self.min_width, natural * WIDTH_SAFETY)

    def height(self, width: float) -> float:
        if width not in self._heights:
            flow = self.flow
            if self.equally_spaced:
                needed = max(self.min_height, flow.text_height(1, flow.max_font_size))
            else:
                needed = flow.height_for_width(width, self.min_height)
            self._heights[width] = needed
        return self._heights[width]

    def font_size_for(self, width: float, height: float) -> float:
        """Font size used when the cell is rendered into a width x height box."""
        if self.equally_spaced:
            return self.flow.max_font_size
        return self.flow.best_font_size(width, height)

    def render(self, document, page, left: float, top: float, width: float, height: float) -> None:
        super().render(document, page, left, top, width, height)
        if self.equally_spaced:
            self._render_equally_spaced(page, left, top, width, height)
            return

        flow = self.flow
        font_size = self.font_size_for(width, height)
        lines = flow.break_lines(width, font_size)
        if self.draw_rows and len(lines) > 1:
            self._draw_separators(page, left, top, width, height, len(lines))

        metrics = flow.metrics
        content_left, content_top = self.content_origin(left, top)
        content_height = height - self.vertical_inset
        block_height = flow.text_height(len(lines), font_size) - self.vertical_inset
        block_top = content_top - (content_height - block_height) * self.v_factor
        pitch = metrics.line_height(font_size) + font_size / 10

        for index, line in enumerate(lines):
            baseline = block_top - index * pitch - metrics.ascent_at(font_size)
            x = content_left + (width - flow.line_width(line, font_size)) * self.h_factor
            self._draw_line(page, line, x, baseline, font_size)

    def _draw_line(self, page, line: Line, x: float, baseline: float, font_size: float) -> None:
        for index, run in enumerate(line):
            font = run.resolve_font(self.flow.font)
            size = run.resolve_size(font_size)
            if index > 0:
                x += run.space_width(self.flow.font, font_size)
            run_width = run.width(self.flow.font, font_size)
            y = baseline + run.vertical_offset
            page.draw_text(x, y, run.text, font, size, black)
            self._decorate(page, run, x, y, run_width, font, size)
            x += run_width

    def _decorate(self, page, run: TextRun, x: float, baseline: float, width: float, font: str, size: float) -> None:
        if run.strike:
            y = baseline + get_font_metrics(font).x_height_at(size) / 2
            page.line(x, y, x + width, y, DECORATION_WIDTH)
        if run.underline:
            y = baseline - size / 10
            page.line(x, y, x + width, y, DECORATION_WIDTH)

    def _draw_separators(self, page, left: float, top: float, width: float, height: float, line_count: int) -> None:
        line_width = border_width(self.bottom_border) or DECORATION_WIDTH
        x1 = left + border_width(self.left_border) / 2
        x2 = left + width - border_width(self.right_border) / 2
        for index in range(1, line_count):
            y = top - height + index * height / line_count
            page.line(x1, y, x2, y, line_width)

    def _render_equally_spaced(self, page, left: float, top: float, width: float, height: float) -> None:
        flow = self.flow
        font_size = flow.max_font_size
        metrics = flow.metrics
        content_left, content_top = self.content_origin(left, top)
        content_height = height - self.vertical_inset
        line_height = metrics.line_height(font_size)
        baseline = content_top - (content_height - line_height) * self.v_factor - metrics.ascent_at(font_size)

        slot = (width - self.horizontal_inset) / (len(self.runs) + 1)
        for index, run in enumerate(self.runs):
            run_width = run.width(flow.font, font_size)
            x = content_left + (index + 1) * slot - run_width / 2
            font = run.resolve_font(flow.font)
            size = run.resolve_size(font_size)
            y = baseline + run.vertical_offset
            page.draw_text(x, y, run.text, font, size, black)
            self._decorate(page, run, x, y, run_width, font, size)


def fit_image(
    image_width: float,
    image_height: float,
    max_width: float,
    max_height: float,
) -> Tuple[float, float]:
    """Shrink an image to fit a box, preserving its aspect ratio.

    The width is fitted first; if the image is still too tall it is shrunk
    further to the height. Images smaller than the box keep their size.
    """
    ratio = image_width / image_height
    if image_width > max_width:
        image_width = max_width
        image_height = image_width / ratio
    if image_height > max_height:
        image_height = max_height
        image_width = ratio * image_height
    return image_width, image_height


class ImageCell(Cell):
    """A cell showing an image scaled down to its content box.

    The image source (a path, file object, PIL image or ImageReader) is
    decoded on first use.
    """

    def __init__(self, image: Union[str, Path, ImageReader, object], **kwargs):
        super().__init__(**kwargs)
        self.source = image
        self._reader: Optional[ImageReader] = None

    @property
    def image(self) -> ImageReader:
        if self._reader is None:
            source = self.source
            if isinstance(source, Path):
                source = str(source)
            self._reader = source if isinstance(source, ImageReader) else ImageReader(source)
        return self._reader

    def render(self, document, page, left: float, top: float, width: float, height: float) -> None:
        pixel_width, pixel_height = self.image.getSize()
        image_width, image_height = fit_image(
            pixel_width,
            pixel_height,
            max(0.0, width - self.horizontal_inset),
            max(0.0, height - self.vertical_inset),
        )
        box_width = image_width + self.horizontal_inset
        box_height = image_height + self.vertical_inset
        box_left = left + (width - box_width) * self.h_factor
        box_top = top - (height - box_height) * self.v_factor

        super().render(document, page, box_left, box_top, box_width, box_height)

        image_left, image_top = self.content_origin(box_left, box_top)
        page.draw_image(image_left, image_top - image_height, image_width, image_height, self.image)


class TableCell(Cell):
    """A cell containing a nested table rendered over the full cell box."""

    def __init__(self, table, **kwargs):
        super().__init__(**kwargs)
        self.table = table

    def height(self, width: float) -> float:
        return self.table.height(width)

    def render(self, document, page, left: float, top: float, width: float, height: float) -> None:
        self.table.render_rows(document, page, 0, None, width, left, top)
