"""Greedy line breaking and font-size fitting for text cells."""

import logging
import math
import re
from typing import List, Sequence

from .metrics import FontMetrics, get_font_metrics
from .text import TextRun

logger = logging.getLogger(__name__)

# Bisection stops once the step falls below this many points
SIZE_TOLERANCE = 0.01

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = re.compile(r"\s")

Line = List[TextRun]


def split_paragraphs(runs: Sequence[TextRun]) -> List[Line]:
    """Split runs into paragraphs of words.

    Paragraphs are separated by explicit line breaks. Within a paragraph every
    run is split at each whitespace character, and each word keeps the
    formatting of the run it came from. A run boundary is also a word
    boundary. Consecutive whitespace yields empty words, so joining a
    paragraph's words with single spaces gives back its text, except that
    whitespace ending a run adds one extra space at the run boundary.
    """
    if not runs:
        return [[TextRun("")]]

    paragraphs: List[Line] = [[]]
    for run in runs:
        for index, segment in enumerate(_LINE_BREAK.split(run.text)):
            if index > 0:
                paragraphs.append([])
            paragraphs[-1].extend(run.copy(word) for word in _WHITESPACE.split(segment))
    return paragraphs


class TextFlow:
    """Lays out a cell's paragraphs inside a box.

    horizontal_inset and vertical_inset are the space taken by padding and
    the inner halves of the borders; widths and heights passed in and
    returned always include them.
    """

    def __init__(
        self,
        paragraphs: List[Line],
        font: str,
        min_font_size: float,
        max_font_size: float,
        horizontal_inset: float = 0.0,
        vertical_inset: float = 0.0,
    ):
        self.paragraphs = paragraphs
        self.font = font
        self.min_font_size = min_font_size
        self.max_font_size = max_font_size
        self.horizontal_inset = horizontal_inset
        self.vertical_inset = vertical_inset

    @property
    def metrics(self) -> FontMetrics:
        return get_font_metrics(self.font)

    def break_lines(self, width: float, font_size: float) -> List[Line]:
        """Greedily pack words into lines no wider than the content width.

        A word is appended while the current line width plus the word plus one
        space still fits; otherwise it starts a new line. A word is never
        split, so a single word wider than the box gets a line of its own.
        """
        available = width - self.horizontal_inset
        lines: List[Line] = []
        for paragraph in self.paragraphs:
            if len(paragraph) == 1:
                lines.append(paragraph)
                continue
            current = [paragraph[0]]
            line_width = paragraph[0].width(self.font, font_size)
            for word in paragraph[1:]:
                word_width = word.width(self.font, font_size)
                space = word.space_width(self.font, font_size)
                if line_width + word_width + space <= available:
                    current.append(word)
                    line_width += word_width + space
                else:
                    lines.append(current)
                    current = [word]
                    line_width = word_width
            lines.append(current)
        return lines

    def line_width(self, line: Line, font_size: float) -> float:
        """Measured width of a line including the horizontal inset."""
        width = self.horizontal_inset
        for index, word in enumerate(line):
            if index > 0:
                width += word.space_width(self.font, font_size)
            width += word.width(self.font, font_size)
        return width

    def text_height(self, line_count: int, font_size: float) -> float:
        """Height of line_count lines plus inter-line leading and the vertical inset."""
        leading = (line_count - 1) * font_size / 10
        return line_count * self.metrics.line_height(font_size) + leading + self.vertical_inset

    def fits(self, font_size: float, width: float, height: float) -> bool:
        """Check whether the text wrapped at font_size fits width and height."""
        lines = self.break_lines(width, font_size)
        if self.text_height(len(lines), font_size) > height:
            return False
        return all(self.line_width(line, font_size) <= width for line in lines)

    def best_font_size(self, width: float, height: float) -> float:
        """Largest font size found in [min_font_size, max_font_size] that fits the box.

        The maximum is tried first. Otherwise a bisection starting at the
        midpoint moves up after a fit and down after a miss, halving its step
        until it drops below SIZE_TOLERANCE, and returns the best fitting size
        seen (min_font_size if none fit).
        """
        if self.fits(self.max_font_size, width, height):
            return self.max_font_size

        best = self.min_font_size
        font_size = (self.min_font_size + self.max_font_size) / 2
        step = (self.max_font_size - self.min_font_size) / 4
        while step >= SIZE_TOLERANCE:
            if self.fits(font_size, width, height):
                best = font_size
                font_size += step
            else:
                font_size -= step
            step /= 2

        if best == self.min_font_size and not self.fits(best, width, height):
            logger.debug("Text does not fit %.2fx%.2f even at %.2fpt", width, height, best)
        return best

    def height_for_width(self, width: float, min_height: float = 0.0) -> float:
        """Height the text needs at the given width.

        The first pass assumes a single line at max_font_size bounds the height;
        if the fitted text still needs more than that, it wrapped, and the size
        is searched again without a height limit.
        """
        single_line = self.text_height(1, self.max_font_size)
        font_size = self.best_font_size(width, single_line)
        height = max(min_height, self.text_height(len(self.break_lines(width, font_size)), font_size))
        if height > single_line:
            font_size = self.best_font_size(width, math.inf)
            height = max(min_height, self.text_height(len(self.break_lines(width, font_size)), font_size))
        return height

    def natural_width(self) -> float:
        """Width of the widest paragraph laid out on one line at min_font_size."""
        return max(self.line_width(paragraph, self.min_font_size) for paragraph in self.paragraphs)
