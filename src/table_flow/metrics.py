"""Font metrics provider backed by ReportLab's pdfmetrics.

All metrics are expressed in the 1000-units-per-em convention and scaled by
the point size at call time.
"""

from dataclasses import dataclass
from functools import lru_cache

from reportlab.pdfbase import pdfmetrics

from .errors import MeasurementError

_LOOKUP_ERRORS = (KeyError, pdfmetrics.FontError, pdfmetrics.FontNotFoundError)


@dataclass(frozen=True)
class FontMetrics:
    """Vertical metrics of a font in 1000-units-per-em."""
    ascent: float
    descent: float  # Negative below the baseline
    x_height: float

    def line_height(self, font_size: float) -> float:
        """Height of one line of text at the given size."""
        return (self.ascent - self.descent) / 1000 * font_size

    def ascent_at(self, font_size: float) -> float:
        return self.ascent / 1000 * font_size

    def x_height_at(self, font_size: float) -> float:
        return self.x_height / 1000 * font_size


@lru_cache(maxsize=None)
def get_font_metrics(font_name: str) -> FontMetrics:
    """Look up ascent, descent and x-height for a registered font."""
    try:
        ascent, descent = pdfmetrics.getAscentDescent(font_name)
        face = pdfmetrics.getFont(font_name).face
    except _LOOKUP_ERRORS as exc:
        raise MeasurementError(f"Cannot load metrics for font {font_name!r}") from exc

    # Standard Type 1 faces carry no x-height; half the ascent is the usual stand-in
    x_height = getattr(face, "xHeight", None) or ascent / 2
    return FontMetrics(ascent=float(ascent), descent=float(descent), x_height=float(x_height))


def string_width(text: str, font_name: str, font_size: float) -> float:
    """Advance width of text rendered in font_name at font_size, in points."""
    try:
        return pdfmetrics.stringWidth(text, font_name, font_size)
    except _LOOKUP_ERRORS as exc:
        raise MeasurementError(f"Cannot measure text in font {font_name!r}") from exc
