"""Page geometry used to place a table on PDF pages."""

from dataclasses import dataclass
from typing import Tuple

from reportlab.lib.pagesizes import A4, LEGAL, LETTER, landscape, portrait

from .config import LayoutConfig

PAGE_SIZES = {
    "LETTER": LETTER,  # 612 x 792 points
    "A4": A4,
    "LEGAL": LEGAL,
}
DEFAULT_MARGIN = 36  # 0.5 inch margins


@dataclass
class PageLayout:
    """Defines the layout parameters for a page."""
    page_width: float = LETTER[0]
    page_height: float = LETTER[1]
    margin_left: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN
    margin_top: float = DEFAULT_MARGIN
    margin_bottom: float = DEFAULT_MARGIN
    orientation: str = "portrait"  # "portrait" or "landscape"

    @classmethod
    def from_config(cls, config: LayoutConfig) -> "PageLayout":
        base = PAGE_SIZES[config.page_size]
        size = landscape(base) if config.orientation == "landscape" else portrait(base)
        return cls(
            page_width=size[0],
            page_height=size[1],
            margin_left=config.margin_left,
            margin_right=config.margin_right,
            margin_top=config.margin_top,
            margin_bottom=config.margin_bottom,
            orientation=config.orientation,
        )

    @property
    def page_size(self) -> Tuple[float, float]:
        return (self.page_width, self.page_height)

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_start_x(self) -> float:
        return self.margin_left

    @property
    def content_start_y(self) -> float:
        """Top of content area (PDF coordinates start at bottom)."""
        return self.page_height - self.margin_top
