"""Configuration dataclasses and YAML loading for table rendering."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError

PAGE_SIZE_NAMES = ("LETTER", "A4", "LEGAL")
ORIENTATIONS = ("portrait", "landscape")
STRIPE_MODES = ("rows", "columns")


@dataclass
class LayoutConfig:
    """Page and default formatting settings for rendering a table."""

    page_size: str = "LETTER"
    orientation: str = "portrait"  # "portrait" or "landscape"

    # Page margins in points (0.5 inch)
    margin_top: float = 36.0
    margin_bottom: float = 36.0
    margin_left: float = 36.0
    margin_right: float = 36.0

    # Defaults for columns that do not set their own
    font_name: str = "Helvetica"
    min_font_size: float = 6.0
    max_font_size: float = 10.0

    # Rows repeated after every page break
    header_rows: int = 1

    # Background striping: "rows", "columns" or None
    stripe: Optional[str] = "rows"
    stripe_color: str = "#F0F4F8"

    def __post_init__(self):
        self.page_size = self.page_size.upper()
        if self.page_size not in PAGE_SIZE_NAMES:
            raise ConfigError(f"Unknown page size {self.page_size!r}, expected one of {PAGE_SIZE_NAMES}")
        if self.orientation not in ORIENTATIONS:
            raise ConfigError(f"Unknown orientation {self.orientation!r}, expected one of {ORIENTATIONS}")
        if self.stripe is not None and self.stripe not in STRIPE_MODES:
            raise ConfigError(f"Unknown stripe mode {self.stripe!r}, expected one of {STRIPE_MODES}")
        if self.min_font_size > self.max_font_size:
            raise ConfigError("min_font_size must not exceed max_font_size")

    @classmethod
    def from_yaml(cls, path: Path) -> "LayoutConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at the top level")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"{path}: unknown settings {unknown}")

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        data = {
            "page_size": self.page_size,
            "orientation": self.orientation,
            "margin_top": self.margin_top,
            "margin_bottom": self.margin_bottom,
            "margin_left": self.margin_left,
            "margin_right": self.margin_right,
            "font_name": self.font_name,
            "min_font_size": self.min_font_size,
            "max_font_size": self.max_font_size,
            "header_rows": self.header_rows,
            "stripe": self.stripe,
            "stripe_color": self.stripe_color,
        }
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> LayoutConfig:
    """Load config from path or return default config."""
    if path is None:
        return LayoutConfig()
    return LayoutConfig.from_yaml(path)
