"""Build tables from YAML table definitions."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from reportlab.lib.colors import Color, HexColor

from .cells import Cell, ImageCell, TableCell, TextCell
from .config import LayoutConfig
from .errors import ConfigError
from .fillers import CellFiller, ColumnStripe, RowStripe
from .styles import HAlign, VAlign
from .table import Column, Table
from .text import TextRun


def parse_color(value: Any) -> Color:
    """Parse a "#RRGGBB" string into a ReportLab colour."""
    try:
        return HexColor(value)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"Invalid colour {value!r}") from exc


def parse_h_align(value: Optional[str]) -> Optional[HAlign]:
    if value is None:
        return None
    try:
        return HAlign(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid horizontal alignment {value!r}") from exc


def parse_v_align(value: Optional[str]) -> Optional[VAlign]:
    if value is None:
        return None
    try:
        return VAlign(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid vertical alignment {value!r}") from exc


def _four(value: Any, name: str) -> tuple:
    """Expand a scalar or a 4-item list (top, left, right, bottom)."""
    if isinstance(value, (int, float)):
        return (float(value),) * 4
    if isinstance(value, (list, tuple)) and len(value) == 4:
        return tuple(float(v) for v in value)
    raise ConfigError(f"{name} must be a number or a list of four numbers, got {value!r}")


def build_filler(spec: Optional[Dict[str, Any]]) -> Optional[CellFiller]:
    """Create a striping filler from {type: rows|columns, color, inverted}."""
    if not spec:
        return None
    color = parse_color(spec.get("color", "#F0F4F8"))
    inverted = bool(spec.get("inverted", False))
    kind = spec.get("type", "rows")
    if kind == "rows":
        return RowStripe(color, inverted)
    if kind == "columns":
        return ColumnStripe(color, inverted)
    raise ConfigError(f"Unknown filler type {kind!r}")


def build_column(spec: Dict[str, Any], config: LayoutConfig) -> Column:
    """Create a column from either {width} or {min_width, max_width}."""
    if "width" in spec:
        min_width = max_width = float(spec["width"])
    else:
        min_width = float(spec.get("min_width", 0.0))
        max_width = float(spec.get("max_width", min_width))
    font_size = spec.get("font_size")
    try:
        column = Column(
            min_width=min_width,
            max_width=max_width,
            font=spec.get("font", config.font_name),
            min_font_size=float(spec.get("min_font_size", font_size or config.min_font_size)),
            max_font_size=float(spec.get("max_font_size", font_size or config.max_font_size)),
            h_align=parse_h_align(spec.get("align")) or HAlign.LEFT,
            v_align=parse_v_align(spec.get("valign")) or VAlign.MIDDLE,
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    if "border" in spec:
        column.set_border(*_four(spec["border"], "border"))
    return column


def _build_run(spec: Any) -> TextRun:
    if isinstance(spec, str):
        return TextRun(spec)
    return TextRun(
        text=str(spec.get("text", "")),
        font=spec.get("font"),
        font_size=spec.get("size"),
        vertical_offset=float(spec.get("offset", 0.0)),
        underline=bool(spec.get("underline", False)),
        strike=bool(spec.get("strike", False)),
    )


def build_cell(spec: Any, config: LayoutConfig, base_dir: Path) -> Any:
    """Create a cell from a definition.

    Plain values are returned unchanged so the table turns them into text
    cells; mappings select the cell variant by their image, table, text or
    runs key, or a blank cell when none is present.
    """
    if not isinstance(spec, dict):
        return spec

    common: Dict[str, Any] = {
        "col_span": int(spec.get("col_span", 1)),
        "row_span": int(spec.get("row_span", 1)),
        "min_width": float(spec.get("min_width", 0.0)),
        "min_height": float(spec.get("min_height", 0.0)),
        "h_align": parse_h_align(spec.get("align")),
        "v_align": parse_v_align(spec.get("valign")),
    }
    if "background" in spec:
        common["background"] = parse_color(spec["background"])
    if "padding" in spec:
        common["padding"] = _four(spec["padding"], "padding")
    if "border" in spec:
        common["border"] = _four(spec["border"], "border")

    cell: Cell
    if "image" in spec:
        cell = ImageCell(base_dir / spec["image"], **common)
    elif "table" in spec:
        cell = TableCell(build_table(spec["table"], config, base_dir), **common)
    elif "text" in spec or "runs" in spec:
        try:
            cell = TextCell(
                font=spec.get("font"),
                min_font_size=spec.get("min_font_size"),
                max_font_size=spec.get("max_font_size"),
                equally_spaced=bool(spec.get("equally_spaced", False)),
                draw_rows=bool(spec.get("draw_rows", False)),
                **common,
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        if "text" in spec:
            cell.add_text(str(spec["text"]))
        for run in spec.get("runs", []):
            cell.add_text(_build_run(run))
    else:
        cell = Cell(**common)
    return cell


def build_table(definition: Dict[str, Any], config: LayoutConfig, base_dir: Path = Path(".")) -> Table:
    """Create a table from a parsed definition mapping."""
    if not isinstance(definition, dict):
        raise ConfigError("A table definition must be a mapping")
    column_specs: List[Dict[str, Any]] = definition.get("columns") or []
    if not column_specs:
        raise ConfigError("A table definition needs at least one column")

    if "filler" in definition:
        filler = build_filler(definition["filler"])
    elif config.stripe:
        filler = build_filler({"type": config.stripe, "color": config.stripe_color})
    else:
        filler = None

    table = Table(
        columns=[build_column(spec, config) for spec in column_specs],
        header_rows=int(definition.get("header_rows", config.header_rows)),
        filler=filler,
    )
    if "border" in definition:
        table.set_border(*_four(definition["border"], "border"))

    for row in definition.get("rows") or []:
        if not isinstance(row, list):
            raise ConfigError(f"Each row must be a list of cells, got {row!r}")
        table.add_row(*(build_cell(cell, config, base_dir) for cell in row))
    return table


def load_table(path: Path, config: LayoutConfig) -> Table:
    """Load a table definition from a YAML file; relative image paths resolve against its folder."""
    with open(path, "r") as f:
        try:
            definition = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    return build_table(definition, config, Path(path).parent)
