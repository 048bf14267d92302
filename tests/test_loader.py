"""Tests for building tables from YAML definitions."""

import pytest
import yaml
from PIL import Image
from reportlab.lib.colors import HexColor

from table_flow.cells import Cell, ImageCell, TableCell, TextCell
from table_flow.config import LayoutConfig
from table_flow.errors import ConfigError
from table_flow.fillers import ColumnStripe, RowStripe
from table_flow.loader import build_cell, build_column, build_table, load_table, parse_color
from table_flow.styles import HAlign, VAlign

DEFINITION = """
header_rows: 1
filler: {type: columns, color: "#DDDDDD", inverted: true}
columns:
  - {width: 80, align: right}
  - {min_width: 40, max_width: 200, font: Courier, font_size: 9}
rows:
  - [Name, Notes]
  - - {text: Total, col_span: 2, align: center, background: "#FF0000"}
  - - {runs: [plain, {text: " struck", strike: true}]}
    - null
    - extra
"""


@pytest.fixture
def config():
    return LayoutConfig()


class TestBuildTable:
    """Test suite for build_table."""

    def test_columns_rows_and_filler(self, config):
        table = build_table(yaml.safe_load(DEFINITION), config)

        assert table.num_columns == 2
        assert table.columns[0].is_fixed
        assert table.columns[0].h_align is HAlign.RIGHT
        assert table.columns[1].font == "Courier"
        assert table.columns[1].max_font_size == 9
        assert isinstance(table.filler, ColumnStripe)
        assert table.filler.inverted
        assert table.num_rows == 3
        assert [cell.text for cell in table.rows[0]] == ["Name", "Notes"]

    def test_mapping_cells(self, config):
        table = build_table(yaml.safe_load(DEFINITION), config)
        total = table.rows[1].cells[0]
        assert total.col_span == 2
        assert total.h_align is HAlign.CENTER
        assert total.background.rgb() == HexColor("#FF0000").rgb()

        runs = table.rows[2].cells[0].runs
        assert [run.text for run in runs] == ["plain", " struck"]
        assert runs[1].strike
        # null cells are skipped so "extra" lands in the second column
        assert table.rows[2].cells[1].text == "extra"

    def test_config_stripe_used_without_filler(self, config):
        table = build_table({"columns": [{"width": 50}], "rows": [["a"]]}, config)
        assert isinstance(table.filler, RowStripe)

    def test_no_stripe(self):
        table = build_table({"columns": [{"width": 50}]}, LayoutConfig(stripe=None))
        assert table.filler is None

    def test_table_border(self, config):
        table = build_table({"columns": [{"width": 50}], "border": 0}, config)
        assert table.top_border == 0

    def test_requires_columns(self, config):
        with pytest.raises(ConfigError):
            build_table({"rows": [["a"]]}, config)

    def test_rows_must_be_lists(self, config):
        with pytest.raises(ConfigError):
            build_table({"columns": [{"width": 50}], "rows": ["a"]}, config)

    def test_definition_must_be_mapping(self, config):
        with pytest.raises(ConfigError):
            build_table(["columns"], config)


class TestBuildCell:
    """Test suite for build_cell."""

    def test_plain_values_pass_through(self, config, tmp_path):
        assert build_cell("text", config, tmp_path) == "text"
        assert build_cell(42, config, tmp_path) == 42

    def test_blank_cell(self, config, tmp_path):
        cell = build_cell({"min_height": 20, "valign": "bottom", "padding": [1, 2, 3, 4]}, config, tmp_path)
        assert type(cell) is Cell
        assert cell.min_height == 20
        assert cell.v_align is VAlign.BOTTOM
        assert (cell.top_padding, cell.left_padding, cell.right_padding, cell.bottom_padding) == (1, 2, 3, 4)

    def test_text_cell_options(self, config, tmp_path):
        cell = build_cell({"text": "a", "font": "Courier", "min_font_size": 6, "max_font_size": 8,
                           "draw_rows": True, "border": 0.5}, config, tmp_path)
        assert isinstance(cell, TextCell)
        assert (cell.font, cell.min_font_size, cell.max_font_size) == ("Courier", 6, 8)
        assert cell.draw_rows
        assert cell.left_border == 0.5

    def test_image_cell_relative_to_definition(self, config, tmp_path):
        Image.new("RGB", (8, 4)).save(tmp_path / "logo.png")
        cell = build_cell({"image": "logo.png"}, config, tmp_path)
        assert isinstance(cell, ImageCell)
        assert cell.image.getSize() == (8, 4)

    def test_nested_table(self, config, tmp_path):
        spec = {"table": {"columns": [{"width": 30}, {"width": 30}], "rows": [["a", "b"]]}}
        cell = build_cell(spec, config, tmp_path)
        assert isinstance(cell, TableCell)
        assert cell.table.num_rows == 1

    @pytest.mark.parametrize("spec", [
        {"text": "a", "align": "justify"},
        {"text": "a", "valign": "centre"},
        {"text": "a", "background": "not-a-colour"},
        {"text": "a", "padding": [1, 2]},
        {"text": "a", "min_font_size": 12, "max_font_size": 8},
    ])
    def test_invalid_cells(self, config, tmp_path, spec):
        with pytest.raises(ConfigError):
            build_cell(spec, config, tmp_path)


class TestBuildColumn:
    """Test suite for build_column."""

    def test_defaults_from_config(self):
        column = build_column({"min_width": 10, "max_width": 90}, LayoutConfig(font_name="Times-Roman"))
        assert column.font == "Times-Roman"
        assert (column.min_font_size, column.max_font_size) == (6.0, 10.0)

    def test_max_defaults_to_min(self, config):
        assert build_column({"min_width": 25}, config).is_fixed

    def test_bad_bounds(self, config):
        with pytest.raises(ConfigError):
            build_column({"min_width": 100, "max_width": 10}, config)


class TestLoadTable:
    """Test suite for load_table."""

    def test_load_file(self, config, tmp_path):
        path = tmp_path / "table.yaml"
        path.write_text(DEFINITION)
        table = load_table(path, config)
        assert table.num_rows == 3

    def test_invalid_yaml(self, config, tmp_path):
        path = tmp_path / "table.yaml"
        path.write_text("columns: [\n")
        with pytest.raises(ConfigError):
            load_table(path, config)

    def test_parse_color(self):
        assert parse_color("#336699").rgb() == pytest.approx((0.2, 0.4, 0.6))
