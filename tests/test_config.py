"""Tests for layout configuration and page geometry."""

import pytest
from reportlab.lib.pagesizes import A4, LETTER

from table_flow.config import LayoutConfig, load_config
from table_flow.errors import ConfigError
from table_flow.page_layout import PageLayout


class TestLayoutConfig:
    """Test suite for LayoutConfig."""

    def test_defaults(self):
        config = load_config()
        assert config.page_size == "LETTER"
        assert config.margin_top == 36.0
        assert config.header_rows == 1
        assert config.stripe == "rows"

    def test_page_size_is_normalised(self):
        assert LayoutConfig(page_size="a4").page_size == "A4"

    @pytest.mark.parametrize("kwargs", [
        {"page_size": "B5"},
        {"orientation": "sideways"},
        {"stripe": "diagonal"},
        {"min_font_size": 12, "max_font_size": 8},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigError):
            LayoutConfig(**kwargs)

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "layout.yaml"
        config = LayoutConfig(page_size="A4", orientation="landscape", margin_left=18, stripe=None)
        config.to_yaml(path)
        assert LayoutConfig.from_yaml(path) == config

    def test_partial_yaml_keeps_defaults(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text("font_name: Courier\nheader_rows: 2\n")
        config = load_config(path)
        assert config.font_name == "Courier"
        assert config.header_rows == 2
        assert config.max_font_size == 10.0

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text("")
        assert load_config(path) == LayoutConfig()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text("page_colour: red\n")
        with pytest.raises(ConfigError, match="page_colour"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "layout.yaml"
        path.write_text("margin_top: [1, 2\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestPageLayout:
    """Test suite for PageLayout."""

    def test_default_letter(self):
        layout = PageLayout()
        assert layout.page_size == LETTER
        assert layout.content_width == 612 - 72
        assert layout.content_start_y == 792 - 36

    def test_landscape_letter(self):
        layout = PageLayout.from_config(LayoutConfig(orientation="landscape"))
        assert layout.page_size == (792, 612)
        assert layout.content_start_y == 612 - 36

    def test_from_config(self):
        config = LayoutConfig(page_size="A4", orientation="landscape", margin_left=10, margin_right=20,
                              margin_top=30)
        layout = PageLayout.from_config(config)
        assert layout.page_width == pytest.approx(A4[1])
        assert layout.page_height == pytest.approx(A4[0])
        assert layout.content_width == pytest.approx(A4[1] - 30)
        assert layout.content_start_x == 10
        assert layout.content_start_y == pytest.approx(A4[0] - 30)
