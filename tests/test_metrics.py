"""Tests for the ReportLab-backed font metrics."""

import pytest

from table_flow.errors import MeasurementError, TableFlowError
from table_flow.metrics import FontMetrics, get_font_metrics, string_width
from table_flow.text import TextRun


class TestStringWidth:
    """Test suite for string measurement."""

    def test_courier_is_monospaced(self):
        assert string_width("abcde", "Courier", 10) == pytest.approx(30)
        assert string_width("iiiii", "Courier", 20) == pytest.approx(60)

    def test_unknown_font_raises(self):
        with pytest.raises(MeasurementError):
            string_width("abc", "No-Such-Font", 10)

    def test_measurement_error_is_table_flow_error(self):
        assert issubclass(MeasurementError, TableFlowError)


class TestFontMetrics:
    """Test suite for vertical metrics."""

    def test_scaling(self):
        metrics = FontMetrics(ascent=800, descent=-200, x_height=500)
        assert metrics.line_height(10) == pytest.approx(10)
        assert metrics.ascent_at(10) == pytest.approx(8)
        assert metrics.x_height_at(10) == pytest.approx(5)

    def test_standard_font(self):
        metrics = get_font_metrics("Helvetica")
        assert metrics.ascent > 0 > metrics.descent
        assert 0 < metrics.x_height < metrics.ascent

    def test_unknown_font_raises(self):
        with pytest.raises(MeasurementError):
            get_font_metrics("No-Such-Font")


class TestTextRun:
    """Test suite for run measurement."""

    def test_inherits_cell_font(self):
        assert TextRun("ab").width("Courier", 10) == pytest.approx(12)

    def test_own_font_and_size(self):
        run = TextRun("ab", font="Courier", font_size=20)
        assert run.width("Helvetica", 10) == pytest.approx(24)
        assert run.space_width("Helvetica", 10) == pytest.approx(12)

    def test_copy_keeps_formatting(self):
        run = TextRun("ab", underline=True, vertical_offset=2).copy("cd")
        assert run.text == "cd"
        assert run.underline and run.vertical_offset == 2
