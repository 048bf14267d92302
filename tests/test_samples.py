"""Tests for the synthetic ledger table."""

import numpy as np
import pytest
from faker import Faker

from table_flow.cells import TextCell
from table_flow.config import LayoutConfig
from table_flow.fillers import ColumnStripe, RowStripe
from table_flow.loader import build_filler
from table_flow.samples import HEADERS, build_sample_table, format_amount, generate_ledger_rows


def make_rows(seed, num_rows=20):
    rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(seed)
    return generate_ledger_rows(rng, fake, num_rows)


class TestLedgerRows:
    """Test suite for generate_ledger_rows."""

    def test_same_seed_same_rows(self):
        assert make_rows(7) == make_rows(7)

    def test_balance_follows_amounts(self):
        rows = make_rows(3)
        for previous, row in zip(rows, rows[1:]):
            assert row["balance"] == previous["balance"] + row["debit"] - row["credit"]

    def test_each_row_is_debit_or_credit(self):
        for row in make_rows(11):
            assert (row["debit"] == 0) != (row["credit"] == 0)

    def test_dates_never_decrease(self):
        rows = make_rows(5)
        assert all(a["date"] <= b["date"] for a, b in zip(rows, rows[1:]))


class TestSampleTable:
    """Test suite for build_sample_table."""

    def test_shape(self):
        table = build_sample_table(num_rows=12, seed=1)
        assert table.num_columns == len(HEADERS)
        # Header, 12 transactions and a totals row
        assert table.num_rows == 14
        assert all(row.column_count == len(HEADERS) for row in table.rows)
        assert table.rows[0].cells[0].text == "Date"

    def test_totals_row_spans_leading_columns(self):
        table = build_sample_table(num_rows=3, seed=1)
        totals = table.rows[-1].cells[0]
        assert isinstance(totals, TextCell)
        assert totals.text == "Totals"
        assert totals.col_span == 3

    def test_stripe_mode_from_config(self):
        assert isinstance(build_sample_table(LayoutConfig(), 2).filler, RowStripe)
        assert isinstance(build_sample_table(LayoutConfig(stripe="columns"), 2).filler, ColumnStripe)
        assert build_sample_table(LayoutConfig(stripe=None), 2).filler is None

    def test_stripes_match_yaml_tables(self):
        """The sample ledger stripes the same rows as a loaded table with the same config."""
        config = LayoutConfig()
        sample = build_sample_table(config, 2).filler
        loaded = build_filler({"type": config.stripe, "color": config.stripe_color})
        assert sample.inverted == loaded.inverted
        assert sample.color_for(0, 0) is not None
        assert sample.color_for(1, 0) is None

    def test_columns_fit_letter_width(self):
        table = build_sample_table(num_rows=30, seed=9)
        widths = table.column_widths(540)
        assert sum(widths) == pytest.approx(540)
        assert widths[-1] > 0

    def test_renders_to_several_pages(self, pdf_document):
        table = build_sample_table(num_rows=80, seed=2)
        table.render(pdf_document, 540, 36, 756, 36, 36)
        pdf_document.save()
        assert pdf_document.page_count > 1


class TestFormatAmount:
    """Test suite for money formatting."""

    def test_formats(self):
        assert format_amount(0) == ""
        assert format_amount(1234.5) == "1,234.50"
        assert format_amount(-20) == "(20.00)"
