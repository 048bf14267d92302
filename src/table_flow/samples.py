"""Synthetic general-ledger data for demonstrating multi-page tables."""

from datetime import date, timedelta
from typing import List, Optional

import numpy as np
from faker import Faker

from .cells import TextCell
from .config import LayoutConfig
from .loader import build_filler
from .styles import HAlign, get_bold_font
from .table import Column, Table

HEADERS = ["Date", "Reference", "Vendor", "Debit", "Credit", "Balance", "Description"]


def generate_ledger_rows(
    rng: np.random.Generator,
    fake: Faker,
    num_rows: int = 30,
    period_start: date = date(2024, 1, 1),
) -> List[dict]:
    """Generate data rows for a general ledger detail table."""
    rows = []
    balance = float(rng.uniform(10000, 50000))

    current_date = period_start
    for i in range(num_rows):
        current_date = current_date + timedelta(days=int(rng.integers(0, 3)))

        is_debit = rng.random() > 0.5
        amount = float(rng.uniform(100, 5000))

        if is_debit:
            debit = amount
            credit = 0.0
            balance += amount
        else:
            debit = 0.0
            credit = amount
            balance -= amount

        # Every few rows carries a long memo so some cells wrap or shrink
        nb_words = int(rng.choice([4, 4, 4, 12]))

        rows.append({
            "date": current_date,
            "reference": f"{'CHK' if is_debit else 'DEP'}{rng.integers(1000, 9999)}",
            "vendor": fake.company(),
            "description": fake.sentence(nb_words=nb_words),
            "debit": debit,
            "credit": credit,
            "balance": balance,
        })

    return rows


def format_amount(value: float) -> str:
    """Format a money amount, leaving zero amounts blank."""
    if value == 0:
        return ""
    if value < 0:
        return f"({abs(value):,.2f})"
    return f"{value:,.2f}"


def build_ledger_table(rows: List[dict], config: LayoutConfig) -> Table:
    """Lay out ledger rows as a table with a bold header and a totals row."""
    font = config.font_name
    bold = get_bold_font(font)
    min_size, max_size = config.min_font_size, config.max_font_size

    columns = [
        Column.fixed(60, font, max_size),
        Column.fixed(55, font, max_size),
        Column(80, 130, font, min_size, max_size),
        Column.fixed(65, font, max_size, HAlign.RIGHT),
        Column.fixed(65, font, max_size, HAlign.RIGHT),
        Column.fixed(70, font, max_size, HAlign.RIGHT),
        # Last column takes whatever width remains
        Column(100, 400, font, min_size, max_size),
    ]

    filler = None
    if config.stripe:
        filler = build_filler({"type": config.stripe, "color": config.stripe_color})

    table = Table(columns, header_rows=config.header_rows, filler=filler)
    table.add_row(*(TextCell(header, font=bold, h_align=HAlign.CENTER) for header in HEADERS))

    for row in rows:
        table.add_row(
            row["date"].strftime("%m/%d/%Y"),
            row["reference"],
            row["vendor"],
            format_amount(row["debit"]),
            format_amount(row["credit"]),
            format_amount(row["balance"]),
            row["description"],
        )

    if rows:
        table.add_row(
            TextCell("Totals", font=bold, col_span=3, h_align=HAlign.RIGHT),
            TextCell(format_amount(sum(r["debit"] for r in rows)), font=bold),
            TextCell(format_amount(sum(r["credit"] for r in rows)), font=bold),
            TextCell(format_amount(rows[-1]["balance"]), font=bold),
        )
    return table


def build_sample_table(
    config: Optional[LayoutConfig] = None,
    num_rows: int = 60,
    seed: int = 42,
) -> Table:
    """Build a reproducible ledger table of num_rows synthetic transactions."""
    config = config or LayoutConfig()
    rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(int(rng.integers(0, 2**31)))
    return build_ledger_table(generate_ledger_rows(rng, fake, num_rows), config)
