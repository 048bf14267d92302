"""Command-line interface for rendering tables to PDF."""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .backend import PdfDocument
from .config import LayoutConfig, load_config
from .errors import TableFlowError
from .loader import load_table
from .page_layout import PageLayout
from .samples import build_sample_table
from .table import Table


def render_table(table: Table, config: LayoutConfig, out_path: Path) -> int:
    """
    Render a table into a new PDF laid out by config.

    Returns:
        Number of pages written
    """
    layout = PageLayout.from_config(config)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    document = PdfDocument(out_path, page_size=layout.page_size)
    table.render(
        document,
        layout.content_width,
        layout.content_start_x,
        layout.content_start_y,
        layout.margin_top,
        layout.margin_bottom,
    )
    document.save()
    return document.page_count


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Render tables into paginated PDF documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML layout configuration file",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--table",
        type=Path,
        help="Path to YAML table definition",
    )
    source.add_argument(
        "--sample-rows",
        type=int,
        default=60,
        help="Number of synthetic ledger rows when no table definition is given",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for synthetic rows",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("out/table.pdf"),
        help="Output PDF path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log layout decisions and page breaks",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = load_config(args.config)
        if args.table:
            table = load_table(args.table, config)
            print(f"Loaded table definition: {args.table}")
        else:
            table = build_sample_table(config, args.sample_rows, args.seed)
            print(f"Generated {args.sample_rows} synthetic ledger rows (seed {args.seed})")
        page_count = render_table(table, config, args.out)
    except (TableFlowError, OSError) as exc:
        print(f"Error: {exc}")
        return 1

    print("\nRender complete!")
    print(f"  Output: {args.out}")
    print(f"  Rows: {table.num_rows}")
    print(f"  Columns: {table.num_columns}")
    print(f"  Pages: {page_count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
