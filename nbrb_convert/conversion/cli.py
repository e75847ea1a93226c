"""Convert dated BYN amounts into another currency at official NBRB rates."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from nbrb_convert.conversion.errors import ConversionError
from nbrb_convert.conversion.pipeline import run_conversion
from nbrb_convert.conversion.resolver import RateResolver
from nbrb_convert.export.frame import rows_to_frame
from nbrb_convert.export.results_csv import ResultsCSVExporter
from nbrb_convert.ingestion.line_parser import read_input
from nbrb_convert.ingestion.models import ConversionReport
from nbrb_convert.ingestion.nbrb_api import DEFAULT_CURRENCY, NBRB_RATES_URL, NBRBRatesClient
from nbrb_convert.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "render_report", "main"]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Text/CSV file with one 'YYYY-MM-DD amount' per line ('-' or omitted reads stdin)",
    )
    parser.add_argument(
        "--currency",
        default=DEFAULT_CURRENCY,
        help="Target currency ISO code (default: %(default)s)",
    )
    parser.add_argument(
        "--base-url",
        default=NBRB_RATES_URL,
        help="NBRB rates endpoint (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Optional per-request timeout in seconds",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Maximum concurrent rate lookups (default: one per distinct date)",
    )
    parser.add_argument(
        "--csv",
        dest="csv_path",
        help="Also write the result table to this CSV file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every rate request",
    )
    return parser.parse_args(argv)


def _read_text(source: str, stdin: TextIO) -> str:
    if source == "-":
        return stdin.read()
    return read_input(source)


def render_report(report: ConversionReport, currency: str) -> str:
    """Format rows and totals for terminal output."""

    frame = rows_to_frame(report.rows)
    table = frame.to_string(
        index=False,
        na_rep="-",
        formatters={
            "amount": "{:.2f}".format,
            "rate": lambda value: "-" if value != value else f"{value:.4f}",
            "converted_amount": lambda value: "-" if value != value else f"{value:.2f}",
        },
    )
    summary = report.summary
    return (
        f"{table}\n\nValid rows: {summary.valid_count}\n"
        f"Total {currency}: {summary.total_converted:.2f}"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    set_verbosity(args.verbose)
    try:
        text = _read_text(args.input, sys.stdin)
    except FileNotFoundError as exc:
        print(f"Input file not found: {exc}", file=sys.stderr)
        return 1

    with NBRBRatesClient(args.currency, base_url=args.base_url, timeout=args.timeout) as client:
        resolver = RateResolver(client, max_workers=args.workers)
        try:
            report = run_conversion(text, resolver)
        except ConversionError as exc:
            print(exc.message, file=sys.stderr)
            return 1

    print(render_report(report, client.currency))
    if args.csv_path:
        path = ResultsCSVExporter().write(report.rows, args.csv_path)
        LOGGER.info("Saved results -> %s", path)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
