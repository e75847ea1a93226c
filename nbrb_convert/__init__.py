"""Public interface for the nbrb_convert package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from nbrb_convert.conversion.engine import convert
from nbrb_convert.conversion.errors import (
    ConversionError,
    EmptyInputError,
    ResolverFailure,
    SessionBusyError,
)
from nbrb_convert.conversion.pipeline import PipelineState, run_conversion
from nbrb_convert.conversion.resolver import RateResolver
from nbrb_convert.conversion.session import ConversionSession
from nbrb_convert.conversion.summary import summarize
from nbrb_convert.ingestion.line_parser import parse_lines, read_input
from nbrb_convert.ingestion.models import (
    NO_RATE_REASON,
    UNAVAILABLE,
    ConversionFailed,
    ConversionReport,
    ConvertedOk,
    ConvertedRow,
    RateMap,
    RateUnavailable,
    Record,
    Summary,
)
from nbrb_convert.ingestion.nbrb_api import DEFAULT_CURRENCY, NBRB_RATES_URL, NBRBRatesClient
from nbrb_convert.ingestion.strategy import RateLookupError, RateSource

__all__ = [
    "__version__",
    "NbrbConverter",
    "ConversionSession",
    "NBRBRatesClient",
    "RateResolver",
    "RateSource",
    "RateLookupError",
    "Record",
    "RateMap",
    "RateUnavailable",
    "UNAVAILABLE",
    "NO_RATE_REASON",
    "ConvertedRow",
    "ConvertedOk",
    "ConversionFailed",
    "Summary",
    "ConversionReport",
    "ConversionError",
    "EmptyInputError",
    "ResolverFailure",
    "SessionBusyError",
    "PipelineState",
    "parse_lines",
    "read_input",
    "convert",
    "summarize",
    "run_conversion",
]

try:
    __version__ = importlib_metadata.version("nbrb-convert")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class NbrbConverter:
    """Package facade wiring the parser, resolver, engine and aggregator together."""

    __slots__ = ("source", "resolver")

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        currency: str = DEFAULT_CURRENCY,
        *,
        source: Optional[RateSource] = None,
        base_url: str = NBRB_RATES_URL,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        """Configure where rates come from.

        Without ``source`` a :class:`NBRBRatesClient` for ``currency`` is built.
        Passing any object with ``fetch_rate(on_date) -> float`` replaces the
        HTTP client entirely, which is how tests and offline callers plug in.
        """

        self.source: RateSource = source or NBRBRatesClient(
            currency, base_url=base_url, timeout=timeout
        )
        self.resolver = RateResolver(self.source, max_workers=max_workers)

    def parse(self, text: str) -> list[Record]:
        return parse_lines(text)

    def resolve(self, dates: Iterable[str]) -> RateMap:
        return self.resolver.resolve(dates)

    def convert(
        self, records: Sequence[Record], rates: Mapping[str, float | RateUnavailable]
    ) -> list[ConvertedRow]:
        return convert(records, rates)

    def summarize(self, rows: Iterable[ConvertedRow]) -> Summary:
        return summarize(rows)

    def process(self, text: str) -> ConversionReport:
        """Run the full pipeline over ``text``; see :func:`run_conversion`."""

        return run_conversion(text, self.resolver)

    def process_file(self, path: str | Path, *, encoding: str = "utf-8") -> ConversionReport:
        return self.process(read_input(path, encoding=encoding))

    def session(self, input_text: str = "") -> ConversionSession:
        """Return caller-side state bound to this converter's resolver."""

        return ConversionSession(self.resolver, input_text=input_text)
