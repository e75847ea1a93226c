"""Single processing run: parse, resolve, convert, summarise."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Union

from nbrb_convert.conversion.engine import convert
from nbrb_convert.conversion.errors import EmptyInputError
from nbrb_convert.conversion.resolver import RateResolver
from nbrb_convert.conversion.summary import summarize
from nbrb_convert.ingestion.line_parser import parse_lines
from nbrb_convert.ingestion.models import ConversionReport
from nbrb_convert.ingestion.strategy import RateSource
from nbrb_convert.utils.logger import get_logger

LOGGER = get_logger(__name__)


class PipelineState(str, Enum):
    """Stages a processing run moves through."""

    IDLE = "idle"
    PARSING = "parsing"
    RESOLVING = "resolving"
    CONVERTING = "converting"
    SUMMARIZING = "summarizing"


StateListener = Callable[[PipelineState], None]


def _as_resolver(source: Union[RateResolver, RateSource]) -> RateResolver:
    if isinstance(source, RateResolver):
        return source
    return RateResolver(source)


def run_conversion(
    text: str,
    source: Union[RateResolver, RateSource],
    *,
    on_state: Optional[StateListener] = None,
) -> ConversionReport:
    """Run the whole pipeline over ``text``.

    Raises :class:`EmptyInputError` when no line parses and
    :class:`ResolverFailure` when the rate batch cannot run. Per-line and
    per-date problems never raise; they show up in the returned rows.
    """

    def _enter(state: PipelineState) -> None:
        if on_state is not None:
            on_state(state)

    resolver = _as_resolver(source)

    _enter(PipelineState.PARSING)
    records = parse_lines(text)
    if not records:
        raise EmptyInputError()
    LOGGER.info("Parsed %s record(s)", len(records))

    _enter(PipelineState.RESOLVING)
    rates = resolver.resolve(record.date for record in records)

    _enter(PipelineState.CONVERTING)
    rows = convert(records, rates)

    _enter(PipelineState.SUMMARIZING)
    summary = summarize(rows)
    LOGGER.info(
        "Converted %s of %s row(s), total %s", summary.valid_count, len(rows), summary.total_converted
    )
    return ConversionReport(rows=tuple(rows), summary=summary)


__all__ = ["PipelineState", "StateListener", "run_conversion"]
