"""Data models shared across the parsing and conversion stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Union

NO_RATE_REASON = "no rate for date"


@dataclass(frozen=True, slots=True)
class Record:
    """A single ``(date, amount)`` pair parsed from one input line.

    ``date`` is kept exactly as typed; ``amount`` is in source-currency units.
    """

    date: str
    amount: float


class RateUnavailable(Enum):
    """Marker stored in a rate map for dates whose lookup failed."""

    UNAVAILABLE = "unavailable"

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return "UNAVAILABLE"


UNAVAILABLE = RateUnavailable.UNAVAILABLE

RateMap = Dict[str, Union[float, RateUnavailable]]


@dataclass(frozen=True, slots=True)
class _RowBase:
    """Fields shared by both kinds of result row; not constructed directly."""

    date: str
    amount: float


@dataclass(frozen=True, slots=True)
class ConvertedOk(_RowBase):
    """Row converted with ``converted_amount = amount / rate``."""

    rate: float
    converted_amount: float

    @property
    def ok(self) -> bool:
        return True

    @property
    def status(self) -> str:
        return "OK"


@dataclass(frozen=True, slots=True)
class ConversionFailed(_RowBase):
    """Row for which no usable rate was available."""

    error_reason: str = NO_RATE_REASON

    @property
    def ok(self) -> bool:
        return False

    @property
    def status(self) -> str:
        return self.error_reason


ConvertedRow = Union[ConvertedOk, ConversionFailed]


@dataclass(frozen=True, slots=True)
class Summary:
    """Totals derived from a set of converted rows."""

    valid_count: int = 0
    total_converted: float = 0.0


@dataclass(frozen=True, slots=True)
class ConversionReport:
    """Outcome of one processing run."""

    rows: tuple[ConvertedRow, ...] = ()
    summary: Summary = field(default_factory=Summary)


__all__ = [
    "NO_RATE_REASON",
    "Record",
    "RateUnavailable",
    "UNAVAILABLE",
    "RateMap",
    "ConvertedRow",
    "ConvertedOk",
    "ConversionFailed",
    "Summary",
    "ConversionReport",
]
