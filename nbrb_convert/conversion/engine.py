"""Apply resolved per-date rates to parsed records."""

from __future__ import annotations

import math
from typing import Mapping, Sequence

from nbrb_convert.ingestion.models import (
    NO_RATE_REASON,
    ConversionFailed,
    ConvertedOk,
    ConvertedRow,
    Record,
    RateUnavailable,
)


def usable_rate(value: float | RateUnavailable | None) -> float | None:
    """Return ``value`` as a float when it can divide an amount, else ``None``."""

    if value is None or isinstance(value, (bool, RateUnavailable)):
        return None
    if not isinstance(value, (int, float)):
        return None
    rate = float(value)
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate


def convert_record(record: Record, rate: float | RateUnavailable | None) -> ConvertedRow:
    checked = usable_rate(rate)
    if checked is None:
        return ConversionFailed(date=record.date, amount=record.amount, error_reason=NO_RATE_REASON)
    return ConvertedOk(
        date=record.date,
        amount=record.amount,
        rate=checked,
        converted_amount=record.amount / checked,
    )


def convert(
    records: Sequence[Record], rates: Mapping[str, float | RateUnavailable]
) -> list[ConvertedRow]:
    """Convert every record, keeping a 1:1 mapping and the input order.

    Rates are source-currency units per one target unit, so the converted
    amount is ``amount / rate``.
    """

    return [convert_record(record, rates.get(record.date)) for record in records]


__all__ = ["convert", "convert_record", "usable_rate"]
