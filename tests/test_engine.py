from __future__ import annotations

from typing import get_args

import pytest

from nbrb_convert.conversion.engine import convert, usable_rate
from nbrb_convert.ingestion.models import (
    NO_RATE_REASON,
    UNAVAILABLE,
    ConversionFailed,
    ConvertedOk,
    ConvertedRow,
    Record,
)


def test_convert_divides_amount_by_rate() -> None:
    rows = convert([Record("2024-12-01", 150.50)], {"2024-12-01": 3.20})

    assert len(rows) == 1
    row = rows[0]
    assert isinstance(row, ConvertedOk)
    assert row.rate == 3.20
    assert row.converted_amount == pytest.approx(47.03125)
    assert row.status == "OK"


def test_convert_marks_unavailable_and_missing_dates() -> None:
    records = [Record("2024-12-05", 99.30), Record("2024-12-09", 1.0)]

    rows = convert(records, {"2024-12-05": UNAVAILABLE})

    assert rows == [
        ConversionFailed(date="2024-12-05", amount=99.30, error_reason=NO_RATE_REASON),
        ConversionFailed(date="2024-12-09", amount=1.0, error_reason=NO_RATE_REASON),
    ]
    assert all(row.status == NO_RATE_REASON for row in rows)


@pytest.mark.parametrize("rate", [0, 0.0, -3.2, float("nan"), float("inf"), True, "3.2", None])
def test_convert_rejects_unusable_rates(rate: object) -> None:
    rows = convert([Record("d", 10.0)], {"d": rate})  # type: ignore[dict-item]

    assert isinstance(rows[0], ConversionFailed)
    assert usable_rate(rate) is None  # type: ignore[arg-type]


def test_convert_preserves_order_and_length() -> None:
    records = [Record("b", 4.0), Record("a", 3.0), Record("b", 8.0), Record("c", 1.0)]
    rates = {"a": 1.5, "b": 2.0, "c": UNAVAILABLE}

    rows = convert(records, rates)

    assert [(row.date, row.amount) for row in rows] == [(r.date, r.amount) for r in records]
    assert [row.ok for row in rows] == [True, True, True, False]
    assert rows[0].rate == rows[2].rate == 2.0  # type: ignore[union-attr]


def test_rows_are_either_converted_or_failed() -> None:
    rows = convert([Record("a", 1.0), Record("b", 2.0)], {"a": 2.0})

    for row in rows:
        has_amount = hasattr(row, "converted_amount")
        has_error = hasattr(row, "error_reason")
        assert has_amount != has_error


def test_zero_amount_converts_to_zero() -> None:
    rows = convert([Record("a", 0.0)], {"a": 3.2})

    assert isinstance(rows[0], ConvertedOk)
    assert rows[0].converted_amount == 0.0


def test_converted_row_is_exactly_two_variants() -> None:
    assert get_args(ConvertedRow) == (ConvertedOk, ConversionFailed)

    rows = convert([Record("a", 1.0), Record("b", 2.0)], {"a": 2.0})

    assert all(isinstance(row, get_args(ConvertedRow)) for row in rows)
    assert all(type(row) in (ConvertedOk, ConversionFailed) for row in rows)
