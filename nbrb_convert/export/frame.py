"""pandas view of a conversion result table."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from nbrb_convert.ingestion.models import ConvertedOk, ConvertedRow

FRAME_COLUMNS = ["date", "amount", "rate", "converted_amount", "status"]


def rows_to_frame(rows: Iterable[ConvertedRow]) -> pd.DataFrame:
    """Return one DataFrame row per converted row, NaN where nothing was converted."""

    records = []
    for row in rows:
        converted = isinstance(row, ConvertedOk)
        records.append(
            {
                "date": row.date,
                "amount": row.amount,
                "rate": row.rate if converted else float("nan"),
                "converted_amount": row.converted_amount if converted else float("nan"),
                "status": row.status,
            }
        )
    frame = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    return frame.astype({"amount": "float64", "rate": "float64", "converted_amount": "float64"})


__all__ = ["FRAME_COLUMNS", "rows_to_frame"]
