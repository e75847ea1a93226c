"""Summary statistics over converted rows."""

from __future__ import annotations

import math
from typing import Iterable

from nbrb_convert.ingestion.models import ConvertedOk, ConvertedRow, Summary


def summarize(rows: Iterable[ConvertedRow]) -> Summary:
    """Count successful rows and sum their converted amounts.

    Rows converted to exactly zero are counted. ``math.fsum`` keeps the total
    independent of row order.
    """

    amounts = [row.converted_amount for row in rows if isinstance(row, ConvertedOk)]
    return Summary(valid_count=len(amounts), total_converted=math.fsum(amounts))


__all__ = ["summarize"]
