"""CSV export of converted rows."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional, Sequence

from nbrb_convert.ingestion.models import ConvertedOk, ConvertedRow

CSV_HEADER = ("Date", "Amount", "Rate", "ConvertedAmount", "Status")


class ResultsCSVExporter:
    """Write a conversion result table to a CSV file."""

    def __init__(self, *, decimal_places: Optional[int] = None) -> None:
        if decimal_places is not None and decimal_places < 0:
            raise ValueError("decimal_places must not be negative")
        self.decimal_places = decimal_places

    def write(self, rows: Sequence[ConvertedRow], output_path: str | Path) -> Path:
        if not rows:
            raise ValueError("rows collection is empty")

        csv_path = Path(output_path)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with csv_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(CSV_HEADER)
            for row in rows:
                writer.writerow(self._row_values(row))
        return csv_path

    def _row_values(self, row: ConvertedRow) -> list[str]:
        if isinstance(row, ConvertedOk):
            rate, converted = self._format(row.rate), self._format(row.converted_amount)
        else:
            rate, converted = "", ""
        return [row.date, self._format(row.amount), rate, converted, row.status]

    def _format(self, value: float) -> str:
        if self.decimal_places is None:
            return f"{value}"
        return f"{value:.{self.decimal_places}f}"


__all__ = ["CSV_HEADER", "ResultsCSVExporter"]
