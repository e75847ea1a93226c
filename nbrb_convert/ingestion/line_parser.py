"""Turn free-form ``date amount`` text into :class:`Record` rows."""

from __future__ import annotations

import math
import re
from pathlib import Path

from nbrb_convert.ingestion.models import Record

# First separator run splits the date from the rest of the line.
_DATE_SEPARATOR = re.compile(r"[;,\s]+")
_LEADING_SEPARATORS = re.compile(r"^[;,\s]+")
# Inside the remainder a comma followed by a digit is a decimal comma.
_AMOUNT_SEPARATOR = re.compile(r"[;\s]+|,(?!\d)")
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_amount(token: str) -> float | None:
    candidate = token.replace(",", ".", 1)
    if not _NUMBER_PATTERN.fullmatch(candidate):
        return None
    value = float(candidate)
    if not math.isfinite(value):
        return None
    return value


def _split_line(line: str) -> tuple[str, str]:
    parts = _DATE_SEPARATOR.split(_LEADING_SEPARATORS.sub("", line), maxsplit=1)
    date_token = parts[0]
    if len(parts) < 2:
        return date_token, ""
    amount_tokens = [token for token in _AMOUNT_SEPARATOR.split(parts[1]) if token]
    return date_token, amount_tokens[0] if amount_tokens else ""


def parse_line(line: str) -> Record | None:
    """Return a record for ``line`` or ``None`` when it is malformed."""

    stripped = line.strip()
    if not stripped:
        return None
    date_token, amount_token = _split_line(stripped)
    if not date_token:
        return None
    amount = _parse_amount(amount_token)
    if amount is None:
        return None
    return Record(date=date_token, amount=amount)


def parse_lines(text: str) -> list[Record]:
    """Parse every line of ``text``, silently dropping malformed ones.

    Any line-ending style is accepted. Input order is preserved.
    """

    records: list[Record] = []
    for line in text.splitlines():
        record = parse_line(line)
        if record is not None:
            records.append(record)
    return records


def read_input(path: str | Path, *, encoding: str = "utf-8") -> str:
    """Read an uploaded ``.csv``/``.txt`` file into a string."""

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(source)
    text = source.read_text(encoding=encoding)
    return text.removeprefix("\ufeff")


__all__ = ["parse_line", "parse_lines", "read_input"]
