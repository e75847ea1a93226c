"""Helpers for turning user-supplied date strings into NBRB ``ondate`` values."""

from __future__ import annotations

from datetime import date, datetime

ISO_FORMAT = "%Y-%m-%d"
_ACCEPTED_FORMATS = (ISO_FORMAT, "%d.%m.%Y")


def parse_date(value: str | date) -> date:
    """Parse an ISO (``YYYY-MM-DD``) or dotted (``DD.MM.YYYY``) date."""

    if isinstance(value, date):
        return value
    cleaned = value.strip()
    for fmt in _ACCEPTED_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


def to_ondate(value: str) -> str:
    """Return ``value`` as an ISO date, or unchanged when it is not a known format.

    Unparseable strings are forwarded verbatim so the rate source decides
    whether the date exists.
    """

    try:
        return parse_date(value).strftime(ISO_FORMAT)
    except ValueError:
        return value


__all__ = ["ISO_FORMAT", "parse_date", "to_ondate"]
