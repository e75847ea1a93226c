"""Abstractions for pluggable exchange-rate sources."""

from __future__ import annotations

from typing import Protocol


class RateLookupError(RuntimeError):
    """Raised when a rate for a single date cannot be obtained."""


class RateSource(Protocol):
    """Contract for fetching one official rate per calendar date.

    Implementations return the price of one unit of the target currency in
    source-currency units, or raise :class:`RateLookupError`.
    """

    def fetch_rate(self, on_date: str) -> float:
        ...  # pragma: no cover - protocol definition


__all__ = ["RateLookupError", "RateSource"]
