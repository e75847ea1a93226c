"""Resolve one exchange rate per distinct date with a thread-pool fan-out."""

from __future__ import annotations

import concurrent.futures as cf
from typing import Iterable, Optional

from nbrb_convert.conversion.engine import usable_rate
from nbrb_convert.conversion.errors import ResolverFailure
from nbrb_convert.ingestion.models import UNAVAILABLE, RateMap
from nbrb_convert.ingestion.strategy import RateSource
from nbrb_convert.utils.logger import get_logger

LOGGER = get_logger(__name__)

# Upper bound on concurrent lookups when the caller does not set one.
MAX_PARALLEL_LOOKUPS = 32


class RateResolver:
    """Look up each distinct date once, isolating per-date failures."""

    def __init__(self, source: RateSource, *, max_workers: Optional[int] = None) -> None:
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be positive")
        self.source = source
        self.max_workers = max_workers

    def _lookup(self, on_date: str) -> float | None:
        try:
            rate = self.source.fetch_rate(on_date)
        except Exception as exc:
            LOGGER.warning("Rate for %s unavailable: %s", on_date, exc)
            return None
        if usable_rate(rate) is None:
            LOGGER.warning("Rate for %s unavailable: unusable value %r", on_date, rate)
            return None
        return rate

    def resolve(self, dates: Iterable[str]) -> RateMap:
        """Return a map holding exactly one entry per distinct date."""

        distinct = list(dict.fromkeys(dates))
        if not distinct:
            return {}

        LOGGER.info("Resolving rates for %s distinct date(s)", len(distinct))
        workers = self.max_workers or MAX_PARALLEL_LOOKUPS
        try:
            with cf.ThreadPoolExecutor(max_workers=min(workers, len(distinct))) as ex:
                futures = {on_date: ex.submit(self._lookup, on_date) for on_date in distinct}
                cf.wait(futures.values())
            slots = {on_date: future.result() for on_date, future in futures.items()}
        except Exception as exc:
            raise ResolverFailure() from exc

        rates: RateMap = {}
        for on_date, rate in slots.items():
            rates[on_date] = UNAVAILABLE if rate is None else rate
        missing = sum(1 for value in rates.values() if value is UNAVAILABLE)
        if missing:
            LOGGER.info("%s of %s date(s) have no rate", missing, len(rates))
        return rates


def resolve_rates(
    dates: Iterable[str], source: RateSource, *, max_workers: Optional[int] = None
) -> RateMap:
    return RateResolver(source, max_workers=max_workers).resolve(dates)


__all__ = ["MAX_PARALLEL_LOOKUPS", "RateResolver", "ResolverFailure", "resolve_rates"]
