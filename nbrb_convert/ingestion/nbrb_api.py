"""requests-based client for the National Bank of the Republic of Belarus rate API."""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import requests

from nbrb_convert.ingestion.strategy import RateLookupError
from nbrb_convert.utils.dates import to_ondate
from nbrb_convert.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from requests import Response

LOGGER = get_logger(__name__)

NBRB_RATES_URL = "https://api.nbrb.by/exrates/rates"
DEFAULT_CURRENCY = "USD"
# ``parammode=2`` makes the API look the currency up by its ISO letter code.
PARAMMODE_ISO_CODE = 2


@dataclass(frozen=True)
class NBRBEndpoint:
    """Where and how the official daily rate is requested."""

    currency: str = DEFAULT_CURRENCY
    base_url: str = NBRB_RATES_URL
    timeout: Optional[float] = None

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.currency}"

    def params(self, on_date: str) -> dict[str, Any]:
        return {"parammode": PARAMMODE_ISO_CODE, "ondate": to_ondate(on_date)}


class NBRBRatesClient:
    """Fetch one official BYN rate per date for a fixed target currency."""

    rate_field = "Cur_OfficialRate"
    scale_field = "Cur_Scale"

    def __init__(
        self,
        currency: str = DEFAULT_CURRENCY,
        *,
        base_url: str = NBRB_RATES_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not currency or not currency.strip():
            raise ValueError("currency must be a non-empty ISO code")
        self.endpoint = NBRBEndpoint(
            currency=currency.strip().upper(), base_url=base_url, timeout=timeout
        )
        self._shared_session = session
        self._local = threading.local()
        self._owned_sessions: list[requests.Session] = []
        self._sessions_lock = threading.Lock()
        if session is not None:
            session.headers.setdefault("Accept", "application/json")

    @property
    def currency(self) -> str:
        return self.endpoint.currency

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread.

        An injected session is used as-is by every thread; otherwise each
        thread gets its own, since ``requests.Session`` is not thread-safe.
        """

        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.setdefault("Accept", "application/json")
            self._local.session = session
            with self._sessions_lock:
                self._owned_sessions.append(session)
        return session

    def fetch_rate(self, on_date: str) -> float:
        """Return BYN per one unit of the target currency on ``on_date``."""

        params = self.endpoint.params(on_date)
        LOGGER.debug("Requesting %s rate for %s", self.currency, params["ondate"])
        try:
            response = self.session.get(
                self.endpoint.url, params=params, timeout=self.endpoint.timeout
            )
        except requests.RequestException as exc:
            raise RateLookupError(f"NBRB request for {on_date} failed: {exc}") from exc
        self._raise_with_context(response, on_date)
        try:
            payload = response.json()
        except ValueError as exc:
            raise RateLookupError(f"NBRB returned a non-JSON body for {on_date}") from exc
        return self._extract_rate(payload, on_date)

    def _raise_with_context(self, response: "Response", on_date: str) -> None:
        if not response.ok:
            raise RateLookupError(
                f"NBRB responded with HTTP {response.status_code} for {self.currency} on {on_date}"
            )

    @classmethod
    def _extract_rate(cls, payload: Any, on_date: str) -> float:
        if not isinstance(payload, dict):
            raise RateLookupError(f"Unexpected NBRB payload for {on_date}")
        rate = _positive_number(payload.get(cls.rate_field))
        if rate is None:
            raise RateLookupError(f"NBRB payload for {on_date} has no usable {cls.rate_field}")
        scale = _positive_number(payload.get(cls.scale_field)) or 1.0
        return rate / scale

    def close(self) -> None:
        with self._sessions_lock:
            owned, self._owned_sessions = self._owned_sessions, []
        for session in owned:
            session.close()
        self._local = threading.local()

    def __enter__(self) -> "NBRBRatesClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _positive_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


__all__ = [
    "DEFAULT_CURRENCY",
    "NBRB_RATES_URL",
    "NBRBEndpoint",
    "NBRBRatesClient",
]
