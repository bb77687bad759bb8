"""ECB-specific constants and timeframe helpers used across the package."""

from __future__ import annotations

from enum import Enum
from typing import Final

from fx_ecb.errors import InvalidTimeframe

BASE_CURRENCY: Final[str] = "EUR"

ECB_RATES_URL: Final[str] = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-daily.xml"
ECB_90_DAY_URL: Final[str] = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist-90d.xml"
ECB_ALL_URL: Final[str] = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist.xml"

ECB_CURRENCIES: Final[tuple[str, ...]] = (
    "USD", "JPY", "BGN", "CZK", "DKK", "GBP", "HUF", "ILS", "ISK", "PLN", "RON",
    "SEK", "CHF", "NOK", "HRK", "RUB", "TRY", "AUD", "BRL", "CAD", "CNY", "HKD",
    "IDR", "INR", "KRW", "MXN", "MYR", "NZD", "PHP", "SGD", "THB", "ZAR",
)  # fmt: skip

INVALID_TIMEFRAME_MESSAGE = "Please use 'current', 'last_90_days' or 'all'"


class Timeframe(str, Enum):
    """ECB feeds selectable for ingestion."""

    CURRENT = "current"
    LAST_90_DAYS = "last_90_days"
    ALL = "all"

    @classmethod
    def coerce(cls, value: "Timeframe | str | None") -> "Timeframe":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidTimeframe(INVALID_TIMEFRAME_MESSAGE)


_TIMEFRAME_URLS: Final[dict[Timeframe, str]] = {
    Timeframe.CURRENT: ECB_RATES_URL,
    Timeframe.LAST_90_DAYS: ECB_90_DAY_URL,
    Timeframe.ALL: ECB_ALL_URL,
}


def url_for_timeframe(timeframe: Timeframe | str | None) -> str:
    """Return the ECB feed URL for ``timeframe`` or raise :class:`InvalidTimeframe`."""

    return _TIMEFRAME_URLS[Timeframe.coerce(timeframe)]


__all__ = [
    "BASE_CURRENCY",
    "ECB_RATES_URL",
    "ECB_90_DAY_URL",
    "ECB_ALL_URL",
    "ECB_CURRENCIES",
    "INVALID_TIMEFRAME_MESSAGE",
    "Timeframe",
    "url_for_timeframe",
]
