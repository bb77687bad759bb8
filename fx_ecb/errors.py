"""Exceptions raised by fx_ecb."""

from __future__ import annotations

from datetime import date


class FxECBError(Exception):
    """Base exception for every fx_ecb error."""


class InvalidTimeframe(FxECBError, ValueError):
    """Raised when an ingestion timeframe is not one of the ECB feeds."""


class FeedParseError(FxECBError):
    """Raised when an ECB feed cannot be parsed."""


class FeedContentMissing(FeedParseError):
    """Raised when a feed parses but carries no dated rate blocks."""


class FeedDownloadError(FxECBError):
    """Raised when the ECB endpoint responds with an HTTP error."""


class CurrencyUnavailable(FxECBError):
    """Raised when a currency is outside the recognized set."""


class UnknownRate(FxECBError):
    """Raised when no direct or cross rate exists for a pair on a date."""

    def __init__(self, from_currency: str, to_currency: str, rate_date: date | None) -> None:
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.rate_date = rate_date
        super().__init__(
            f"No conversion rate known for '{from_currency}' -> '{to_currency}' on {rate_date}"
        )


class UnknownRateFormat(FxECBError, ValueError):
    """Raised when an export/import format is not supported."""


class RateImportError(FxECBError):
    """Raised when import content cannot be decoded in the requested format."""


class InvalidFilePath(FxECBError, ValueError):
    """Raised when a save operation is called without a destination path."""


class InvalidRateDate(FxECBError, ValueError):
    """Raised when a rate date is not an ISO ``YYYY-MM-DD`` string or a date."""


__all__ = [
    "FxECBError",
    "InvalidTimeframe",
    "FeedParseError",
    "FeedContentMissing",
    "FeedDownloadError",
    "CurrencyUnavailable",
    "UnknownRate",
    "UnknownRateFormat",
    "RateImportError",
    "InvalidFilePath",
    "InvalidRateDate",
]
