"""Public interface for the fx_ecb package."""

from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import IO, Any, Iterable

from fx_ecb.db.base_store import RateStoreStrategy
from fx_ecb.db.memory_store import MemoryRateStore
from fx_ecb.db.rate_codec import RateExporter, RateFormat, RateImporter, RatesDocument
from fx_ecb.errors import (
    CurrencyUnavailable,
    FeedContentMissing,
    FeedDownloadError,
    FeedParseError,
    FxECBError,
    InvalidFilePath,
    InvalidRateDate,
    InvalidTimeframe,
    RateImportError,
    UnknownRate,
    UnknownRateFormat,
)
from fx_ecb.exchange import ExchangeEngine
from fx_ecb.ingestion.ecb_xml import parse_feed
from fx_ecb.ingestion.models import ECBFeedParseResult, ForexRateRecord, Money
from fx_ecb.ingestion.strategy import FeedSource
from fx_ecb.utils.currency import DEFAULT_REGISTRY, CurrencyRegistry
from fx_ecb.utils.ecb import (
    BASE_CURRENCY,
    ECB_90_DAY_URL,
    ECB_ALL_URL,
    ECB_CURRENCIES,
    ECB_RATES_URL,
    Timeframe,
    url_for_timeframe,
)
from fx_ecb.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = [
    "__version__",
    "EuCentralBank",
    "ExchangeEngine",
    "MemoryRateStore",
    "Money",
    "RateFormat",
    "Timeframe",
    "ForexRateRecord",
    "ECB_CURRENCIES",
    "ECB_RATES_URL",
    "ECB_90_DAY_URL",
    "ECB_ALL_URL",
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

try:
    __version__ = importlib_metadata.version("fx-ecb")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class EuCentralBank:
    """Package facade wiring the ECB feed, the rate store and the exchange engine."""

    __slots__ = (
        "store",
        "currencies",
        "engine",
        "last_updated",
        "rates_updated_at",
        "_client",
        "_refresh_lock",
    )

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        store: RateStoreStrategy | None = None,
        *,
        currencies: Iterable[str] | None = None,
        client: FeedSource | None = None,
        registry: CurrencyRegistry | None = None,
    ) -> None:
        """Configure where rates live and which currencies are kept.

        ``store`` defaults to a fresh :class:`MemoryRateStore`; any object
        implementing :class:`RateStoreStrategy` can be supplied instead.
        ``currencies`` limits which ECB rates are kept on ingestion (all ECB
        currencies by default). ``client`` retrieves feed documents; when it is
        omitted an :class:`~fx_ecb.ingestion.ecb_requests.ECBRequestsClient` is
        created on first use. ``registry`` supplies minor-unit scaling and
        defaults to the ISO 4217 table.
        """

        self.store: RateStoreStrategy = store if store is not None else MemoryRateStore()
        self.currencies = tuple(
            code.upper() for code in (currencies if currencies is not None else ECB_CURRENCIES)
        )
        self.engine = ExchangeEngine(
            self.store,
            currencies=(*ECB_CURRENCIES, *self.currencies),
            registry=registry if registry is not None else DEFAULT_REGISTRY,
        )
        self.last_updated: datetime | None = None
        self.rates_updated_at: date | None = None
        self._client = client
        self._refresh_lock = threading.Lock()

    def _get_client(self) -> FeedSource:
        if self._client is None:
            from fx_ecb.ingestion.ecb_requests import ECBRequestsClient

            self._client = ECBRequestsClient()
        return self._client

    @staticmethod
    def url_for_timeframe(timeframe: Timeframe | str | None) -> str:
        return url_for_timeframe(timeframe)

    def update_exchange_rates(
        self,
        timeframe: Timeframe | str | None = Timeframe.CURRENT,
        *,
        file: str | Path | IO[bytes] | None = None,
    ) -> list[ForexRateRecord]:
        """Load an ECB feed and store its rates in one transaction.

        ``file`` (a path or binary stream) takes precedence over ``timeframe``.
        Without a file the timeframe is validated before anything is fetched.
        """

        if file is not None:
            parsed = parse_feed(file)
        else:
            url = self.url_for_timeframe(timeframe)
            parsed = parse_feed(self._get_client().fetch(url))
        return self.update_parsed_rates(parsed)

    def update_parsed_rates(self, parsed: ECBFeedParseResult) -> list[ForexRateRecord]:
        records = parsed.records(frozenset(self.currencies), base=BASE_CURRENCY)
        with self.store.transaction(True):
            for record in records:
                self.store.add_rate(
                    record.from_currency, record.to_currency, record.rate, record.rate_date
                )
            self._mark_refreshed(parsed.updated_at)
        LOGGER.info(
            "Stored %s ECB rates across %s dates (feed date %s)",
            len(records),
            len(parsed.rates),
            parsed.updated_at,
        )
        return records

    def _mark_refreshed(self, feed_date: date) -> None:
        with self._refresh_lock:
            now = datetime.now(timezone.utc)
            if self.last_updated is not None and now <= self.last_updated:
                now = self.last_updated + timedelta(microseconds=1)
            self.last_updated = now
            self.rates_updated_at = feed_date

    def check_currency_available(self, currency: str) -> bool:
        return self.engine.check_currency_available(currency)

    def get_rate(
        self, from_currency: str, to_currency: str, rate_date: str | date | None = None
    ) -> Decimal | None:
        return self.engine.get_rate(from_currency, to_currency, rate_date)

    def set_rate(
        self,
        from_currency: str,
        to_currency: str,
        rate: Decimal | str | int,
        rate_date: str | date | None = None,
    ) -> Decimal:
        value = rate if isinstance(rate, Decimal) else Decimal(str(rate))
        return self.store.add_rate(from_currency.upper(), to_currency.upper(), value, rate_date)

    def exchange(
        self, cents: int, from_currency: str, to_currency: str, rate_date: str | date | None = None
    ) -> int:
        """Convert ``cents`` of ``from_currency`` into minor units of ``to_currency``."""

        return self.engine.exchange(cents, from_currency, to_currency, rate_date)

    def exchange_with(
        self, money: Money, to_currency: str, rate_date: str | date | None = None
    ) -> Money:
        return self.engine.exchange_with(money, to_currency, rate_date)

    def rates(self) -> RatesDocument:
        """Return every stored rate grouped by date."""

        return RateExporter(self.store).rates()

    def export_rates(self, rate_format: RateFormat | str) -> bytes:
        return RateExporter(self.store).dump(rate_format)

    def import_rates(self, rate_format: RateFormat | str, content: bytes | str) -> "EuCentralBank":
        """Replace the store content with a document produced by :meth:`export_rates`."""

        RateImporter(self.store).load(rate_format, content)
        return self

    def save_rates(self, file_path: str | Path | None, url: str = ECB_RATES_URL) -> Path:
        """Download the raw feed at ``url`` into ``file_path``."""

        if not file_path:
            raise InvalidFilePath("A destination file path is required to save rates")
        return self._get_client().download(url, Path(file_path))


def __getattr__(name: str) -> Any:
    """Lazily import the HTTP client so importing fx_ecb stays cheap."""

    if name == "ECBRequestsClient":
        from fx_ecb.ingestion.ecb_requests import ECBRequestsClient as _client

        return _client
    raise AttributeError(f"module 'fx_ecb' has no attribute {name}")
