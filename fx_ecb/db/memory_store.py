"""Thread-safe in-memory rate store keyed by currency pair and date."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator

from fx_ecb.db.base_store import RateStoreStrategy
from fx_ecb.utils.date_range import format_date, parse_date

INDEX_KEY_SEPARATOR = "_TO_"
INDEX_DATE_SEPARATOR = "_AT_"


def rate_key_for(
    currency_iso_from: str, currency_iso_to: str, rate_date: str | date | None = None
) -> str:
    """Build the index key ``FROM_TO_TO_AT_YYYY-MM-DD`` (date part empty for ``None``)."""

    key = INDEX_KEY_SEPARATOR.join([currency_iso_from, currency_iso_to])
    key = INDEX_DATE_SEPARATOR.join([key, format_date(parse_date(rate_date))])
    return key.upper()


def split_rate_key(key: str) -> tuple[str, str, date | None]:
    """Inverse of :func:`rate_key_for`."""

    pair, _, raw_date = key.partition(INDEX_DATE_SEPARATOR)
    iso_from, _, iso_to = pair.partition(INDEX_KEY_SEPARATOR)
    return iso_from, iso_to, parse_date(raw_date)


class MemoryRateStore(RateStoreStrategy):
    """Rate index guarded by a single re-entrant lock.

    Every public operation runs inside :meth:`transaction`. Because the lock is
    re-entrant, an operation called from within another transaction on the same
    thread runs inline instead of deadlocking. Construct the store with
    ``without_mutex=True`` to skip locking for non-forced transactions when it
    is only ever used from one thread.
    """

    def __init__(self, *, without_mutex: bool = False) -> None:
        self.without_mutex = without_mutex
        self._index: dict[str, Decimal] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self, force_sync: bool = False) -> Iterator["MemoryRateStore"]:
        if self.without_mutex and not force_sync:
            yield self
            return
        with self._lock:
            yield self

    def add_rate(
        self,
        currency_iso_from: str,
        currency_iso_to: str,
        rate: Decimal,
        rate_date: str | date | None = None,
    ) -> Decimal:
        key = rate_key_for(currency_iso_from, currency_iso_to, rate_date)
        with self.transaction():
            self._index[key] = rate
        return rate

    def get_rate(
        self,
        currency_iso_from: str,
        currency_iso_to: str,
        rate_date: str | date | None = None,
    ) -> Decimal | None:
        key = rate_key_for(currency_iso_from, currency_iso_to, rate_date)
        with self.transaction():
            return self._index.get(key)

    def each_rate(self) -> Iterator[tuple[str, str, Decimal, date | None]]:
        """Iterate over rate tuples ``(iso_from, iso_to, rate, date)``.

        The items are copied when iteration starts, so writes made while
        iterating (for example inside the same transaction) do not break the
        loop. Call again for a fresh pass.
        """

        with self.transaction():
            items = list(self._index.items())
        for key, rate in items:
            iso_from, iso_to, rate_date = split_rate_key(key)
            yield iso_from, iso_to, rate, rate_date

    def clear(self) -> None:
        with self.transaction():
            self._index.clear()

    def snapshot(self) -> dict[str, Decimal]:
        """Return a consistent copy of the underlying index."""

        with self.transaction(True):
            return dict(self._index)

    def __len__(self) -> int:
        with self.transaction():
            return len(self._index)


__all__ = [
    "MemoryRateStore",
    "rate_key_for",
    "split_rate_key",
    "INDEX_KEY_SEPARATOR",
    "INDEX_DATE_SEPARATOR",
]
