from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator

import pytest

from fx_ecb.db.base_store import RateStoreStrategy
from fx_ecb.db.rate_codec import RateImporter
from fx_ecb.errors import RateImportError


class _DummyStore(RateStoreStrategy):
    def __init__(self) -> None:
        self.rates: dict[tuple[str, str, date | None], Decimal] = {}

    def add_rate(self, currency_iso_from, currency_iso_to, rate, rate_date=None) -> Decimal:
        self.rates[(currency_iso_from, currency_iso_to, rate_date)] = rate
        return rate

    def get_rate(self, currency_iso_from, currency_iso_to, rate_date=None) -> Decimal | None:
        return self.rates.get((currency_iso_from, currency_iso_to, rate_date))

    @contextmanager
    def transaction(self, force_sync: bool = False) -> Iterator["_DummyStore"]:
        yield self

    def each_rate(self) -> Iterator[tuple[str, str, Decimal, date | None]]:
        for (iso_from, iso_to, rate_date), rate in list(self.rates.items()):
            yield iso_from, iso_to, rate, rate_date


def test_base_store_clear_raises_not_implemented() -> None:
    store = _DummyStore()

    with pytest.raises(NotImplementedError, match="_DummyStore does not support clear"):
        store.clear()


def test_import_into_store_without_clear_fails_before_writing() -> None:
    store = _DummyStore()
    document = b'{"2018-06-11": [{"from": "EUR", "to": "USD", "rate": "1.1659"}]}'

    with pytest.raises(NotImplementedError):
        RateImporter(store).load("json", document)

    assert store.rates == {}


def test_invalid_import_never_reaches_store() -> None:
    store = _DummyStore()

    with pytest.raises(RateImportError):
        RateImporter(store).load("json", b"not json")

    assert store.rates == {}
