"""Point-in-time currency conversion against a rate store."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from fx_ecb.db.base_store import RateStoreStrategy
from fx_ecb.errors import CurrencyUnavailable, UnknownRate
from fx_ecb.ingestion.models import Money
from fx_ecb.utils.currency import DEFAULT_REGISTRY, CurrencyRegistry
from fx_ecb.utils.date_range import parse_date
from fx_ecb.utils.ecb import BASE_CURRENCY, ECB_CURRENCIES

ONE = Decimal(1)


class ExchangeEngine:
    """Resolve rates (directly or via the base currency) and convert amounts.

    Rates published by the ECB are always quoted as ``EUR -> X``. A pair with no
    stored rate is resolved as a cross rate ``(EUR -> to) / (EUR -> from)``; the
    direct lookup and both base lookups happen inside one store transaction so
    they observe the same ingestion cycle.
    """

    def __init__(
        self,
        store: RateStoreStrategy,
        *,
        currencies: Iterable[str] = ECB_CURRENCIES,
        registry: CurrencyRegistry = DEFAULT_REGISTRY,
        base_currency: str = BASE_CURRENCY,
    ) -> None:
        self.store = store
        self.base_currency = base_currency.upper()
        self.currencies = frozenset(code.upper() for code in currencies)
        self.registry = registry

    def check_currency_available(self, currency: str) -> bool:
        code = str(currency).upper()
        if code == self.base_currency or code in self.currencies:
            return True
        raise CurrencyUnavailable(f"No rates available for {code}")

    def get_rate(
        self, from_currency: str, to_currency: str, rate_date: str | date | None = None
    ) -> Decimal | None:
        """Return the stored rate, ``1`` for identical currencies, or ``None``."""

        from_code = str(from_currency).upper()
        to_code = str(to_currency).upper()
        if from_code == to_code:
            return ONE
        self.check_currency_available(from_code)
        self.check_currency_available(to_code)
        return self.store.get_rate(from_code, to_code, rate_date)

    def resolve_rate(
        self, from_currency: str, to_currency: str, rate_date: str | date | None = None
    ) -> Decimal:
        """Return a direct or cross rate, raising :class:`UnknownRate` if neither exists."""

        from_code = str(from_currency).upper()
        to_code = str(to_currency).upper()
        with self.store.transaction(True):
            rate = self.get_rate(from_code, to_code, rate_date)
            if rate is not None:
                return rate
            from_base_rate = self.get_rate(self.base_currency, from_code, rate_date)
            to_base_rate = self.get_rate(self.base_currency, to_code, rate_date)

        if not from_base_rate or to_base_rate is None:
            raise UnknownRate(from_code, to_code, parse_date(rate_date))
        return to_base_rate / from_base_rate

    def convert(self, cents: int, from_currency: str, to_currency: str, rate: Decimal) -> int:
        """Apply ``rate`` to an amount in minor units, rounding half up."""

        from_subunit = self.registry.subunit_to_unit(from_currency)
        to_subunit = self.registry.subunit_to_unit(to_currency)
        amount = Decimal(cents) * to_subunit * rate / from_subunit
        return int(amount.quantize(ONE, rounding=ROUND_HALF_UP))

    def exchange(
        self, cents: int, from_currency: str, to_currency: str, rate_date: str | date | None = None
    ) -> int:
        rate = self.resolve_rate(from_currency, to_currency, rate_date)
        return self.convert(cents, from_currency, to_currency, rate)

    def exchange_with(
        self, money: Money, to_currency: str, rate_date: str | date | None = None
    ) -> Money:
        cents = self.exchange(money.cents, money.currency, to_currency, rate_date)
        return Money(cents=cents, currency=to_currency)


__all__ = ["ExchangeEngine"]
