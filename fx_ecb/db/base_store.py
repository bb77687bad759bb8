"""Rate store strategy interface for fx_ecb."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Iterator


class RateStoreStrategy(ABC):
    """Common interface implemented by every rate store."""

    @abstractmethod
    def add_rate(
        self,
        currency_iso_from: str,
        currency_iso_to: str,
        rate: Decimal,
        rate_date: str | date | None = None,
    ) -> Decimal:
        """Insert or replace the rate for one currency pair and date."""

    @abstractmethod
    def get_rate(
        self,
        currency_iso_from: str,
        currency_iso_to: str,
        rate_date: str | date | None = None,
    ) -> Decimal | None:
        """Return the stored rate or ``None`` when the key is unknown."""

    @abstractmethod
    def transaction(self, force_sync: bool = False) -> AbstractContextManager["RateStoreStrategy"]:
        """Return a context manager granting exclusive access to the index."""

    @abstractmethod
    def each_rate(self) -> Iterator[tuple[str, str, Decimal, date | None]]:
        """Yield ``(iso_from, iso_to, rate, date)`` for every stored entry."""

    def clear(self) -> None:
        """Stores that support wholesale replacement override this."""

        raise NotImplementedError(f"{type(self).__name__} does not support clear()")


__all__ = ["RateStoreStrategy"]
