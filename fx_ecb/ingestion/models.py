"""Data models shared across ingestion, storage and exchange modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(slots=True, frozen=True)
class ForexRateRecord:
    """Price of one unit of ``from_currency`` expressed in ``to_currency``."""

    rate_date: date | None
    from_currency: str
    to_currency: str
    rate: Decimal


@dataclass(slots=True)
class ECBFeedParseResult:
    """Represents the parsed content of a single ECB XML document."""

    updated_at: date
    rates: dict[date, list[tuple[str, str]]] = field(default_factory=dict)

    def records(
        self, currencies: tuple[str, ...] | frozenset[str] | None = None, *, base: str = "EUR"
    ) -> list[ForexRateRecord]:
        """Return ``base -> currency`` records, keeping only ``currencies`` when given."""

        rows: list[ForexRateRecord] = []
        for rate_date, exchange_rates in self.rates.items():
            for currency, rate in exchange_rates:
                if currencies is not None and currency not in currencies:
                    continue
                rows.append(
                    ForexRateRecord(
                        rate_date=rate_date,
                        from_currency=base,
                        to_currency=currency,
                        rate=Decimal(rate),
                    )
                )
        return rows


@dataclass(slots=True, frozen=True)
class Money:
    """An amount in minor units (``cents``) of ``currency``."""

    cents: int
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", self.currency.upper())
