"""Currency registry providing ISO 4217 minor-unit scaling."""

from __future__ import annotations

from typing import Final, Protocol

from fx_ecb.errors import CurrencyUnavailable

# Number of decimal places in the minor unit of each currency the ECB has
# published a reference rate for (including retired legacy currencies).
ISO_4217_EXPONENTS: Final[dict[str, int]] = {
    "EUR": 2,
    "AUD": 2,
    "BGN": 2,
    "BRL": 2,
    "CAD": 2,
    "CHF": 2,
    "CNY": 2,
    "CYP": 2,
    "CZK": 2,
    "DKK": 2,
    "EEK": 2,
    "GBP": 2,
    "HKD": 2,
    "HRK": 2,
    "HUF": 2,
    "IDR": 2,
    "ILS": 2,
    "INR": 2,
    "ISK": 0,
    "JPY": 0,
    "KRW": 0,
    "LTL": 2,
    "LVL": 2,
    "MTL": 2,
    "MXN": 2,
    "MYR": 2,
    "NOK": 2,
    "NZD": 2,
    "PHP": 2,
    "PLN": 2,
    "ROL": 2,
    "RON": 2,
    "RUB": 2,
    "SEK": 2,
    "SGD": 2,
    "SIT": 2,
    "SKK": 2,
    "THB": 2,
    "TRL": 0,
    "TRY": 2,
    "USD": 2,
    "ZAR": 2,
}


class CurrencyRegistry(Protocol):
    """Contract for looking up how many minor units make one major unit."""

    def subunit_to_unit(self, iso_code: str) -> int:
        ...  # pragma: no cover - protocol definition


class ISO4217Registry:
    """Registry backed by :data:`ISO_4217_EXPONENTS`."""

    def __init__(self, exponents: dict[str, int] | None = None) -> None:
        self.exponents = dict(exponents if exponents is not None else ISO_4217_EXPONENTS)

    def subunit_to_unit(self, iso_code: str) -> int:
        code = iso_code.upper()
        try:
            return 10 ** self.exponents[code]
        except KeyError:
            raise CurrencyUnavailable(f"No subunit information for {code}") from None

    def __contains__(self, iso_code: object) -> bool:
        return isinstance(iso_code, str) and iso_code.upper() in self.exponents


DEFAULT_REGISTRY: Final[ISO4217Registry] = ISO4217Registry()


__all__ = ["ISO_4217_EXPONENTS", "CurrencyRegistry", "ISO4217Registry", "DEFAULT_REGISTRY"]
