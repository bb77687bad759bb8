"""Serialize the rate store to JSON, pickle or YAML and load it back.

Every format carries the same document::

    {"2018-06-11": [{"from": "EUR", "to": "USD", "rate": "1.1659"}, ...], ...}

Rates travel as decimal strings. Rates stored without a date are grouped under
the empty-string key.
"""

from __future__ import annotations

import json
import pickle
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable

import yaml

from fx_ecb.db.base_store import RateStoreStrategy
from fx_ecb.errors import RateImportError, UnknownRateFormat
from fx_ecb.ingestion.models import ForexRateRecord
from fx_ecb.utils.date_range import format_date, parse_date
from fx_ecb.utils.logger import get_logger

LOGGER = get_logger(__name__)

RatesDocument = dict[str, list[dict[str, str]]]


class RateFormat(str, Enum):
    """Supported export/import formats."""

    JSON = "json"
    PICKLE = "pickle"
    YAML = "yaml"

    @classmethod
    def coerce(cls, value: "RateFormat | str") -> "RateFormat":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        supported = ", ".join(member.value for member in cls)
        raise UnknownRateFormat(f"Unsupported rate format {value!r}; use one of: {supported}")


def _dump_json(document: RatesDocument) -> bytes:
    return json.dumps(document, indent=2).encode("utf-8")


def _dump_pickle(document: RatesDocument) -> bytes:
    return pickle.dumps(document, protocol=pickle.HIGHEST_PROTOCOL)


def _dump_yaml(document: RatesDocument) -> bytes:
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True).encode("utf-8")


def _load_json(content: bytes) -> Any:
    return json.loads(content)


def _load_pickle(content: bytes) -> Any:
    # Only load pickles produced by a trusted exporter.
    return pickle.loads(content)


def _load_yaml(content: bytes) -> Any:
    return yaml.safe_load(content)


_DUMPERS: dict[RateFormat, Callable[[RatesDocument], bytes]] = {
    RateFormat.JSON: _dump_json,
    RateFormat.PICKLE: _dump_pickle,
    RateFormat.YAML: _dump_yaml,
}

_LOADERS: dict[RateFormat, Callable[[bytes], Any]] = {
    RateFormat.JSON: _load_json,
    RateFormat.PICKLE: _load_pickle,
    RateFormat.YAML: _load_yaml,
}

_DECODE_ERRORS: dict[RateFormat, tuple[type[BaseException], ...]] = {
    RateFormat.JSON: (json.JSONDecodeError, UnicodeDecodeError),
    RateFormat.PICKLE: (pickle.UnpicklingError, EOFError, TypeError, ValueError, IndexError),
    RateFormat.YAML: (yaml.YAMLError,),
}


class RateExporter:
    """Export a store's full index in one consistent snapshot."""

    def __init__(self, store: RateStoreStrategy) -> None:
        self.store = store

    def rates(self) -> RatesDocument:
        with self.store.transaction(True):
            rows = list(self.store.each_rate())
        document: RatesDocument = {}
        for iso_from, iso_to, rate, rate_date in sorted(rows, key=lambda row: format_date(row[3])):
            document.setdefault(format_date(rate_date), []).append(
                {"from": iso_from, "to": iso_to, "rate": str(rate)}
            )
        return document

    def dump(self, rate_format: RateFormat | str) -> bytes:
        fmt = RateFormat.coerce(rate_format)
        return _DUMPERS[fmt](self.rates())


class RateImporter:
    """Replace a store's content with a previously exported document."""

    def __init__(self, store: RateStoreStrategy) -> None:
        self.store = store

    def load(self, rate_format: RateFormat | str, content: bytes | str) -> list[ForexRateRecord]:
        fmt = RateFormat.coerce(rate_format)
        raw = content.encode("utf-8") if isinstance(content, str) else content
        try:
            document = _LOADERS[fmt](raw)
        except _DECODE_ERRORS[fmt] as exc:
            raise RateImportError(f"Content is not valid {fmt.value}: {exc}") from exc
        records = self.parse(document)

        with self.store.transaction(True):
            self.store.clear()
            for record in records:
                self.store.add_rate(
                    record.from_currency, record.to_currency, record.rate, record.rate_date
                )
        LOGGER.info("Imported %s rates from %s", len(records), fmt.value)
        return records

    @staticmethod
    def parse(document: Any) -> list[ForexRateRecord]:
        """Validate an exported document and convert it into records."""

        if not isinstance(document, dict):
            raise RateImportError("Rates document must be a mapping of date to rate list")
        records: list[ForexRateRecord] = []
        for raw_date, exchange_rates in document.items():
            if not isinstance(exchange_rates, list):
                raise RateImportError(f"Rates for {raw_date!r} must be a list")
            try:
                rate_date = parse_date(raw_date)
                for exchange_rate in exchange_rates:
                    records.append(
                        ForexRateRecord(
                            rate_date=rate_date,
                            from_currency=str(exchange_rate["from"]).upper(),
                            to_currency=str(exchange_rate["to"]).upper(),
                            rate=Decimal(str(exchange_rate["rate"])),
                        )
                    )
            except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
                raise RateImportError(f"Invalid rate entry for {raw_date!r}: {exc}") from exc
        return records


__all__ = ["RateFormat", "RateExporter", "RateImporter", "RatesDocument"]
