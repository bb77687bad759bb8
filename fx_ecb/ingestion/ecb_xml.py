"""Parse ECB euro reference rate XML feeds into per-date rate lists.

The daily, 90-day and full-history feeds share one layout::

    <gesmes:Envelope ...>
      <Cube>
        <Cube time="2018-06-11">
          <Cube currency="USD" rate="1.1659"/>
          ...
        </Cube>
        ...
      </Cube>
    </gesmes:Envelope>

Documents are consumed as a stream of ``(tag, attributes)`` pairs by
:func:`iter_elements` and fed into :class:`ECBFeedParser`, a small state machine
that knows nothing about the XML library underneath.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import IO, Iterator, Mapping

from fx_ecb.errors import FeedContentMissing, FeedParseError
from fx_ecb.ingestion.models import ECBFeedParseResult
from fx_ecb.utils.date_range import parse_date
from fx_ecb.utils.logger import get_logger

LOGGER = get_logger(__name__)

FeedInput = IO[bytes] | bytes | str | Path


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def iter_elements(source: FeedInput) -> Iterator[tuple[str, dict[str, str]]]:
    """Yield ``(local_name, attributes)`` for every element of an XML stream.

    ``source`` may be raw bytes, a binary file object or a filesystem path.
    Namespaces are stripped from tag and attribute names. Elements are cleared
    once closed so large documents are not kept in memory.
    """

    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        for event, element in ET.iterparse(source, events=("start", "end")):
            if event == "end":
                element.clear()
                continue
            attributes = {_local_name(key): value for key, value in element.attrib.items()}
            yield _local_name(element.tag), attributes
    except ET.ParseError as exc:
        raise FeedParseError(f"Malformed ECB feed: {exc}") from exc


class ParserState(str, Enum):
    """Where the parser is within the feed."""

    AWAITING_DATE = "awaiting_date"
    IN_DATE_BLOCK = "in_date_block"


class ECBFeedParser:
    """Accumulate ``{date: [(currency, rate_string)]}`` from element events."""

    __slots__ = ("rates", "updated_at", "state", "_current_date")

    def __init__(self) -> None:
        self.rates: dict[date, list[tuple[str, str]]] = {}
        self.updated_at: date | None = None
        self.state = ParserState.AWAITING_DATE
        self._current_date: date | None = None

    def start_element(self, name: str, attributes: Mapping[str, str]) -> None:
        if name != "Cube" or not attributes:
            return
        try:
            if "time" in attributes:
                self._open_date(attributes["time"])
            elif "currency" in attributes:
                self._append_rate(attributes["currency"], attributes.get("rate"))
        except (ValueError, ArithmeticError) as exc:
            raise FeedParseError(f"Invalid <{name}> element {dict(attributes)!r}: {exc}") from exc

    def end_document(self) -> ECBFeedParseResult:
        if not self.rates or self.updated_at is None:
            raise FeedContentMissing("ECB feed does not contain any dated rates")
        return ECBFeedParseResult(updated_at=self.updated_at, rates=self.rates)

    def _open_date(self, raw_date: str) -> None:
        current_date = parse_date(raw_date)
        if current_date is None:
            raise ValueError("empty time attribute")
        self._current_date = current_date
        if self.updated_at is None:
            self.updated_at = current_date
        self.rates[current_date] = []
        self.state = ParserState.IN_DATE_BLOCK

    def _append_rate(self, currency: str, rate: str | None) -> None:
        if self.state is not ParserState.IN_DATE_BLOCK or self._current_date is None:
            raise ValueError("currency rate found outside of a dated block")
        if rate is None:
            raise ValueError(f"missing rate for {currency}")
        try:
            value = Decimal(rate.strip())
        except InvalidOperation:
            raise ValueError(f"rate {rate!r} is not a decimal number") from None
        if not value.is_finite():
            raise ValueError(f"rate {rate!r} is not a finite number")
        self.rates[self._current_date].append((currency.strip().upper(), rate.strip()))


def parse_feed(source: FeedInput) -> ECBFeedParseResult:
    """Parse one ECB document; any failure aborts without partial results."""

    parser = ECBFeedParser()
    for name, attributes in iter_elements(source):
        parser.start_element(name, attributes)
    result = parser.end_document()
    LOGGER.info(
        "Parsed ECB feed with %s dates (latest %s)", len(result.rates), result.updated_at
    )
    return result


__all__ = ["iter_elements", "ParserState", "ECBFeedParser", "parse_feed", "FeedInput"]
