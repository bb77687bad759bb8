from datetime import date

import pytest

from fx_ecb.errors import FeedContentMissing, FeedParseError
from fx_ecb.ingestion.ecb_xml import ECBFeedParser, ParserState, iter_elements, parse_feed

NAMESPACED_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01"
    xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">
  <gesmes:subject>Reference rates</gesmes:subject>
  <Cube>
    <Cube time="2024-01-03">
      <Cube currency="USD" rate="1.0919"/>
      <Cube currency="JPY" rate="155.52"/>
    </Cube>
    <Cube time="2024-01-02">
      <Cube currency="USD" rate="1.0956"/>
    </Cube>
  </Cube>
</gesmes:Envelope>
"""


def test_iter_elements_strips_namespaces() -> None:
    elements = list(iter_elements(NAMESPACED_FEED))

    assert elements[0] == ("Envelope", {})
    assert ("subject", {}) in elements
    assert ("Cube", {"time": "2024-01-03"}) in elements
    assert ("Cube", {"currency": "USD", "rate": "1.0919"}) in elements


def test_iter_elements_reports_malformed_xml() -> None:
    with pytest.raises(FeedParseError, match="Malformed ECB feed"):
        list(iter_elements(b"<Cube><Cube time='2024-01-03'></Cube>"))


def test_parse_feed_collects_rates_per_date() -> None:
    result = parse_feed(NAMESPACED_FEED)

    assert result.updated_at == date(2024, 1, 3)
    assert result.rates == {
        date(2024, 1, 3): [("USD", "1.0919"), ("JPY", "155.52")],
        date(2024, 1, 2): [("USD", "1.0956")],
    }


def test_parse_feed_accepts_documents_without_namespace() -> None:
    feed = b"<Envelope><Cube><Cube time='2024-01-03'><Cube currency='usd' rate='1.0919'/></Cube></Cube></Envelope>"

    result = parse_feed(feed)

    assert result.rates == {date(2024, 1, 3): [("USD", "1.0919")]}


def test_parse_feed_reads_files(fixture_path) -> None:
    result = parse_feed(fixture_path("historical_exchange_rates.xml"))

    assert result.updated_at == date(2018, 6, 8)
    assert list(result.rates) == [
        date(2018, 6, 8),
        date(2018, 6, 7),
        date(2018, 6, 6),
        date(2018, 5, 11),
        date(2018, 3, 14),
    ]
    assert all(len(rates) == 32 for rates in result.rates.values())


def test_parse_feed_keeps_empty_date_blocks() -> None:
    feed = b"<Cube><Cube time='2024-01-03'/></Cube>"

    result = parse_feed(feed)

    assert result.rates == {date(2024, 1, 3): []}


def test_parse_feed_without_dates_is_missing_content(fixture_path) -> None:
    with pytest.raises(FeedContentMissing):
        parse_feed(fixture_path("invalid_exchange_rates.xml"))


def test_feed_content_missing_is_a_parse_error() -> None:
    assert issubclass(FeedContentMissing, FeedParseError)


@pytest.mark.parametrize(
    "feed",
    [
        b"<Cube><Cube currency='USD' rate='1.1'/></Cube>",
        b"<Cube><Cube time='not-a-date'/></Cube>",
        b"<Cube><Cube time='2018-06-11T99:zz'/></Cube>",
        b"<Cube><Cube time='2024-01-03'><Cube currency='USD'/></Cube></Cube>",
        b"<Cube><Cube time='2024-01-03'><Cube currency='USD' rate='1,1'/></Cube></Cube>",
        b"<Cube><Cube time='2024-01-03'><Cube currency='USD' rate='NaN'/></Cube></Cube>",
    ],
)
def test_parse_feed_rejects_invalid_elements(feed: bytes) -> None:
    with pytest.raises(FeedParseError, match="Invalid <Cube> element"):
        parse_feed(feed)


def test_parser_state_machine_transitions() -> None:
    parser = ECBFeedParser()
    assert parser.state is ParserState.AWAITING_DATE

    parser.start_element("Cube", {})
    parser.start_element("subject", {"time": "ignored"})
    assert parser.state is ParserState.AWAITING_DATE

    parser.start_element("Cube", {"time": "2024-01-03"})
    assert parser.state is ParserState.IN_DATE_BLOCK
    parser.start_element("Cube", {"currency": "USD", "rate": "1.0919"})
    parser.start_element("Cube", {"time": "2024-01-02"})
    parser.start_element("Cube", {"currency": "GBP", "rate": "0.86"})

    result = parser.end_document()

    assert result.updated_at == date(2024, 1, 3)
    assert result.rates[date(2024, 1, 2)] == [("GBP", "0.86")]


def test_parse_result_records_filter_currencies(fixture_path) -> None:
    result = parse_feed(fixture_path("current_exchange_rates.xml"))

    records = result.records(frozenset({"USD", "JPY"}))

    assert [(record.from_currency, record.to_currency) for record in records] == [
        ("EUR", "USD"),
        ("EUR", "JPY"),
    ]
    assert str(records[1].rate) == "129.60"
