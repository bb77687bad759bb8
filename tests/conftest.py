from __future__ import annotations

import shutil
import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable

import pytest

from fx_ecb import EuCentralBank
from fx_ecb.utils.ecb import ECB_90_DAY_URL, ECB_ALL_URL, ECB_RATES_URL

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class StaticFeedSource:
    """Serve fixture files in place of the ECB endpoints."""

    def __init__(self, documents: dict[str, Path]) -> None:
        self.documents = documents
        self.fetched: list[str] = []
        self.downloaded: list[tuple[str, Path]] = []

    def fetch(self, url: str) -> bytes:
        self.fetched.append(url)
        return self.documents[url].read_bytes()

    def download(self, url: str, destination: Path) -> Path:
        self.downloaded.append((url, destination))
        shutil.copyfile(self.documents[url], destination)
        return destination


@pytest.fixture
def fixture_path() -> Callable[[str], Path]:
    def _path(name: str) -> Path:
        return FIXTURES_DIR / name

    return _path


@pytest.fixture
def feed_source() -> StaticFeedSource:
    return StaticFeedSource(
        {
            ECB_RATES_URL: FIXTURES_DIR / "current_exchange_rates.xml",
            ECB_90_DAY_URL: FIXTURES_DIR / "historical_exchange_rates.xml",
            ECB_ALL_URL: FIXTURES_DIR / "historical_exchange_rates.xml",
        }
    )


@pytest.fixture
def bank(feed_source: StaticFeedSource) -> EuCentralBank:
    return EuCentralBank(client=feed_source)


@pytest.fixture
def feed_rates() -> Callable[[str], dict[date, dict[str, Decimal]]]:
    """Read a fixture feed with ElementTree to get the expected rates."""

    def _read(name: str) -> dict[date, dict[str, Decimal]]:
        expected: dict[date, dict[str, Decimal]] = {}
        root = ET.parse(FIXTURES_DIR / name).getroot()
        for day in root.iter():
            if "time" not in day.attrib:
                continue
            rate_date = date.fromisoformat(day.attrib["time"])
            expected[rate_date] = {
                cube.attrib["currency"]: Decimal(cube.attrib["rate"])
                for cube in day
                if "currency" in cube.attrib
            }
        return expected

    return _read
