"""Load ECB reference rates and export them, or save the raw feed to disk."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from fx_ecb import EuCentralBank
from fx_ecb.db.rate_codec import RateFormat
from fx_ecb.utils.ecb import Timeframe
from fx_ecb.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--timeframe",
        choices=[timeframe.value for timeframe in Timeframe],
        default=Timeframe.CURRENT.value,
        help="ECB feed to download (default: current)",
    )
    source_group.add_argument(
        "--file",
        dest="file",
        help="Read rates from a local ECB XML file instead of downloading",
    )
    parser.add_argument(
        "--format",
        dest="rate_format",
        choices=[rate_format.value for rate_format in RateFormat],
        default=RateFormat.JSON.value,
        help="Export format written to --output or stdout (default: json)",
    )
    parser.add_argument(
        "--output",
        dest="output",
        help="Write the export to this path instead of stdout",
    )
    parser.add_argument(
        "--save-raw",
        dest="save_raw",
        help="Only save the raw ECB feed for --timeframe to this path",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None, *, bank: EuCentralBank | None = None) -> int:
    args = parse_args(argv)
    bank = bank or EuCentralBank()

    if args.save_raw:
        url = bank.url_for_timeframe(args.timeframe)
        saved = bank.save_rates(args.save_raw, url)
        LOGGER.info("Raw ECB feed saved to %s", saved)
        return 0

    if args.file:
        bank.update_exchange_rates(file=Path(args.file))
    else:
        bank.update_exchange_rates(args.timeframe)

    payload = bank.export_rates(args.rate_format)
    if args.output:
        Path(args.output).write_bytes(payload)
        LOGGER.info("Exported %s rates to %s", args.rate_format, args.output)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.flush()
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
