"""Date coercion helpers shared by the store, engine and codec."""

from __future__ import annotations

from datetime import date, datetime

from fx_ecb.errors import InvalidRateDate

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str | date | None) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` string (or a date/datetime) to :class:`date`.

    ``None`` and the empty string mean "no historical date" and are returned
    as ``None``. Anything else that is not exactly a calendar date raises
    :class:`~fx_ecb.errors.InvalidRateDate`.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidRateDate(f"Invalid rate date {value!r}; expected YYYY-MM-DD")
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, ISO_DATE_FORMAT).date()
    except ValueError:
        raise InvalidRateDate(f"Invalid rate date {value!r}; expected YYYY-MM-DD") from None


def format_date(value: date | None) -> str:
    """Return the canonical string form of ``value`` (empty for ``None``)."""

    return value.isoformat() if value is not None else ""


__all__ = ["parse_date", "format_date", "ISO_DATE_FORMAT"]
