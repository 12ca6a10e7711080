"""
app/validators/value_coercers.py

Lenient parsers for user-authored CSV cells.

Every coercer returns None instead of raising, so one malformed cell never
aborts an import; the row processor decides whether a missing value means
skip.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%d.%m.%Y",
    "%m/%d/%Y",
)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_ISO_DATETIME_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}(?::\d{2}(?:\.(\d+))?)?)(Z|z|[+-]\d{2}:\d{2})?"
)
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def local_midnight(day: date) -> datetime:
    """
    Start of ``day`` in the process local time zone, as an aware datetime.
    """

    return datetime.combine(day, time.min).astimezone()


def parse_date(value: str | None) -> date | None:
    """
    Parse ISO, day.month.year and month/day/year dates, in that order.
    """

    raw = _clean(value)
    if raw is None:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def parse_instant(value: str | None) -> datetime | None:
    """
    Parse an ISO instant, offset or local date-time into an aware datetime.

    Only the extended ``YYYY-MM-DDTHH:MM[:SS[.fraction]][Z|+HH:MM]`` shape is
    accepted, on every interpreter version. Fractions longer than microseconds
    are truncated. Local date-times are interpreted in the process time zone.
    Anything else is retried as a plain date anchored at local midnight.
    """

    raw = _clean(value)
    if raw is None:
        return None

    match = _ISO_DATETIME_PATTERN.fullmatch(raw)
    if match is None:
        day = parse_date(raw)
        if day is None:
            return None
        return local_midnight(day)

    day_part, clock, fraction, offset = match.groups()
    if fraction is not None:
        clock = clock[: clock.index(".")] + "." + fraction[:6].ljust(6, "0")
    if offset in ("Z", "z"):
        offset = "+00:00"

    try:
        parsed = datetime.fromisoformat(f"{day_part}T{clock}{offset or ''}")
    except ValueError:
        return None

    if parsed.tzinfo is None:
        return parsed.astimezone()
    return parsed


def parse_int(value: str | None) -> int | None:
    """
    Parse a base-10 32-bit integer; anything else yields None.
    """

    raw = _clean(value)
    if raw is None or not _INTEGER_PATTERN.fullmatch(raw):
        return None

    parsed = int(raw)
    if parsed < _INT32_MIN or parsed > _INT32_MAX:
        return None
    return parsed
