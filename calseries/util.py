"""Utility constants and helpers for calseries.

Constants describe the fixed calendar conventions used throughout the API.
The process default timezone is configurable through the
``CALSERIES_DEFAULT_TZ`` environment variable.
"""

import os
from collections.abc import Iterator
from datetime import date, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from calseries.errors import ValidationError

# All-day events occupy the working day
ALL_DAY_START = time(8, 0)
ALL_DAY_END = time(17, 0)

# Weekday alphabet, Monday first (index == datetime.weekday())
WEEKDAY_CODES = "MTWRFSU"

# Default size of the schedule view
UPCOMING_LIMIT = 10

# Last minute of a day included by range copies
COPY_DAY_END = time(23, 59)

ONE_DAY = timedelta(days=1)

DEFAULT_TIMEZONE: str = os.getenv("CALSERIES_DEFAULT_TZ", "UTC")


def resolve_zone(tz: str | None) -> ZoneInfo:
    """Return the ZoneInfo for an IANA identifier.

    Raises:
        ValidationError: If the identifier is empty or unknown
    """
    if tz is None or not str(tz).strip():
        raise ValidationError("Timezone cannot be null or empty")
    try:
        return ZoneInfo(str(tz).strip())
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise ValidationError(
            f"Invalid timezone: {tz!r}\n"
            f"Hint: use an IANA identifier such as 'America/New_York' or 'UTC'"
        ) from err


def days_between(first: date, last: date) -> Iterator[date]:
    """Yield every calendar date from first to last, both inclusive."""
    current = first
    while current <= last:
        yield current
        current += ONE_DAY
