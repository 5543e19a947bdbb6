"""Weekly recurrence expansion.

A seed event plus a weekday pattern ("MWF") and a number of weeks expands to
the concrete instances of a series. Weekday arithmetic is delegated to
python-dateutil's relativedelta.
"""

from dataclasses import replace
from datetime import date

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta, weekday

from calseries.errors import ValidationError
from calseries.event import Event
from calseries.util import WEEKDAY_CODES

# Mapping from pattern letters to dateutil weekday constants
_DAY_MAP: dict[str, weekday] = dict(zip(WEEKDAY_CODES, (MO, TU, WE, TH, FR, SA, SU)))


def weeks_until(first: date, until: date) -> int:
    """Whole weeks from first to until (floor), never negative."""
    return max(0, (until - first).days // 7)


class WeeklyPattern:
    """Repeat an event on given weekdays for a number of weeks."""

    def __init__(self, days: str, repeat: int | date, *, first: date | None = None):
        """
        Initialize a weekly pattern.

        Args:
            days: Weekday letters drawn from M, T, W, R, F, S, U (Monday..Sunday)
            repeat: Number of weeks, or an until-date converted to whole weeks
                counted from `first`
            first: Date the series starts on; required when repeat is a date

        Raises:
            ValidationError: On a letter outside the alphabet or a negative count
        """
        for letter in days:
            if letter not in _DAY_MAP:
                raise ValidationError(
                    f"Invalid day: {letter!r}\n"
                    f"Valid days: {', '.join(WEEKDAY_CODES)} (Monday..Sunday)"
                )
        if isinstance(repeat, date):
            if first is None:
                raise ValidationError("An until-date needs the series start date")
            repeat = weeks_until(first, repeat)
        if repeat < 0:
            raise ValidationError(f"Repeat count must be >= 0, got {repeat}")

        self.days: str = days
        self.weeks: int = repeat

    def expand(self, seed: Event) -> list[Event]:
        """Return the seed followed by every generated instance.

        Each instance lands in the Monday-to-Sunday week of `seed.start + n
        weeks`, keeps the seed's duration and time of day, and carries no
        series id (one is assigned when the batch is stored). An instance
        falling exactly on the seed's start is skipped.
        """
        duration = seed.end - seed.start
        instances = [seed]

        for week in range(self.weeks):
            monday = seed.start + relativedelta(weeks=week, weekday=MO(-1))
            for letter in self.days:
                start = monday + relativedelta(weekday=_DAY_MAP[letter](+1))
                if start == seed.start:
                    continue
                instances.append(
                    replace(seed, start=start, end=start + duration, series_id=None)
                )

        return instances


__all__ = ["WeeklyPattern", "weeks_until"]
