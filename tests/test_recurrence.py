"""Tests for weekly recurrence expansion."""

from datetime import date, datetime, timedelta

import pytest

from calseries import Event, ValidationError, WeeklyPattern, weeks_until


def _seed(start: datetime, hours: int = 1) -> Event:
    return Event.create("sleep", start, start + timedelta(hours=hours))


def test_mwf_two_weeks_from_monday():
    """Monday seed, MWF for two weeks: six instances, seed included once."""
    seed = _seed(datetime(2025, 6, 2, 10, 0))  # Monday

    instances = WeeklyPattern("MWF", 2).expand(seed)

    assert [e.start.date() for e in instances] == [
        date(2025, 6, 2),
        date(2025, 6, 4),
        date(2025, 6, 6),
        date(2025, 6, 9),
        date(2025, 6, 11),
        date(2025, 6, 13),
    ]
    assert instances[0] is seed


def test_instances_keep_duration_and_time_of_day():
    """Every instance starts at the seed's clock time and lasts as long."""
    seed = _seed(datetime(2025, 6, 2, 10, 30), hours=2)

    for instance in WeeklyPattern("TR", 3).expand(seed):
        assert instance.start.time() == seed.start.time()
        assert instance.end - instance.start == timedelta(hours=2)
        assert instance.subject == "sleep"


def test_weekday_mapping():
    """Each letter maps to its weekday, Monday through Sunday."""
    seed = _seed(datetime(2025, 6, 2, 7, 0))

    instances = WeeklyPattern("TWRFSU", 1).expand(seed)

    assert [e.start.weekday() for e in instances] == [0, 1, 2, 3, 4, 5, 6]


def test_days_stay_in_the_seed_week():
    """Weekdays before the seed's land earlier in the same Monday-based week."""
    seed = _seed(datetime(2025, 6, 4, 9, 0))  # Wednesday

    instances = WeeklyPattern("M", 2).expand(seed)

    assert [e.start.date() for e in instances] == [
        date(2025, 6, 4),
        date(2025, 6, 2),
        date(2025, 6, 9),
    ]


def test_zero_weeks_is_seed_only():
    """A count of zero yields just the seed."""
    seed = _seed(datetime(2025, 6, 2, 10, 0))
    assert WeeklyPattern("MWF", 0).expand(seed) == [seed]


def test_invalid_letter_rejected():
    """Letters outside MTWRFSU fail before anything is generated."""
    with pytest.raises(ValidationError):
        WeeklyPattern("MXF", 2)


def test_lowercase_letter_rejected():
    """The alphabet is upper case only."""
    with pytest.raises(ValidationError):
        WeeklyPattern("m", 1)


def test_negative_count_rejected():
    with pytest.raises(ValidationError):
        WeeklyPattern("M", -1)


class TestUntilDate:
    """An until-date becomes whole weeks counted from the first date."""

    def test_weeks_until_floors(self):
        assert weeks_until(date(2025, 6, 2), date(2025, 6, 15)) == 1
        assert weeks_until(date(2025, 6, 2), date(2025, 6, 16)) == 2
        assert weeks_until(date(2025, 6, 2), date(2025, 5, 1)) == 0

    def test_pattern_with_until(self):
        seed = _seed(datetime(2025, 6, 2, 10, 0))
        pattern = WeeklyPattern("MW", date(2025, 6, 16), first=seed.start.date())

        assert pattern.weeks == 2
        assert len(pattern.expand(seed)) == 4

    def test_until_requires_first(self):
        with pytest.raises(ValidationError):
            WeeklyPattern("M", date(2025, 6, 16))
