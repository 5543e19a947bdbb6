"""Tests for Event values and PropertyChange."""

from datetime import datetime, time

import pytest

from calseries import (
    Event,
    Identifier,
    Location,
    PropertyChange,
    PropertyType,
    Status,
    ValidationError,
)


def _meeting(**fields) -> Event:
    return Event.create(
        "Meeting", datetime(2025, 6, 2, 10, 0), datetime(2025, 6, 2, 11, 0), **fields
    )


def test_identity_ignores_non_key_fields():
    """Events with the same subject, start and end are equal."""
    a = _meeting(location="online", description="first")
    b = _meeting(status="private", description="second", timezone="UTC")

    assert a == b
    assert hash(a) == hash(b)
    assert a != _meeting().identifier  # different types never compare equal


def test_end_before_start_rejected():
    """End strictly before start fails validation."""
    with pytest.raises(ValidationError):
        Event.create("Oops", datetime(2025, 6, 2, 11, 0), datetime(2025, 6, 2, 10, 0))


def test_zero_length_event_allowed():
    """start == end is a valid event."""
    moment = datetime(2025, 6, 2, 10, 0)
    event = Event.create("Ping", moment, moment)
    assert event.start == event.end


def test_empty_subject_rejected():
    """Blank subjects fail validation."""
    with pytest.raises(ValidationError):
        Event.create("  ", datetime(2025, 6, 2, 10), datetime(2025, 6, 2, 11))


def test_missing_end_becomes_all_day():
    """Only a start given: 08:00-17:00 on the start's date."""
    event = Event.create("Offsite", datetime(2025, 6, 3, 14, 30))

    assert event.start == datetime(2025, 6, 3, 8, 0)
    assert event.end == datetime(2025, 6, 3, 17, 0)


def test_missing_start_becomes_all_day():
    """Only an end given: 08:00-17:00 on the end's date."""
    event = Event.create("Offsite", end=datetime(2025, 6, 4, 9, 0))

    assert event.start == datetime(2025, 6, 4, 8, 0)
    assert event.end == datetime(2025, 6, 4, 17, 0)


def test_missing_both_rejected():
    """At least one timestamp is required."""
    with pytest.raises(ValidationError):
        Event.create("Nothing")


def test_aware_datetimes_rejected():
    """Wall-clock values must be naive; the zone lives in the timezone field."""
    from datetime import timezone

    with pytest.raises(ValidationError):
        Event.create(
            "Aware",
            datetime(2025, 6, 2, 10, tzinfo=timezone.utc),
            datetime(2025, 6, 2, 11, tzinfo=timezone.utc),
        )


def test_invalid_timezone_rejected():
    """Unknown zone identifiers fail validation."""
    with pytest.raises(ValidationError):
        _meeting(timezone="Mars/Olympus_Mons")


class TestChoices:
    """Location and Status parsing."""

    def test_case_insensitive(self):
        assert Location.parse("online") is Location.ONLINE
        assert Location.parse("Physical") is Location.PHYSICAL
        assert Status.parse("PRIVATE") is Status.PRIVATE

    def test_blank_is_unset(self):
        assert Location.parse("") is None
        assert Status.parse(None) is None

    def test_invalid_value(self):
        with pytest.raises(ValidationError):
            Location.parse("moon")
        with pytest.raises(ValidationError):
            Status.parse("secret")

    def test_str_is_name(self):
        assert str(Location.ONLINE) == "ONLINE"


def test_identifier_matches_subject_and_start():
    """Identifier equality mirrors event identity; matches() needs subject + start."""
    event = _meeting(series_id=4)
    ident = event.identifier

    assert ident == Identifier(
        subject="Meeting", start=event.start, end=event.end, series_id=None
    )
    assert ident.series_id == 4
    assert Identifier(subject="Meeting", start=event.start).matches(event)
    assert not Identifier(subject="Other", start=event.start).matches(event)


def test_span_covers_every_date():
    """A three-day event spans three dates."""
    event = Event.create("Trip", datetime(2025, 6, 2, 9), datetime(2025, 6, 4, 18))
    assert [d.day for d in event.span()] == [2, 3, 4]


class TestPropertyChange:
    """Applying a change replaces exactly one field."""

    def test_subject(self):
        event = _meeting(description="keep me")
        updated = PropertyChange(PropertyType.SUBJECT, "Standup").apply(event)

        assert updated.subject == "Standup"
        assert updated.description == "keep me"
        assert (updated.start, updated.end) == (event.start, event.end)

    def test_empty_subject(self):
        with pytest.raises(ValidationError):
            PropertyChange(PropertyType.SUBJECT, "").apply(_meeting())

    def test_start_full_datetime(self):
        updated = PropertyChange(PropertyType.START, "2025-06-01T09:15").apply(_meeting())
        assert updated.start == datetime(2025, 6, 1, 9, 15)
        assert updated.end == datetime(2025, 6, 2, 11, 0)

    def test_start_in_series_keeps_date(self):
        change = PropertyChange(PropertyType.START, datetime(2030, 1, 1, 9, 30))
        updated = change.apply(_meeting(), in_series=True)
        assert updated.start == datetime(2025, 6, 2, 9, 30)

    def test_end_in_series_accepts_time(self):
        change = PropertyChange(PropertyType.END, time(12, 45))
        updated = change.apply(_meeting(), in_series=True)
        assert updated.end == datetime(2025, 6, 2, 12, 45)

    def test_end_in_series_accepts_clock_text(self):
        updated = PropertyChange("end", "12:00").apply(_meeting(), in_series=True)
        assert updated.end == datetime(2025, 6, 2, 12, 0)

    def test_end_before_start(self):
        change = PropertyChange(PropertyType.END, "2025-06-02T09:00")
        with pytest.raises(ValidationError):
            change.apply(_meeting())

    def test_bad_datetime_text(self):
        with pytest.raises(ValidationError):
            PropertyChange(PropertyType.START, "tomorrow-ish").apply(_meeting())

    def test_location_status_description(self):
        event = _meeting()
        assert PropertyChange("location", "physical").apply(event).location is Location.PHYSICAL
        assert PropertyChange(PropertyType.STATUS, "public").apply(event).status is Status.PUBLIC
        assert PropertyChange(PropertyType.DESCRIPTION, "agenda").apply(event).description == "agenda"

    def test_timezone_field(self):
        updated = PropertyChange(PropertyType.TIMEZONE, "Europe/Paris").apply(_meeting())
        assert updated.timezone == "Europe/Paris"
        assert updated.start == datetime(2025, 6, 2, 10, 0)

    def test_calendar_name_not_an_event_field(self):
        with pytest.raises(ValidationError):
            PropertyChange(PropertyType.CALENDARNAME, "Work").apply(_meeting())

    def test_unknown_property_name(self):
        with pytest.raises(ValidationError):
            PropertyChange("colour", "red")

    def test_property_names_parse(self):
        assert PropertyChange("calendarname", "x").property is PropertyType.CALENDARNAME
        assert PropertyChange("name", "x").property is PropertyType.CALENDARNAME
        assert PropertyChange("TIMEZONE", "UTC").property is PropertyType.TIMEZONE
