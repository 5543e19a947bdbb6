"""Immutable event values and the property changes applied to them."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from dateutil.parser import isoparse
from typing_extensions import override

from calseries.errors import ValidationError
from calseries.util import ALL_DAY_END, ALL_DAY_START, days_between, resolve_zone


class _Choice(Enum):
    """Enum whose members can be parsed case-insensitively from text."""

    @classmethod
    def parse(cls, value: "str | _Choice | None") -> "_Choice | None":
        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip()
        if not text:
            return None
        try:
            return cls[text.upper()]
        except KeyError:
            valid = " or ".join(m.name for m in cls)
            raise ValidationError(
                f"Invalid {cls.__name__.lower()}: {value!r}. Must be {valid}"
            ) from None

    @override
    def __str__(self) -> str:
        return self.name


class Location(_Choice):
    ONLINE = "online"
    PHYSICAL = "physical"


class Status(_Choice):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True, kw_only=True)
class Event:
    """A calendar entry with wall-clock start and end.

    Identity is (subject, start, end); the remaining attributes do not take
    part in equality or hashing.

    Attributes:
        subject: Non-empty title
        start: Local start date-time
        end: Local end date-time, never before start
        timezone: IANA zone the wall-clock values are expressed in
            (None until a calendar assigns one)
        location: ONLINE, PHYSICAL, or None
        status: PUBLIC, PRIVATE, or None
        description: Free text
        series_id: Series this event belongs to, None for standalone events
    """

    subject: str
    start: datetime
    end: datetime
    timezone: str | None = field(default=None, compare=False)
    location: Location | None = field(default=None, compare=False)
    status: Status | None = field(default=None, compare=False)
    description: str = field(default="", compare=False)
    series_id: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.subject or not str(self.subject).strip():
            raise ValidationError("Subject cannot be empty")
        if self.start is None or self.end is None:
            raise ValidationError("End time or start time cannot be null")
        if self.start.tzinfo is not None or self.end.tzinfo is not None:
            raise ValidationError(
                "Event times must be wall-clock (naive) date-times; "
                "the zone is carried by the timezone field"
            )
        if self.end < self.start:
            raise ValidationError(
                f"End time cannot be before start time "
                f"(start={self.start.isoformat()}, end={self.end.isoformat()})"
            )
        if self.timezone is not None:
            resolve_zone(self.timezone)

    @classmethod
    def create(
        cls,
        subject: str,
        start: datetime | None = None,
        end: datetime | None = None,
        *,
        timezone: str | None = None,
        location: Location | str | None = None,
        status: Status | str | None = None,
        description: str | None = "",
        series_id: int | None = None,
    ) -> "Event":
        """Build an event from loosely typed inputs.

        When only one of start/end is given, the event becomes an all-day
        event (08:00 to 17:00) on that timestamp's date.

        Raises:
            ValidationError: If both timestamps are missing or any field is invalid

        Example:
            >>> Event.create("Review", datetime(2025, 6, 2, 14, 0))
            ... # 2025-06-02 08:00 -> 17:00
        """
        if start is None or end is None:
            anchor = start if start is not None else end
            if anchor is None:
                raise ValidationError("Either start time or end time must be non-null")
            start = datetime.combine(anchor.date(), ALL_DAY_START)
            end = datetime.combine(anchor.date(), ALL_DAY_END)

        return cls(
            subject=subject,
            start=start,
            end=end,
            timezone=timezone or None,
            location=Location.parse(location),
            status=Status.parse(status),
            description=description or "",
            series_id=series_id,
        )

    @property
    def identifier(self) -> "Identifier":
        return Identifier(
            subject=self.subject,
            start=self.start,
            end=self.end,
            series_id=self.series_id,
        )

    def span(self) -> Iterator[date]:
        """Yield every date this event occupies, start date to end date."""
        return days_between(self.start.date(), self.end.date())

    def covers(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @override
    def __str__(self) -> str:
        """Human-friendly string showing subject and wall-clock range."""
        zone = f" {self.timezone}" if self.timezone else ""
        return (
            f"Event('{self.subject}', {self.start.isoformat(timespec='minutes')}"
            f"→{self.end.isoformat(timespec='minutes')}{zone})"
        )


@dataclass(frozen=True, kw_only=True)
class Identifier:
    """Key used to look an event up inside a calendar.

    Equality mirrors Event identity; series_id is carried along but ignored.
    """

    subject: str
    start: datetime
    end: datetime | None = None
    series_id: int | None = field(default=None, compare=False)

    def matches(self, event: Event) -> bool:
        """True if event has this subject and exact start."""
        return event.subject == self.subject and event.start == self.start


class PropertyType(str, Enum):
    SUBJECT = "subject"
    START = "start"
    END = "end"
    LOCATION = "location"
    DESCRIPTION = "description"
    STATUS = "status"
    CALENDARNAME = "name"
    TIMEZONE = "timezone"

    @classmethod
    def parse(cls, value: "PropertyType | str") -> "PropertyType":
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.lower() == member.value or text.upper() == member.name:
                return member
        raise ValidationError(f"Invalid property: {value!r}")

    @property
    def is_timing(self) -> bool:
        return self in (PropertyType.START, PropertyType.END)


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            value = isoparse(value.strip())
        except ValueError as err:
            raise ValidationError(
                f"Incorrect date format: {value!r}\n"
                f"Hint: use yyyy-MM-dd for dates and HH:mm for time, "
                f"e.g. 2025-06-02T09:30"
            ) from err
    if not isinstance(value, datetime):
        raise ValidationError(f"Expected a date-time, got {type(value).__name__!r}")
    if value.tzinfo is not None:
        raise ValidationError(f"Expected a wall-clock date-time, got {value.isoformat()}")
    return value


def _as_clock(value: Any) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, str) and "T" not in value and "-" not in value:
        try:
            return time.fromisoformat(value.strip())
        except ValueError as err:
            raise ValidationError(f"Incorrect time format: {value!r}") from err
    return _as_datetime(value).time()


@dataclass(frozen=True)
class PropertyChange:
    """A single field replacement.

    Attributes:
        property: Which field to replace
        value: The new value (text is accepted and parsed)
    """

    property: PropertyType
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "property", PropertyType.parse(self.property))

    def new_datetime(self) -> datetime | None:
        """The new value as a full date-time, for START/END changes."""
        if not self.property.is_timing:
            return None
        return _as_datetime(self.value)

    def apply(self, event: Event, *, in_series: bool = False) -> Event:
        """Return a copy of event with this change applied.

        Args:
            event: The original event
            in_series: For START/END, use only the hour and minute of the new
                value and keep the event's own date

        Raises:
            ValidationError: If the value is invalid for the property or the
                property is not an event field
        """
        prop = self.property
        if prop is PropertyType.SUBJECT:
            if self.value is None or not str(self.value).strip():
                raise ValidationError("Subject can't be empty")
            return replace(event, subject=str(self.value))
        if prop is PropertyType.START:
            return replace(event, start=self._moment(event.start, in_series))
        if prop is PropertyType.END:
            return replace(event, end=self._moment(event.end, in_series))
        if prop is PropertyType.LOCATION:
            return replace(event, location=Location.parse(self.value))
        if prop is PropertyType.STATUS:
            return replace(event, status=Status.parse(self.value))
        if prop is PropertyType.DESCRIPTION:
            return replace(event, description="" if self.value is None else str(self.value))
        if prop is PropertyType.TIMEZONE:
            resolve_zone(self.value)
            return replace(event, timezone=str(self.value).strip())
        raise ValidationError(f"Unknown event property: {prop.name}")

    def _moment(self, original: datetime, in_series: bool) -> datetime:
        if in_series:
            clock = _as_clock(self.value)
            return datetime.combine(original.date(), time(clock.hour, clock.minute))
        return _as_datetime(self.value)


__all__ = [
    "Event",
    "Identifier",
    "Location",
    "Status",
    "PropertyType",
    "PropertyChange",
]
