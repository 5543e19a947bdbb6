"""Named calendars and the single current-calendar selection."""

import logging
from datetime import date, datetime

from calseries.calendar import Calendar
from calseries.copier import CrossCalendarCopier
from calseries.errors import ConflictError, NotFoundError, StateError, ValidationError
from calseries.event import Event, PropertyType

logger = logging.getLogger(__name__)


class CalendarRegistry:
    """Owns calendars by name and tracks which one is current.

    The first calendar created becomes current. Operations that act on "the
    current calendar" go through this object; there is no global selection.
    """

    def __init__(self) -> None:
        self._calendars: dict[str, Calendar] = {}
        self._current_name: str | None = None
        self._copier: CrossCalendarCopier = CrossCalendarCopier(self)

    def create_calendar(self, name: str, timezone: str | None = None) -> Calendar:
        """Create and register a calendar.

        Args:
            name: Unique, non-empty name
            timezone: IANA zone id; the configured default zone when omitted

        Raises:
            ValidationError: On an empty name or unknown zone
            ConflictError: If the name is taken
        """
        if name is None or not str(name).strip():
            raise ValidationError("Calendar name cannot be null or empty")
        if name in self._calendars:
            raise ConflictError(f"Calendar already exists: {name!r}")

        calendar = Calendar(name, timezone)
        self._calendars[name] = calendar
        if self._current_name is None:
            self._current_name = name
        logger.debug("Created calendar %r (%s)", name, calendar.timezone)
        return calendar

    def use_calendar(self, name: str) -> Calendar:
        """Make name the current calendar and return it.

        Raises:
            NotFoundError: If no calendar has that name
        """
        calendar = self.get(name)
        self._current_name = name
        return calendar

    def edit_calendar(self, name: str, field: PropertyType | str, value: str) -> Calendar:
        """Rename a calendar or move it to another timezone.

        Args:
            name: Calendar to edit
            field: CALENDARNAME or TIMEZONE
            value: New name or IANA zone id

        Raises:
            NotFoundError: If the calendar does not exist
            ValidationError: On a blank value, unknown zone, or other property
            ConflictError: If renaming to a name already in use
        """
        calendar = self.get(name)
        if value is None or not str(value).strip():
            raise ValidationError("New value cannot be null or empty")

        prop = PropertyType.parse(field)
        if prop is PropertyType.TIMEZONE:
            calendar.set_timezone(value)
        elif prop is PropertyType.CALENDARNAME:
            if value in self._calendars:
                raise ConflictError(f"Calendar already exists: {value!r}")
            # Rebuild to move the key without disturbing creation order
            self._calendars = {
                (value if key == name else key): cal for key, cal in self._calendars.items()
            }
            calendar.name = value
            if self._current_name == name:
                self._current_name = value
            logger.debug("Renamed calendar %r to %r", name, value)
        else:
            raise ValidationError(f"Invalid calendar property: {prop.name}")
        return calendar

    def list_calendar_names(self) -> list[str]:
        return list(self._calendars)

    def get(self, name: str) -> Calendar:
        """Return the calendar named name without selecting it."""
        try:
            return self._calendars[name]
        except KeyError:
            raise NotFoundError(f"Calendar does not exist: {name!r}") from None

    @property
    def current_name(self) -> str | None:
        return self._current_name

    @property
    def current(self) -> Calendar:
        """The selected calendar.

        Raises:
            StateError: If no calendar is selected
        """
        if self._current_name is None:
            raise StateError("No calendar is currently selected")
        return self._calendars[self._current_name]

    def current_timezone(self) -> str:
        return self.current.timezone

    def copy_event(
        self, subject: str, source_start: datetime, target_name: str, target_start: datetime
    ) -> Event:
        """See CrossCalendarCopier.copy_event."""
        return self._copier.copy_event(subject, source_start, target_name, target_start)

    def copy_events(
        self, start_date: date, end_date: date, target_name: str, target_start_date: date
    ) -> list[Event]:
        """See CrossCalendarCopier.copy_events."""
        return self._copier.copy_events(start_date, end_date, target_name, target_start_date)

    def __contains__(self, name: object) -> bool:
        return name in self._calendars

    def __len__(self) -> int:
        return len(self._calendars)


__all__ = ["CalendarRegistry"]
