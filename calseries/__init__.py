import logging

from .calendar import Calendar
from .copier import CrossCalendarCopier
from .errors import (
    CalendarError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from .event import Event, Identifier, Location, PropertyChange, PropertyType, Status
from .interfaces import CalendarNames, EventEditing, EventQueries, ScheduleView
from .recurrence import WeeklyPattern, weeks_until
from .registry import CalendarRegistry
from .store import AVAILABLE, BUSY, EventStore
from .timezones import reproject

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Event",
    "Identifier",
    "Location",
    "Status",
    "PropertyType",
    "PropertyChange",
    "EventStore",
    "BUSY",
    "AVAILABLE",
    "WeeklyPattern",
    "weeks_until",
    "reproject",
    "Calendar",
    "CalendarRegistry",
    "CrossCalendarCopier",
    "EventQueries",
    "EventEditing",
    "ScheduleView",
    "CalendarNames",
    "CalendarError",
    "ValidationError",
    "NotFoundError",
    "StateError",
    "ConflictError",
]
