"""Exception taxonomy shared by every calseries operation."""


class CalendarError(Exception):
    """Base class for calendar errors."""


class ValidationError(CalendarError, ValueError):
    """Malformed input: empty subject, bad zone, end before start, ..."""


class NotFoundError(CalendarError, LookupError):
    """Unknown event, series, or calendar."""


class StateError(NotFoundError):
    """An operation needs a current calendar but none is selected."""


class ConflictError(CalendarError, ValueError):
    """Duplicate event identity or colliding edit."""


__all__ = [
    "CalendarError",
    "ValidationError",
    "NotFoundError",
    "StateError",
    "ConflictError",
]
