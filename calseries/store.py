"""Date-indexed in-memory event storage.

This module provides EventStore, the storage behind every Calendar. An event
is filed under each date it spans, so point queries on a date never scan the
whole store.
"""

from collections.abc import Iterable, Iterator
from datetime import date, datetime

from calseries.errors import ConflictError, NotFoundError, ValidationError
from calseries.event import Event
from calseries.util import days_between

BUSY = "Busy"
AVAILABLE = "Available"


class EventStore:
    """Mutable mapping of dates to the events occupying them.

    Attributes:
        _by_date: date -> events spanning that date, in insertion order
    """

    def __init__(self, events: Iterable[Event] = ()) -> None:
        """Initialize an empty or pre-populated store.

        Args:
            events: Optional initial events, inserted in order
        """
        self._by_date: dict[date, list[Event]] = {}
        for event in events:
            self.insert(event)

    def insert(self, event: Event) -> Event:
        """File event under every date it spans.

        The duplicate check covers all spanned dates before anything is
        written, so a rejected insert leaves the store unchanged.

        Raises:
            ConflictError: If an event with the same identity is stored
        """
        for day in event.span():
            if event in self._by_date.get(day, ()):
                raise ConflictError(f"Event exists already: {event}")

        for day in event.span():
            self._by_date.setdefault(day, []).append(event)
        return event

    def remove(self, event: Event) -> Event:
        """Remove event from every date bucket it spans.

        Raises:
            NotFoundError: If the event is not stored
        """
        if event not in self._by_date.get(event.start.date(), ()):
            raise NotFoundError(f"Event does not exist: {event}")

        for day in event.span():
            bucket = self._by_date.get(day)
            if bucket is None:
                continue
            if event in bucket:
                bucket.remove(event)
            if not bucket:
                del self._by_date[day]
        return event

    def replace(self, old: Event, new: Event) -> Event:
        """Swap old for new in place, keeping each bucket's ordering.

        Both events must span the same dates. Use remove() then insert() when
        the span changes.

        Raises:
            ValidationError: If new spans different dates than old
            NotFoundError: If old is not stored
            ConflictError: If new collides with another stored event
        """
        if event_span(old) != event_span(new):
            raise ValidationError("replace() requires events spanning the same dates")
        if old not in self._by_date.get(old.start.date(), ()):
            raise NotFoundError(f"Event does not exist: {old}")
        if new != old:
            for day in new.span():
                if new in self._by_date.get(day, ()):
                    raise ConflictError(f"Event exists already: {new}")

        for day in old.span():
            bucket = self._by_date[day]
            bucket[bucket.index(old)] = new
        return new

    def on_date(self, day: date) -> list[Event]:
        """Return all events whose span covers day, in insertion order."""
        return [
            e
            for e in self._by_date.get(day, ())
            if e.start.date() <= day <= e.end.date()
        ]

    def between(self, start: datetime, end: datetime) -> list[Event]:
        """Return events lying entirely within [start, end], both inclusive.

        Dates are walked in order; an event spanning several dates is
        reported once, on the first date it is met.
        """
        found: list[Event] = []
        seen: set[Event] = set()
        for day in days_between(start.date(), end.date()):
            for event in self._by_date.get(day, ()):
                if event in seen:
                    continue
                if event.start >= start and event.end <= end:
                    seen.add(event)
                    found.append(event)
        return found

    def starting_from(self, moment: datetime) -> list[Event]:
        """Return every event starting at or after moment, in date order."""
        found: list[Event] = []
        seen: set[Event] = set()
        for day in sorted(d for d in self._by_date if d >= moment.date()):
            for event in self._by_date[day]:
                if event not in seen and event.start >= moment:
                    seen.add(event)
                    found.append(event)
        return found

    def status_at(self, moment: datetime) -> str:
        """Return "Busy" if any stored event covers moment, else "Available"."""
        if any(e.covers(moment) for e in self._by_date.get(moment.date(), ())):
            return BUSY
        return AVAILABLE

    def __iter__(self) -> Iterator[Event]:
        """Iterate every stored event once, in date order."""
        seen: set[Event] = set()
        for day in sorted(self._by_date):
            for event in self._by_date[day]:
                if event not in seen:
                    seen.add(event)
                    yield event

    def __contains__(self, event: object) -> bool:
        return isinstance(event, Event) and event in self._by_date.get(
            event.start.date(), ()
        )

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def dates(self) -> list[date]:
        """Return the dates holding at least one event, in order."""
        return sorted(self._by_date)


def event_span(event: Event) -> tuple[date, date]:
    return event.start.date(), event.end.date()


__all__ = ["EventStore", "BUSY", "AVAILABLE"]
