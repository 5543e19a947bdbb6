"""Narrow capability sets for the collaborators of a calendar.

Calendar implements every protocol below; each consumer depends only on the
slice it uses. A command interpreter needs EventEditing and EventQueries, a
schedule view needs ScheduleView and CalendarNames.
"""

from collections.abc import Iterable
from datetime import date, datetime
from typing import Protocol, runtime_checkable

from calseries.event import Event, Identifier, PropertyChange


@runtime_checkable
class EventQueries(Protocol):
    """Read access to one calendar."""

    @property
    def timezone(self) -> str: ...

    def events_on_date(self, day: date) -> list[Event]: ...

    def events_between(self, start: datetime, end: datetime) -> list[Event]: ...

    def status_at(self, moment: datetime) -> str: ...


@runtime_checkable
class EventEditing(Protocol):
    """Creation and edits on one calendar."""

    def create_event(self, event: Event) -> Event: ...

    def create_events(self, events: Iterable[Event]) -> list[Event]: ...

    def create_series(self, seed: Event, days: str, repeat: int | date) -> list[Event]: ...

    def edit_event(self, identifier: Identifier, change: PropertyChange) -> Event: ...

    def edit_following(
        self, subject: str, start: datetime, change: PropertyChange
    ) -> list[Event]: ...

    def edit_series(self, series_id: int, change: PropertyChange) -> list[Event]: ...


@runtime_checkable
class ScheduleView(EventQueries, Protocol):
    """What a windowed schedule needs on top of plain queries."""

    def upcoming(self, day: date, limit: int = ...) -> list[Event]: ...

    def all_events(self) -> list[Event]: ...

    def find_event(self, subject: str) -> Event: ...


@runtime_checkable
class CalendarNames(Protocol):
    """Listing the calendars of a registry."""

    def list_calendar_names(self) -> list[str]: ...


__all__ = ["EventQueries", "EventEditing", "ScheduleView", "CalendarNames"]
