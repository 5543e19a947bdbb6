"""Copying events from the current calendar into another one."""

import logging
from dataclasses import replace
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from calseries.calendar import Calendar
from calseries.errors import NotFoundError, ValidationError
from calseries.event import Event
from calseries.timezones import reproject, shift
from calseries.util import COPY_DAY_END

if TYPE_CHECKING:
    from calseries.registry import CalendarRegistry

logger = logging.getLogger(__name__)


class CrossCalendarCopier:
    """Copy single events or date ranges between calendars of one registry.

    The two copy operations treat duration differently. copy_event keeps the
    original end's clock time on the target date; copy_events converts each
    event to the target zone and shifts it by whole days.
    """

    def __init__(self, registry: "CalendarRegistry") -> None:
        self.registry: "CalendarRegistry" = registry

    def copy_event(
        self, subject: str, source_start: datetime, target_name: str, target_start: datetime
    ) -> Event:
        """Copy one event of the current calendar to target_start in another calendar.

        The copy ends on target_start's date at the original end's hour and
        minute, and is stamped with the target calendar's zone without any
        conversion.

        Returns:
            The stored copy

        Raises:
            StateError: If no calendar is selected
            NotFoundError: If the target calendar or the source event is missing
            ConflictError: If the target already holds an identical event
        """
        source = self.registry.current
        target = self._target(target_name)

        original = None
        for event in source.events_on_date(source_start.date()):
            if event.subject == subject and event.start == source_start:
                original = event
                break
        if original is None:
            raise NotFoundError(
                f"Event not found: '{subject}' starting "
                f"{source_start.isoformat(timespec='minutes')} in {source.name!r}"
            )

        copy = replace(
            original,
            start=target_start,
            end=target_start.replace(
                hour=original.end.hour, minute=original.end.minute, second=0, microsecond=0
            ),
            timezone=target.timezone,
        )
        stored = target.create_event(copy)
        logger.debug("Copied %s from %r to %r", stored, source.name, target.name)
        return stored

    def copy_events(
        self, start_date: date, end_date: date, target_name: str, target_start_date: date
    ) -> list[Event]:
        """Copy every event between two dates of the current calendar.

        Events lying within [start_date 00:00, end_date 23:59] are converted
        to the target zone and moved by (target_start_date - start_date) days.
        Members of one source series are recreated together as a new series
        in the target; other events are copied one by one.

        Returns:
            The stored copies

        Raises:
            ValidationError: If start_date is after end_date
            StateError: If no calendar is selected
            NotFoundError: If the target calendar is missing
        """
        if start_date is None or end_date is None or target_start_date is None:
            raise ValidationError("Dates cannot be null")
        if start_date > end_date:
            raise ValidationError(
                f"Start date cannot be after end date ({start_date} > {end_date})"
            )

        source = self.registry.current
        target = self._target(target_name)

        events = source.events_between(
            datetime.combine(start_date, time.min), datetime.combine(end_date, COPY_DAY_END)
        )
        offset = (target_start_date - start_date).days

        groups: dict[int, list[Event]] = {}
        standalone: list[Event] = []
        for event in events:
            if event.series_id:
                groups.setdefault(event.series_id, []).append(event)
            else:
                standalone.append(event)

        copied: list[Event] = []
        for members in groups.values():
            copied.extend(target.create_events([self._move(e, target, offset) for e in members]))
        for event in standalone:
            moved = replace(self._move(event, target, offset), series_id=None)
            copied.append(target.create_event(moved))

        logger.debug(
            "Copied %d event(s) from %r to %r, %d series", len(copied), source.name,
            target.name, len(groups),
        )
        return copied

    def _target(self, name: str) -> Calendar:
        if name not in self.registry:
            raise NotFoundError(f"Target calendar does not exist: {name!r}")
        return self.registry.get(name)

    @staticmethod
    def _move(event: Event, target: Calendar, days: int) -> Event:
        return shift(reproject(event, target.timezone), days)


__all__ = ["CrossCalendarCopier"]
