"""Property edits at single, following, and whole-series scope.

Every edit builds a replacement Event and swaps it into the store; stored
events are never mutated. Multi-event edits undo the members already
changed when a later member fails, so they apply entirely or not at all.
"""

from collections.abc import Sequence
from datetime import datetime

from calseries.errors import ConflictError, NotFoundError, ValidationError
from calseries.event import Event, Identifier, PropertyChange, PropertyType
from calseries.store import EventStore

_CALENDAR_PROPERTIES = (PropertyType.CALENDARNAME, PropertyType.TIMEZONE)


class EditPropagator:
    """Resolve an edit scope to events and apply a change to each.

    Attributes:
        store: The calendar's date index
        series: series id -> members in series order, kept in step with store
    """

    def __init__(self, store: EventStore, series: dict[int, list[Event]]) -> None:
        self.store: EventStore = store
        self.series: dict[int, list[Event]] = series

    def edit_event(
        self, identifier: Identifier, change: PropertyChange, *, in_series: bool = False
    ) -> Event:
        """Apply change to the event matching identifier's subject and start.

        Args:
            identifier: Subject and exact start of the event to edit
            change: The property change
            in_series: Treat START/END values as a time of day applied to the
                event's own date

        Returns:
            The replacement event

        Raises:
            NotFoundError: If no event matches on identifier's date
            ConflictError: If the new start is taken by another event that day,
                or the edited event duplicates an existing one
            ValidationError: If the change is invalid for this event
        """
        if change.property in _CALENDAR_PROPERTIES:
            raise ValidationError(
                f"{change.property.name} is a calendar property, not an event property.\n"
                f"Hint: use CalendarRegistry.edit_calendar() instead"
            )

        original = self.find(identifier.subject, identifier.start)
        updated = change.apply(original, in_series=in_series)

        if change.property is PropertyType.START:
            self._check_start_free(original, updated.start)

        self._swap(original, updated, timing=change.property.is_timing)
        return updated

    def edit_following(
        self, subject: str, start: datetime, change: PropertyChange
    ) -> list[Event]:
        """Edit the anchor event and every later member of its series.

        The anchor is found by subject and exact start. Later members are
        those whose start is strictly after the anchor's. An anchor outside
        any series is edited alone.
        """
        anchor = self.find(subject, start)
        targets = [anchor]
        targets.extend(m for m in self.members_of(anchor) if m.start > start)
        return self._edit_all(targets, change)

    def edit_series(self, series_id: int, change: PropertyChange) -> list[Event]:
        """Edit every member of a series, in series order.

        Raises:
            NotFoundError: If the series id is unknown or has no members
        """
        members = self.series.get(series_id)
        if not members:
            raise NotFoundError(f"No events found for series id {series_id}")
        return self._edit_all(list(members), change)

    def find(self, subject: str, start: datetime) -> Event:
        """Return the event on start's date with this subject and exact start."""
        for event in self.store.on_date(start.date()):
            if event.subject == subject and event.start == start:
                return event
        raise NotFoundError(
            f"Event does not exist: '{subject}' starting {start.isoformat(timespec='minutes')}"
        )

    def members_of(self, event: Event) -> list[Event]:
        """Return the series event belongs to, or [] for a standalone event.

        A series id alone does not make an event a member; copied events can
        carry an id that names an unrelated series in this calendar.
        """
        members = self.series.get(event.series_id, [])
        return list(members) if event in members else []

    def _edit_all(self, targets: Sequence[Event], change: PropertyChange) -> list[Event]:
        applied: list[tuple[Event, Event]] = []
        try:
            for event in targets:
                updated = self.edit_event(event.identifier, change, in_series=True)
                applied.append((event, updated))
        except Exception:
            for original, updated in reversed(applied):
                self._swap(updated, original, timing=change.property.is_timing)
            raise
        return [updated for _, updated in applied]

    def _check_start_free(self, original: Event, new_start: datetime) -> None:
        for other in self.store.on_date(new_start.date()):
            if other is not original and other.start == new_start:
                raise ConflictError(
                    f"Time already exists: {new_start.isoformat(timespec='minutes')} "
                    f"is the start of {other}"
                )

    def _swap(self, old: Event, new: Event, *, timing: bool) -> None:
        if timing:
            self.store.remove(old)
            try:
                self.store.insert(new)
            except ConflictError:
                self.store.insert(old)
                raise
        else:
            self.store.replace(old, new)

        if old.series_id is not None:
            members = self.series.get(old.series_id, [])
            if old in members:
                members[members.index(old)] = new


__all__ = ["EditPropagator"]
