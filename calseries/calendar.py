"""A named calendar: one event store, its series table, and a timezone."""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from calseries.edits import EditPropagator
from calseries.errors import ConflictError, NotFoundError, ValidationError
from calseries.event import Event, Identifier, PropertyChange
from calseries.recurrence import WeeklyPattern
from calseries.store import EventStore
from calseries.timezones import reproject
from calseries.util import DEFAULT_TIMEZONE, UPCOMING_LIMIT, resolve_zone

logger = logging.getLogger(__name__)


class Calendar:
    """Events of one calendar, indexed by date.

    Single events, series, and recurring series are created here; edits are
    delegated to an EditPropagator sharing this calendar's store and series
    table.

    Attributes:
        name: Calendar name, unique within its registry
    """

    def __init__(self, name: str, timezone: str | None = None) -> None:
        """
        Initialize an empty calendar.

        Args:
            name: Non-empty calendar name
            timezone: IANA zone id; the configured default zone when omitted

        Raises:
            ValidationError: On an empty name or unknown zone
        """
        if name is None or not str(name).strip():
            raise ValidationError("Calendar name cannot be null or empty")
        self.name: str = name
        self._zone: ZoneInfo = resolve_zone(DEFAULT_TIMEZONE if timezone is None else timezone)
        self._store: EventStore = EventStore()
        self._series: dict[int, list[Event]] = {}
        self._next_series_id: int = 1
        self._edits: EditPropagator = EditPropagator(self._store, self._series)

    @property
    def timezone(self) -> str:
        return self._zone.key

    @property
    def zone(self) -> ZoneInfo:
        return self._zone

    # -- creation -----------------------------------------------------------

    def create_event(self, event: Event) -> Event:
        """Store a single event in this calendar's zone.

        Returns:
            The stored event

        Raises:
            ConflictError: If an event with the same subject, start and end exists
        """
        return self._store.insert(self._adopt(event))

    def create_events(self, events: Iterable[Event]) -> list[Event]:
        """Store events as one new series, all or nothing.

        Every event must start and end on the same date and start at the
        same time of day as the first. Members already stored are removed
        again if any member turns out to be a duplicate.

        Returns:
            The stored members, carrying the new series id

        Raises:
            ValidationError: If the list is empty, a member spans several
                days, or start times differ
            ConflictError: If any member duplicates a stored event
        """
        batch = [self._adopt(e) for e in events]
        if not batch:
            raise ValidationError("Events list cannot be null or empty")

        first_clock = batch[0].start.time()
        for event in batch:
            if event.start.date() != event.end.date():
                raise ValidationError(f"Event spans multiple days: {event}")
            if event.start.time() != first_clock:
                raise ValidationError(
                    f"Start times must all be the same: {event} does not start at "
                    f"{first_clock.isoformat(timespec='minutes')}"
                )

        series_id = self._next_series_id
        self._next_series_id += 1

        added: list[Event] = []
        try:
            for event in batch:
                added.append(self._store.insert(replace(event, series_id=series_id)))
        except ConflictError as err:
            for member in reversed(added):
                self._store.remove(member)
            logger.debug(
                "Rolled back %d event(s) of series %d in %r", len(added), series_id, self.name
            )
            raise ConflictError(f"Duplicate exists in series: {err}") from err

        self._series[series_id] = added
        logger.debug("Created series %d with %d event(s) in %r", series_id, len(added), self.name)
        return list(added)

    def create_series(self, seed: Event, days: str, repeat: int | date) -> list[Event]:
        """Expand seed over a weekly pattern and store the result as one series.

        Args:
            seed: First event; fixes subject, time of day and duration
            days: Weekday letters, e.g. "MWF"
            repeat: Number of weeks, or an until-date

        Example:
            >>> cal.create_series(
            ...     Event.create("sleep", datetime(2025, 6, 2, 10), datetime(2025, 6, 2, 11)),
            ...     "MWF",
            ...     2,
            ... )
            ... # Jun 2, 4, 6, 9, 11, 13
        """
        pattern = WeeklyPattern(days, repeat, first=seed.start.date())
        return self.create_events(pattern.expand(seed))

    # -- edits --------------------------------------------------------------

    def edit_event(self, identifier: Identifier, change: PropertyChange) -> Event:
        """Edit one event; START/END values replace the field verbatim."""
        return self._edits.edit_event(identifier, change)

    def edit_following(
        self, subject: str, start: datetime, change: PropertyChange
    ) -> list[Event]:
        """Edit an event and the later members of its series."""
        return self._edits.edit_following(subject, start, change)

    def edit_series(self, series_id: int, change: PropertyChange) -> list[Event]:
        """Edit every member of a series."""
        return self._edits.edit_series(series_id, change)

    def edit_series_at(
        self, subject: str, start: datetime, change: PropertyChange
    ) -> list[Event]:
        """Edit the whole series of the event with this subject and start.

        Raises:
            NotFoundError: If the event does not exist or is not in a series
        """
        event = self._edits.find(subject, start)
        if not self._edits.members_of(event):
            raise NotFoundError(f"{event} is not part of a series")
        return self.edit_series(event.series_id, change)

    def set_timezone(self, timezone: str) -> None:
        """Move the calendar to a new zone, re-expressing every stored event.

        Each event keeps its instants; wall-clock values change. Repeated
        calls convert the already converted values again.

        Raises:
            ValidationError: On an empty or unknown zone
        """
        zone = resolve_zone(timezone)
        retimed = {event: reproject(event, zone.key) for event in self._store}
        store = EventStore(retimed.values())

        self._store = store
        self._edits.store = store
        for series_id, members in self._series.items():
            self._series[series_id] = [retimed[m] for m in members]
        self._zone = zone
        logger.debug("Retimed %d event(s) of %r to %s", len(retimed), self.name, zone.key)

    # -- queries ------------------------------------------------------------

    def events_on_date(self, day: date) -> list[Event]:
        return self._store.on_date(day)

    def events_between(self, start: datetime, end: datetime) -> list[Event]:
        return self._store.between(start, end)

    def status_at(self, moment: datetime) -> str:
        return self._store.status_at(moment)

    def upcoming(self, day: date, limit: int = UPCOMING_LIMIT) -> list[Event]:
        """Return the schedule starting on day.

        When at least `limit` events lie ahead, the view stops at the end of
        the limit-th one (events ending no later than it are included).
        """
        ahead = self._store.starting_from(datetime.combine(day, time.min))
        if len(ahead) < limit:
            return ahead
        cutoff = ahead[limit - 1].end
        return [e for e in ahead if e.end <= cutoff]

    def all_events(self) -> list[Event]:
        return list(self._store)

    def find_event(self, subject: str) -> Event:
        """Return the first stored event with this subject.

        Raises:
            NotFoundError: If no event has that subject
        """
        for event in self._store:
            if event.subject == subject:
                return event
        raise NotFoundError(f"Event not found: {subject!r}")

    def series(self, series_id: int) -> list[Event]:
        """Return the members of a series, in series order."""
        if series_id not in self._series:
            raise NotFoundError(f"No events found for series id {series_id}")
        return list(self._series[series_id])

    def _adopt(self, event: Event) -> Event:
        if event.timezone is None:
            return replace(event, timezone=self.timezone)
        if event.timezone != self.timezone:
            return reproject(event, self.timezone)
        return event

    def __repr__(self) -> str:
        return f"Calendar({self.name!r}, timezone={self.timezone!r})"


__all__ = ["Calendar"]
