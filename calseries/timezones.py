"""Wall-clock reprojection between IANA timezones."""

from dataclasses import replace
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from calseries.event import Event
from calseries.util import DEFAULT_TIMEZONE, resolve_zone


def convert(moment: datetime, source: ZoneInfo, target: ZoneInfo) -> datetime:
    """Re-render a wall-clock value from source as wall-clock in target.

    The underlying instant is held fixed.
    """
    return moment.replace(tzinfo=source).astimezone(target).replace(tzinfo=None)


def reproject(event: Event, target: str | None) -> Event:
    """Express event in the target zone, preserving its instants.

    The event's current zone is its stored timezone, or the process default
    when it has none. Start and end are converted independently, so an event
    straddling a DST transition in either zone can change apparent duration.

    Raises:
        ValidationError: If target is empty or not a known zone

    Example:
        >>> reproject(Event.create("Call", datetime(2025, 6, 2, 14), datetime(2025, 6, 2, 15),
        ...                        timezone="America/New_York"),
        ...           "America/Los_Angeles")
        ... # 11:00 -> 12:00 America/Los_Angeles
    """
    target_zone = resolve_zone(target)
    source_zone = resolve_zone(event.timezone or DEFAULT_TIMEZONE)
    return replace(
        event,
        start=convert(event.start, source_zone, target_zone),
        end=convert(event.end, source_zone, target_zone),
        timezone=target_zone.key,
    )


def shift(event: Event, days: int) -> Event:
    """Move both ends of event by a whole number of days."""
    delta = timedelta(days=days)
    return replace(event, start=event.start + delta, end=event.end + delta)


__all__ = ["convert", "reproject", "shift"]
