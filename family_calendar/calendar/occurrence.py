"""Occurrence rules for one-off and yearly events.

Pure functions, no I/O. All comparisons are on calendar dates; an event's
``time`` never affects whether it occurs on a day.

A record with a missing or unparseable anchor date never occurs. It is
skipped rather than raised so one bad row cannot break a whole calendar.
"""
import logging
from datetime import date, datetime, time

from dateutil.rrule import YEARLY, rrule

from family_calendar.models.event import Event, RecurrenceType

logger = logging.getLogger(__name__)

# Upper bound on interval steps when searching for the next occurrence.
MAX_RECURRENCE_STEPS = 500


def coerce_date(value) -> date | None:
    """Return *value* as a date, or None if it is missing or malformed.

    Accepts dates, datetimes (time of day dropped) and ISO "YYYY-MM-DD" text.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            logger.debug(f"Ignoring malformed date value: {value!r}")
    return None


def is_recurring(event: Event) -> bool:
    """True for events with a recognised recurrence type.

    Unknown types are treated as one-off events.
    """
    return event.recurrence_type == RecurrenceType.YEARLY.value


def _interval(event: Event) -> int:
    if event.recurrence_interval is None:
        return 1
    try:
        return int(event.recurrence_interval)
    except (TypeError, ValueError):
        return 1


def occurs_on(event: Event, day: date) -> bool:
    """Does *event* occur on *day*?

    The anchor date always matches. A yearly event also matches every later
    day with the anchor's month and day, up to ``recurrence_until``.
    """
    anchor = coerce_date(event.date)
    day = coerce_date(day)
    if anchor is None or day is None:
        return False

    if day == anchor:
        return True
    if not is_recurring(event):
        return False
    if day < anchor:
        return False

    until = coerce_date(event.recurrence_until)
    if until is not None and day > until:
        return False

    return (day.month, day.day) == (anchor.month, anchor.day)


def next_occurrence_on_or_after(event: Event, from_day: date) -> date | None:
    """Return the first occurrence of *event* on or after *from_day*.

    Expands a yearly anchor every ``recurrence_interval`` years with an
    rrule; years without the anchor's day (Feb 29) yield nothing. Returns
    None when the event has no such occurrence within MAX_RECURRENCE_STEPS
    repetitions, when that occurrence is past ``recurrence_until``, or when
    the interval is not positive.
    """
    anchor = coerce_date(event.date)
    from_day = coerce_date(from_day)
    if anchor is None or from_day is None:
        return None

    if anchor >= from_day:
        return anchor
    if not is_recurring(event):
        return None

    interval = _interval(event)
    if interval < 1:
        logger.debug(f"Event {event.id} has non-positive interval {interval}")
        return None

    rule = rrule(
        YEARLY,
        dtstart=datetime.combine(anchor, time()),
        interval=interval,
        count=MAX_RECURRENCE_STEPS + 1,
    )
    upcoming = rule.after(datetime.combine(from_day, time()), inc=True)
    if upcoming is None:
        logger.debug(f"No occurrence of event {event.id} on or after {from_day}")
        return None

    until = coerce_date(event.recurrence_until)
    if until is not None and upcoming.date() > until:
        return None
    return upcoming.date()
