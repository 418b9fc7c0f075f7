"""Project stored events onto calendar days for a viewer.

Combines the occurrence rules with the visibility filter to answer "what
does this viewer see on day D" and "what do they see from START to END".
The results are OccurrenceInstance / DayAgenda objects built fresh on every
call; the input events are never modified.
"""
import calendar
import logging
import sys
from collections.abc import Iterable
from datetime import date, timedelta

from family_calendar.calendar.occurrence import (
    coerce_date,
    is_recurring,
    next_occurrence_on_or_after,
    occurs_on,
)
from family_calendar.calendar.visibility import filter_visible, is_visible
from family_calendar.models.event import DayAgenda, Event, EventRead, OccurrenceInstance
from family_calendar.models.viewer import ViewerContext

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 60

# Sort value for events without a usable time; all-day events go last.
ALL_DAY = sys.maxsize


def add_days(day: date, days: int) -> date:
    """*day* shifted by *days*, clamped to the supported date range."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def time_sort_key(time_value: str | None) -> int:
    """Minutes since midnight for "HH:MM"; ALL_DAY when empty or malformed."""
    if not time_value:
        return ALL_DAY
    parts = time_value.strip().split(":")
    if len(parts) < 2:
        return ALL_DAY
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return ALL_DAY
    return hours * 60 + minutes


def make_occurrence(event: Event, day: date) -> OccurrenceInstance:
    """Project *event* onto *day*."""
    anchor = coerce_date(event.date)
    data = {field: getattr(event, field) for field in EventRead.model_fields}
    data.update(
        date=anchor,
        recurrence_until=coerce_date(event.recurrence_until),
        occurrence_date=day,
        is_recurring_instance=is_recurring(event) and day != anchor,
    )
    return OccurrenceInstance(**data)


def occurrences_for_day(
    events: Iterable[Event], day: date, viewer: ViewerContext
) -> list[OccurrenceInstance]:
    """
    Occurrences *viewer* sees on *day*, ordered by time of day.

    All-day events come after timed ones. Events with the same time keep
    their input order. An event listed twice is only materialized once.
    """
    seen: set = set()
    found: list[OccurrenceInstance] = []
    for event in events:
        if event.id in seen:
            continue
        if not is_visible(event, viewer) or not occurs_on(event, day):
            continue
        seen.add(event.id)
        found.append(make_occurrence(event, day))

    return sorted(found, key=lambda occurrence: time_sort_key(occurrence.time))


def horizon_for_list_view(
    events: Iterable[Event], start: date, min_days: int = DEFAULT_HORIZON_DAYS
) -> date:
    """
    Last day the rolling list view should show.

    At least *min_days* after *start*, pushed out to the latest next
    occurrence of any event. Only each event's next occurrence counts.
    """
    horizon = add_days(start, min_days)
    for event in events:
        upcoming = next_occurrence_on_or_after(event, start)
        if upcoming is not None and upcoming > horizon:
            horizon = upcoming
    return horizon


def occurrences_for_range(
    events: Iterable[Event], start: date, end: date, viewer: ViewerContext
) -> list[DayAgenda]:
    """One DayAgenda per day from *start* to *end* inclusive.

    Days without occurrences are included. Returns [] if *end* is before
    *start*.
    """
    if end < start:
        return []

    events = list(events)
    agenda: list[DayAgenda] = []
    day = start
    while True:
        agenda.append(
            DayAgenda(date=day, occurrences=occurrences_for_day(events, day, viewer))
        )
        if day >= end:
            return agenda
        day += timedelta(days=1)


def list_view(
    events: Iterable[Event],
    start: date,
    viewer: ViewerContext,
    min_days: int = DEFAULT_HORIZON_DAYS,
    max_days: int | None = None,
) -> list[DayAgenda]:
    """Rolling agenda from *start* out to the list-view horizon.

    The horizon is computed from the viewer's visible events only. With
    *max_days*, the walk stops at most that many days after *start* even if
    an event lies further out.
    """
    visible = filter_visible(events, viewer)
    end = horizon_for_list_view(visible, start, min_days)
    if max_days is not None:
        end = min(end, add_days(start, max_days))
    logger.debug(f"List view for {viewer.user_id}: {start} to {end}")
    return occurrences_for_range(visible, start, end, viewer)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month. Raises ValueError for an invalid month."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def occurrences_for_month(
    events: Iterable[Event], year: int, month: int, viewer: ViewerContext
) -> list[DayAgenda]:
    """Month-grid agenda: one DayAgenda for every day of the month."""
    first, last = month_bounds(year, month)
    return occurrences_for_range(events, first, last, viewer)
