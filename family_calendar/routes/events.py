"""Event routes for viewing and managing the family calendar."""
import logging
from datetime import date, timedelta
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from family_calendar.calendar.authorization import can_mutate, sanitize_update
from family_calendar.calendar.materializer import (
    list_view,
    occurrences_for_day,
    occurrences_for_month,
    occurrences_for_range,
)
from family_calendar.calendar.store import EventNotFoundError, EventStore
from family_calendar.calendar.visibility import filter_visible, is_visible
from family_calendar.core.auth import get_viewer
from family_calendar.core.config import settings
from family_calendar.core.database import get_session
from family_calendar.models import (
    DayAgenda,
    Event,
    EventCreate,
    EventRead,
    EventUpdate,
    OccurrenceInstance,
    ViewerContext,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


class BulkCreateResult(SQLModel):
    created: list[EventRead]
    skipped: int


def get_event_store(session: Session = Depends(get_session)) -> EventStore:
    """Dependency for getting the event store."""
    return EventStore(session)


def _candidates(store: EventStore, viewer: ViewerContext) -> list[Event]:
    return store.list_visible_candidates(viewer.family_id, viewer.user_id)


def _get_mutable_event(event_id: UUID, viewer: ViewerContext, store: EventStore) -> Event:
    event = store.get(event_id)
    if not event or event.family_id != viewer.family_id:
        raise HTTPException(status_code=404, detail="Event not found")
    if not can_mutate(event, viewer):
        raise HTTPException(status_code=403, detail="Not authorized to modify this event")
    return event


@router.get("", response_model=list[EventRead])
async def list_events(
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """
    List stored event definitions visible to the viewer.

    Recurring events appear once, on their anchor date. Use the agenda,
    day, range or month views for expanded occurrences.
    """
    return filter_visible(_candidates(store, viewer), viewer)


@router.get("/agenda", response_model=list[DayAgenda])
async def agenda(
    start: date | None = None,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """
    Rolling list view starting at *start* (default today).

    Shows at least ``list_horizon_days`` days, extended to the next
    occurrence of any visible event beyond that window, but never more
    than ``max_range_days`` days.
    """
    start = start or date.today()
    return list_view(
        _candidates(store, viewer),
        start,
        viewer,
        min_days=settings.list_horizon_days,
        max_days=settings.max_range_days,
    )


@router.get("/day/{day}", response_model=list[OccurrenceInstance])
async def day_events(
    day: date,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """Occurrences on a single day, ordered by time with all-day events last."""
    return occurrences_for_day(_candidates(store, viewer), day, viewer)


@router.get("/range", response_model=list[DayAgenda])
async def range_events(
    start: date,
    end: date,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """
    Per-day agenda from *start* to *end* inclusive.

    Returns 400 if *end* is before *start* or the range is longer than
    ``max_range_days``.
    """
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    if end - start > timedelta(days=settings.max_range_days):
        raise HTTPException(
            status_code=400,
            detail=f"Range cannot exceed {settings.max_range_days} days",
        )
    return occurrences_for_range(_candidates(store, viewer), start, end, viewer)


@router.get("/month/{year}/{month}", response_model=list[DayAgenda])
async def month_events(
    year: int,
    month: int,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """Month grid: one entry per day of the month, including empty days."""
    try:
        return occurrences_for_month(_candidates(store, viewer), year, month, viewer)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=EventRead, status_code=201)
async def create_event(
    body: EventCreate,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """
    Create an event owned by the viewer in the viewer's family.

    Owner and family always come from the viewer, never from the body.
    """
    return store.create(body.model_dump(), viewer.user_id, viewer.family_id)


@router.post("/bulk", response_model=BulkCreateResult, status_code=201)
async def bulk_create_events(
    body: list[EventCreate],
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """
    Create several events at once, skipping duplicates.

    A duplicate has the same title (case-insensitive), date and time as an
    event already in the family or earlier in the request.
    """
    created, skipped = store.bulk_create(
        [item.model_dump() for item in body], viewer.user_id, viewer.family_id
    )
    return BulkCreateResult(
        created=[EventRead.model_validate(event) for event in created],
        skipped=skipped,
    )


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: UUID,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """Return a single event, or 404 if the viewer cannot see it."""
    event = store.get(event_id)
    if not event or not is_visible(event, viewer):
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.put("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: UUID,
    body: EventUpdate,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """
    Update an event.

    Only the owner or an admin may edit. Children cannot change visibility.
    Clearing ``recurrence_type`` also clears the interval and end date.
    """
    _get_mutable_event(event_id, viewer, store)
    updates = sanitize_update(body.model_dump(exclude_unset=True), viewer)
    try:
        return store.update(event_id, updates)
    except EventNotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")


@router.delete("/{event_id}", response_model=EventRead)
async def delete_event(
    event_id: UUID,
    viewer: ViewerContext = Depends(get_viewer),
    store: EventStore = Depends(get_event_store),
):
    """Delete an event. Only the owner or an admin may delete."""
    _get_mutable_event(event_id, viewer, store)
    try:
        return store.delete(event_id)
    except EventNotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")
