"""Event persistence behind a narrow interface.

The store's read query is a coarse pre-filter. Callers still run results
through the visibility filter; the store is not a security boundary.
"""
import logging
from collections.abc import Iterable
from typing import Any
from uuid import UUID

from sqlalchemy import and_, func, or_
from sqlmodel import Session, select

from family_calendar.models.event import Event, Visibility

logger = logging.getLogger(__name__)


class EventNotFoundError(LookupError):
    """Raised when an update or delete targets a missing event."""


class EventStore:
    """Single-record CRUD for events over a database session."""

    def __init__(self, session: Session):
        self.session = session

    def list_visible_candidates(self, family_id: UUID, user_id: UUID) -> list[Event]:
        """Shared events of the family plus the user's own private events."""
        statement = (
            select(Event)
            .where(
                or_(
                    and_(Event.family_id == family_id, Event.visibility == Visibility.SHARED),
                    and_(Event.owner_id == user_id, Event.visibility == Visibility.PRIVATE),
                )
            )
            .order_by(Event.date)
        )
        return list(self.session.exec(statement).all())

    def get(self, event_id: UUID) -> Event | None:
        return self.session.get(Event, event_id)

    def create(self, values: dict[str, Any], owner_id: UUID, family_id: UUID) -> Event:
        """Create an event owned by *owner_id* in *family_id*."""
        event = Event.build(values, owner_id=owner_id, family_id=family_id)
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        logger.info(f"Created event {event.id} ({event.title}) for family {family_id}")
        return event

    def update(self, event_id: UUID, updates: dict[str, Any]) -> Event:
        """Apply a partial update and return the stored event."""
        event = self.get(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found")

        event.apply_update(updates)
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        logger.info(f"Updated event {event.id}: {sorted(updates)}")
        return event

    def delete(self, event_id: UUID) -> Event:
        """Delete an event and return a detached copy of it."""
        event = self.get(event_id)
        if event is None:
            raise EventNotFoundError(f"Event {event_id} not found")

        deleted = Event.model_validate(event.model_dump())
        self.session.delete(event)
        self.session.commit()
        logger.info(f"Deleted event {event_id}")
        return deleted

    def bulk_create(
        self, values_list: Iterable[dict[str, Any]], owner_id: UUID, family_id: UUID
    ) -> tuple[list[Event], int]:
        """
        Create many events, skipping duplicates.

        A record is a duplicate when the family already has an event, stored
        or earlier in the batch, with the same title (case-insensitive), date
        and time. Records without a title or date are skipped too. Each event
        is committed on its own.

        Returns (created events, number skipped).
        """
        created: list[Event] = []
        skipped = 0
        seen: set[tuple] = set()

        for values in values_list:
            title = (values.get("title") or "").strip()
            if not title or not values.get("date"):
                skipped += 1
                continue

            time_value = (values.get("time") or "").strip()
            key = (title.lower(), values["date"], time_value)
            if key in seen or self._exists(family_id, *key):
                skipped += 1
                continue
            seen.add(key)

            created.append(
                self.create(
                    {**values, "title": title, "time": time_value}, owner_id, family_id
                )
            )

        logger.info(f"Bulk create for family {family_id}: {len(created)} created, {skipped} skipped")
        return created, skipped

    def _exists(self, family_id: UUID, title: str, day, time_value: str) -> bool:
        statement = (
            select(Event.id)
            .where(Event.family_id == family_id)
            .where(func.lower(Event.title) == title)
            .where(Event.date == day)
            .where(func.coalesce(Event.time, "") == time_value)
            .limit(1)
        )
        return self.session.exec(statement).first() is not None
