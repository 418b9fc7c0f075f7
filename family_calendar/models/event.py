"""Event model for family calendar entries.

This module defines the stored Event table, the request/response schemas
built on the same fields, and the transient occurrence types produced when
events are projected onto calendar days.

An Event is a *definition*: a one-off entry anchored on ``date``, or a yearly
series whose first occurrence is ``date``. Concrete calendar-day entries are
OccurrenceInstance objects derived on demand and never stored.
"""

import datetime as dt
import re
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel


class Visibility(str, Enum):
    """Who may read an event."""
    SHARED = "shared"  # every member of the owning family
    PRIVATE = "private"  # the owner only


class RecurrenceType(str, Enum):
    YEARLY = "yearly"


RECURRENCE_FIELDS = ("recurrence_type", "recurrence_interval", "recurrence_until")

# Never changed through an update, whoever asks.
IMMUTABLE_FIELDS = frozenset({"id", "owner_id", "family_id", "created_at", "updated_at"})

# Columns that cannot be cleared by sending null.
REQUIRED_FIELDS = frozenset({"title", "date", "visibility"})

DEFAULT_COLOR = "blue"

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def normalize_recurrence(values: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *values* with consistent recurrence fields.

    - ``recurrence_type`` is lower-cased; an empty value becomes None.
    - Without a type, ``recurrence_interval`` and ``recurrence_until`` are
      cleared.
    - With a type, a missing interval defaults to 1.
    """
    normalized = dict(values)
    raw_type = normalized.get("recurrence_type")
    recurrence_type = str(raw_type).strip().lower() if raw_type else None
    normalized["recurrence_type"] = recurrence_type or None

    if normalized["recurrence_type"] is None:
        normalized["recurrence_interval"] = None
        normalized["recurrence_until"] = None
    else:
        normalized["recurrence_interval"] = normalized.get("recurrence_interval") or 1
        normalized["recurrence_until"] = normalized.get("recurrence_until") or None
    return normalized


def _normalize_display(values: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(values)
    for field in ("time", "description", "emoji"):
        if field in normalized and normalized[field] is None:
            normalized[field] = ""
    if "color" in normalized and not normalized["color"]:
        normalized["color"] = DEFAULT_COLOR
    return normalized


def _validate_time(value: str | None) -> str | None:
    if not value:
        return value
    value = value.strip()
    match = _TIME_PATTERN.match(value)
    if not match or int(match.group(1)) > 23 or int(match.group(2)) > 59:
        raise ValueError("time must be HH:MM or empty for an all-day event")
    return value


def _validate_recurrence_type(value: str | None) -> str | None:
    if not value:
        return None
    value = value.strip().lower()
    if value != RecurrenceType.YEARLY.value:
        raise ValueError("only yearly recurrence is supported")
    return value


class EventBase(SQLModel):
    """Fields shared by the stored Event and its request/response schemas."""
    title: str = Field(min_length=1, max_length=500)
    date: dt.date = Field(index=True)
    time: str = Field(default="", max_length=10)  # "HH:MM", "" for all day
    description: str = ""
    color: str = Field(default=DEFAULT_COLOR, max_length=50)
    emoji: str = Field(default="", max_length=10)
    visibility: Visibility = Field(default=Visibility.SHARED, index=True)
    recurrence_type: str | None = Field(default=None, max_length=50)
    recurrence_interval: int | None = None
    recurrence_until: dt.date | None = None


class Event(EventBase, table=True):
    """A stored calendar entry.

    Events are created by a family member and are either shared with the
    whole family or private to their owner. A yearly event repeats on the
    month and day of its anchor ``date`` until ``recurrence_until``.

    Use ``Event.build`` and ``apply_update`` rather than setting recurrence
    fields directly, so that the recurrence fields stay consistent.

    Attributes:
        id: Unique identifier (UUID), immutable.
        title: Event title.
        date: Anchor date; the first occurrence of a recurring event.
        time: Start time as "HH:MM", or "" for an all-day event.
        description: Free text.
        color: Display color name.
        emoji: Display emoji.
        owner_id: User who created the event, immutable.
        family_id: Family the event belongs to, immutable.
        visibility: shared or private.
        recurrence_type: None for one-off events, "yearly" for yearly series.
        recurrence_interval: Repeat every N years; None when not recurring.
        recurrence_until: Last date (inclusive) a series may occur on.
        created_at: When the event was created.
        updated_at: When the event was last modified.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: UUID = Field(foreign_key="user.id", index=True)
    family_id: UUID = Field(foreign_key="family.id", index=True)
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))
    updated_at: dt.datetime | None = None

    @classmethod
    def build(cls, values: dict[str, Any], *, owner_id: UUID, family_id: UUID) -> "Event":
        """Create an Event from raw field values, normalizing recurrence."""
        fields = {k: v for k, v in values.items() if k not in IMMUTABLE_FIELDS}
        fields = _normalize_display(normalize_recurrence(fields))
        return cls(**fields, owner_id=owner_id, family_id=family_id)

    def apply_update(self, updates: dict[str, Any]) -> None:
        """Apply a partial update, keeping the recurrence fields consistent.

        Unknown and immutable keys are ignored.
        """
        changes = {
            k: v
            for k, v in updates.items()
            if k in EventBase.model_fields
            and k not in IMMUTABLE_FIELDS
            and not (v is None and k in REQUIRED_FIELDS)
        }
        recurrence = {field: getattr(self, field) for field in RECURRENCE_FIELDS}
        for field in RECURRENCE_FIELDS:
            if field in changes:
                recurrence[field] = changes.pop(field)

        for field, value in _normalize_display(changes).items():
            setattr(self, field, value)
        for field, value in normalize_recurrence(recurrence).items():
            setattr(self, field, value)
        self.updated_at = dt.datetime.now(dt.UTC)


class EventCreate(EventBase):
    """Request body for creating an event."""
    recurrence_interval: int | None = Field(default=None, ge=1)

    @field_validator("time")
    @classmethod
    def check_time(cls, value: str | None) -> str | None:
        return _validate_time(value)

    @field_validator("recurrence_type")
    @classmethod
    def check_recurrence_type(cls, value: str | None) -> str | None:
        return _validate_recurrence_type(value)


class EventUpdate(SQLModel):
    """Request body for a partial update. Omitted fields are left alone."""
    title: str | None = Field(default=None, min_length=1, max_length=500)
    date: dt.date | None = None
    time: str | None = None
    description: str | None = None
    color: str | None = None
    emoji: str | None = None
    visibility: Visibility | None = None
    recurrence_type: str | None = None
    recurrence_interval: int | None = Field(default=None, ge=1)
    recurrence_until: dt.date | None = None

    @field_validator("time")
    @classmethod
    def check_time(cls, value: str | None) -> str | None:
        return _validate_time(value)

    @field_validator("recurrence_type")
    @classmethod
    def check_recurrence_type(cls, value: str | None) -> str | None:
        return _validate_recurrence_type(value)


class EventRead(EventBase):
    """Response schema for a stored event."""
    id: UUID
    owner_id: UUID
    family_id: UUID
    created_at: dt.datetime
    updated_at: dt.datetime | None = None


class OccurrenceInstance(EventRead):
    """An event projected onto one calendar day. Never stored."""
    occurrence_date: dt.date
    is_recurring_instance: bool = False


class DayAgenda(SQLModel):
    """All occurrences a viewer sees on one day, in display order."""
    date: dt.date
    occurrences: list[OccurrenceInstance] = Field(default_factory=list)
