"""Per-day background images shared across a family's calendar."""

import datetime as dt
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

# Decoded size limit for a background image.
MAX_BACKGROUND_BYTES = int(1.5 * 1024 * 1024)


class DayBackground(SQLModel, table=True):
    """An image shown behind one calendar day for every member of a family.

    A family has at most one background per date; saving again replaces it.

    Attributes:
        id: Unique identifier (UUID).
        family_id: Family the background belongs to.
        date: Calendar day it decorates.
        image_data: ``data:image/...;base64,...`` URL.
        created_by: Member who last set it, None once they leave the family.
        created_at: When the background was first set.
        updated_at: When the image was last replaced.
    """
    __table_args__ = (UniqueConstraint("family_id", "date"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    family_id: UUID = Field(foreign_key="family.id", index=True)
    date: dt.date = Field(index=True)
    image_data: str
    created_by: UUID | None = Field(default=None, foreign_key="user.id")
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))
    updated_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))


class DayBackgroundCreate(SQLModel):
    """Request body for setting a day background."""
    date: dt.date
    image_data: str


class DayBackgroundRead(SQLModel):
    id: UUID
    date: dt.date
    image_data: str
    created_by: UUID | None = None
    updated_at: dt.datetime
