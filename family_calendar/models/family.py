"""Family model grouping the users who share a calendar.

Shared events are visible to every member of the family that owns them.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from family_calendar.models.user import User


class Family(SQLModel, table=True):
    """A household sharing one calendar.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name, e.g. "The Smiths".
        created_at: When the family was created.
        members: Users belonging to this family.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationships
    members: list["User"] = Relationship(back_populates="family")
