"""User model for family members.

Credentials and sessions are owned by the external auth layer; this table
only carries what the calendar needs to build a viewer context: identity,
family membership and role.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from family_calendar.models.family import Family


class Role(str, Enum):
    """Three-tier family role. Only affects write authorization."""
    ADMIN = "admin"
    ADULT = "adult"
    CHILD = "child"


class User(SQLModel, table=True):
    """A member of a family.

    Attributes:
        id: Unique identifier (UUID).
        email: Login email, unique across all families.
        name: Display name.
        role: One of admin, adult or child.
        family_id: Foreign key to the Family, None until the user joins one.
        created_at: When the user was registered.
        family: Reference to the Family object.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: str
    role: Role = Field(default=Role.ADULT)
    family_id: UUID | None = Field(default=None, foreign_key="family.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    family: Optional["Family"] = Relationship(back_populates="members")


class UserRead(SQLModel):
    """Public view of a family member."""
    id: UUID
    email: str
    name: str
    role: Role
    family_id: UUID | None = None
    created_at: datetime


class RoleUpdate(SQLModel):
    """Request body for changing a member's role."""
    role: str
