"""Viewer context handed to the visibility filter and authorization gate."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from family_calendar.models.user import Role, User


class ViewerContext(BaseModel):
    """Who is looking at the calendar.

    Derived from the authenticated session on every request and never
    persisted.
    """
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    family_id: UUID
    role: Role

    @classmethod
    def for_user(cls, user: User) -> "ViewerContext":
        if user.family_id is None:
            raise ValueError(f"User {user.id} does not belong to a family")
        return cls(user_id=user.id, family_id=user.family_id, role=user.role)
