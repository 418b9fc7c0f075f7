"""Write authorization for events.

Denials are reported as booleans; mapping them to HTTP status codes is the
route layer's job.
"""
from typing import Any

from family_calendar.models.event import Event
from family_calendar.models.user import Role
from family_calendar.models.viewer import ViewerContext

# Fields a child may not change, even on their own events.
CHILD_PROTECTED_FIELDS = ("visibility", "owner_id", "family_id")


def can_mutate(event: Event, actor: ViewerContext) -> bool:
    """Only the event's owner or an admin may edit or delete it."""
    return event.owner_id == actor.user_id or actor.role == Role.ADMIN


def sanitize_update(updates: dict[str, Any], actor: ViewerContext) -> dict[str, Any]:
    """Drop the fields *actor* is not allowed to change. Returns a new dict."""
    if actor.role != Role.CHILD:
        return dict(updates)
    return {k: v for k, v in updates.items() if k not in CHILD_PROTECTED_FIELDS}
