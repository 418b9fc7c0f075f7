"""Read visibility of events.

Role plays no part here: a child and an admin see the same events. Roles
only matter for writes (see ``authorization``).
"""
from collections.abc import Iterable

from family_calendar.models.event import Event, Visibility
from family_calendar.models.viewer import ViewerContext


def is_visible(event: Event, viewer: ViewerContext) -> bool:
    """Shared events are visible to their family, private ones to their owner."""
    if event.visibility == Visibility.SHARED:
        return event.family_id == viewer.family_id
    if event.visibility == Visibility.PRIVATE:
        return event.owner_id == viewer.user_id
    return False


def filter_visible(events: Iterable[Event], viewer: ViewerContext) -> list[Event]:
    """Keep the events *viewer* may see, in their original order."""
    return [event for event in events if is_visible(event, viewer)]
