from family_calendar.models.background import (
    MAX_BACKGROUND_BYTES,
    DayBackground,
    DayBackgroundCreate,
    DayBackgroundRead,
)
from family_calendar.models.event import (
    DayAgenda,
    Event,
    EventCreate,
    EventRead,
    EventUpdate,
    OccurrenceInstance,
    RecurrenceType,
    Visibility,
    normalize_recurrence,
)
from family_calendar.models.family import Family
from family_calendar.models.user import Role, RoleUpdate, User, UserRead
from family_calendar.models.viewer import ViewerContext

__all__ = [
    "Event",
    "EventCreate",
    "EventUpdate",
    "EventRead",
    "OccurrenceInstance",
    "DayAgenda",
    "Visibility",
    "RecurrenceType",
    "normalize_recurrence",
    "Family",
    "User",
    "UserRead",
    "RoleUpdate",
    "DayBackground",
    "DayBackgroundCreate",
    "DayBackgroundRead",
    "MAX_BACKGROUND_BYTES",
    "Role",
    "ViewerContext",
]
