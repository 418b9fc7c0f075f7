"""Tests for write authorization."""

from datetime import date
from uuid import uuid4

from family_calendar.calendar.authorization import (
    CHILD_PROTECTED_FIELDS,
    can_mutate,
    sanitize_update,
)
from family_calendar.models import Event, Role, ViewerContext, Visibility

FAMILY = uuid4()


def _viewer(role: Role, user_id=None) -> ViewerContext:
    return ViewerContext(user_id=user_id or uuid4(), family_id=FAMILY, role=role)


def _event_owned_by(viewer: ViewerContext) -> Event:
    return Event.build(
        {"title": "Piano lesson", "date": date(2024, 4, 15)},
        owner_id=viewer.user_id,
        family_id=FAMILY,
    )


class TestCanMutate:
    """Only the owner or an admin may edit or delete."""

    def test_owner_can_mutate(self):
        """Test that owners of any role may change their own events."""
        for role in Role:
            owner = _viewer(role)
            assert can_mutate(_event_owned_by(owner), owner) is True

    def test_admin_can_mutate_others_events(self):
        """Test that an admin may change a child's event."""
        event = _event_owned_by(_viewer(Role.CHILD))
        assert can_mutate(event, _viewer(Role.ADMIN)) is True

    def test_adult_cannot_mutate_others_events(self):
        """Test that an adult may not change an admin's event."""
        event = _event_owned_by(_viewer(Role.ADMIN))
        assert can_mutate(event, _viewer(Role.ADULT)) is False

    def test_child_cannot_mutate_others_events(self):
        """Test that a child may not change an adult's event."""
        event = _event_owned_by(_viewer(Role.ADULT))
        assert can_mutate(event, _viewer(Role.CHILD)) is False


class TestSanitizeUpdate:
    """Children may not change visibility or ownership."""

    UPDATES = {
        "title": "Piano recital",
        "visibility": Visibility.PRIVATE,
        "owner_id": uuid4(),
        "family_id": uuid4(),
        "time": "18:00",
    }

    def test_child_loses_protected_fields(self):
        """Test that a child's update keeps only unprotected fields."""
        sanitized = sanitize_update(self.UPDATES, _viewer(Role.CHILD))
        assert sanitized == {"title": "Piano recital", "time": "18:00"}
        for field in CHILD_PROTECTED_FIELDS:
            assert field not in sanitized

    def test_adult_and_admin_updates_pass_through(self):
        """Test that adults and admins keep every field."""
        for role in (Role.ADULT, Role.ADMIN):
            assert sanitize_update(self.UPDATES, _viewer(role)) == self.UPDATES

    def test_returns_new_dict(self):
        """The caller's dict is never modified."""
        original = dict(self.UPDATES)
        for role in Role:
            result = sanitize_update(original, _viewer(role))
            assert result is not original
        assert original == self.UPDATES
