"""Tests for read visibility."""

from datetime import date
from uuid import uuid4

import pytest

from family_calendar.calendar.visibility import filter_visible, is_visible
from family_calendar.models import Event, Role, ViewerContext, Visibility

FAMILY = uuid4()
OTHER_FAMILY = uuid4()
OWNER = uuid4()
SIBLING = uuid4()


def _viewer(user_id, family_id=FAMILY, role=Role.ADULT) -> ViewerContext:
    return ViewerContext(user_id=user_id, family_id=family_id, role=role)


def _event(visibility=Visibility.SHARED, owner_id=OWNER, family_id=FAMILY, title="Event") -> Event:
    return Event.build(
        {"title": title, "date": date(2024, 4, 10), "visibility": visibility},
        owner_id=owner_id,
        family_id=family_id,
    )


class TestSharedEvents:
    """Shared events are visible to every member of the owning family."""

    @pytest.mark.parametrize("role", list(Role))
    def test_visible_to_family_members_of_any_role(self, role):
        """Test that role makes no difference to reading."""
        assert is_visible(_event(), _viewer(SIBLING, role=role)) is True

    def test_visible_to_owner(self):
        """Test that the owner sees the event."""
        assert is_visible(_event(), _viewer(OWNER)) is True

    def test_hidden_from_other_families(self):
        """Even an admin of another family cannot see it."""
        viewer = _viewer(uuid4(), family_id=OTHER_FAMILY, role=Role.ADMIN)
        assert is_visible(_event(), viewer) is False


class TestPrivateEvents:
    """Private events are visible to their owner only."""

    def test_visible_to_owner(self):
        """Test that the owner sees the event."""
        event = _event(Visibility.PRIVATE)
        assert is_visible(event, _viewer(OWNER)) is True

    @pytest.mark.parametrize("role", list(Role))
    def test_hidden_from_family_members_of_any_role(self, role):
        """Test that no other member sees it, admins included."""
        event = _event(Visibility.PRIVATE)
        assert is_visible(event, _viewer(SIBLING, role=role)) is False

    def test_owner_sees_it_whatever_the_family(self):
        """Test that ownership alone decides."""
        event = _event(Visibility.PRIVATE)
        assert is_visible(event, _viewer(OWNER, family_id=OTHER_FAMILY)) is True


class TestUnknownVisibility:
    """Tests for values outside shared and private."""

    def test_unknown_value_is_hidden(self):
        """Test that an unrecognised visibility hides the event."""
        event = _event()
        event.visibility = "family-only"
        assert is_visible(event, _viewer(OWNER)) is False


class TestFilterVisible:
    """Tests for filtering a list of events."""

    def test_keeps_order_and_drops_hidden(self):
        """Test that filtering keeps the input order."""
        first = _event(title="first")
        hidden = _event(Visibility.PRIVATE, owner_id=SIBLING, title="hidden")
        mine = _event(Visibility.PRIVATE, owner_id=OWNER, title="mine")
        elsewhere = _event(family_id=OTHER_FAMILY, title="elsewhere")
        last = _event(title="last")

        visible = filter_visible([first, hidden, mine, elsewhere, last], _viewer(OWNER))

        assert [e.title for e in visible] == ["first", "mine", "last"]

    def test_empty(self):
        """Test filtering nothing."""
        assert filter_visible([], _viewer(OWNER)) == []
