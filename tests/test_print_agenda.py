"""Tests for the print_agenda script."""

import argparse
from datetime import date
from uuid import uuid4

import pytest

from family_calendar.models import User, Visibility
from scripts import print_agenda


@pytest.fixture(autouse=True)
def use_test_engine(monkeypatch, engine):
    monkeypatch.setattr(print_agenda, "engine", engine)


class TestDaysArgument:
    """Tests for the --days argument type."""

    def test_accepts_zero_and_positive(self):
        """Test that zero and positive day counts are accepted."""
        assert print_agenda._non_negative_int("0") == 0
        assert print_agenda._non_negative_int("30") == 30

    def test_rejects_negative(self):
        """Test that a negative day count is an argument error."""
        with pytest.raises(argparse.ArgumentTypeError):
            print_agenda._non_negative_int("-1")


class TestMain:
    """Tests for printing an agenda."""

    def test_prints_visible_events(self, capsys, event_factory, admin: User, adult: User):
        """Test that the agenda shows the user's visible events only."""
        event_factory(admin, title="Family dinner")
        event_factory(admin, title="Dentist", visibility=Visibility.PRIVATE)

        print_agenda.main(adult.id, date(2024, 4, 1), 0)

        output = capsys.readouterr().out
        assert "Agenda for Blair (adult), 2024-04-01 to 2024-04-12" in output
        assert "Family dinner" in output
        assert "Dentist" not in output
        assert "1 occurrence(s)" in output

    def test_zero_days_without_events(self, capsys, admin: User):
        """Test that a one-day agenda with nothing in it still prints."""
        print_agenda.main(admin.id, date(2024, 4, 1), 0, all_days=True)

        output = capsys.readouterr().out
        assert "2024-04-01 to 2024-04-01" in output
        assert "(nothing)" in output

    def test_unknown_user(self, capsys, admin: User):
        """Test that an unknown user exits with an error."""
        with pytest.raises(SystemExit):
            print_agenda.main(uuid4(), date(2024, 4, 1), 0)
        assert "no user with id" in capsys.readouterr().out
