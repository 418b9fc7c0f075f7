#!/usr/bin/env python3
"""
Print a family member's rolling agenda from the configured database.

Shows exactly what the list view would show that user: shared family events
plus their own private events, with yearly events expanded.

Usage:
    python scripts/print_agenda.py USER_ID [--start YYYY-MM-DD] [--days N] [--all-days]

Options:
    --start       First day of the agenda (default: today)
    --days        Minimum number of days to cover (default: LIST_HORIZON_DAYS)
    --all-days    Also print days without events
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse
from datetime import date
from uuid import UUID

from sqlmodel import Session

from family_calendar.calendar.materializer import list_view
from family_calendar.calendar.store import EventStore
from family_calendar.core.config import settings
from family_calendar.core.database import engine
from family_calendar.models import User, ViewerContext


def _non_negative_int(value: str) -> int:
    days = int(value)
    if days < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return days


def main(user_id: UUID, start: date, min_days: int, all_days: bool = False):
    """Print the agenda for *user_id* starting at *start*."""
    with Session(engine) as session:
        user = session.get(User, user_id)
        if not user:
            print(f"Error: no user with id {user_id}")
            sys.exit(1)
        if user.family_id is None:
            print(f"Error: {user.name} does not belong to a family")
            sys.exit(1)

        viewer = ViewerContext.for_user(user)
        events = EventStore(session).list_visible_candidates(viewer.family_id, viewer.user_id)
        agenda = list_view(
            events, start, viewer, min_days=min_days, max_days=settings.max_range_days
        )

    if not agenda:
        print(f"Nothing to show for {user.name}")
        return

    print(f"Agenda for {user.name} ({user.role.value}), {agenda[0].date} to {agenda[-1].date}\n")

    shown = 0
    for day in agenda:
        if not day.occurrences and not all_days:
            continue
        print(day.date.strftime("%a %Y-%m-%d"))
        if not day.occurrences:
            print("  (nothing)")
        for occurrence in day.occurrences:
            when = occurrence.time or "all day"
            marker = " (repeats)" if occurrence.is_recurring_instance else ""
            private = " [private]" if occurrence.visibility.value == "private" else ""
            print(f"  {when:>7}  {occurrence.emoji} {occurrence.title}{private}{marker}".rstrip())
            shown += 1

    print(f"\n{shown} occurrence(s)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print a family member's agenda")
    parser.add_argument("user_id", type=UUID)
    parser.add_argument("--start", type=date.fromisoformat, default=date.today())
    parser.add_argument("--days", type=_non_negative_int, default=settings.list_horizon_days)
    parser.add_argument("--all-days", action="store_true")
    args = parser.parse_args()
    main(args.user_id, args.start, args.days, all_days=args.all_days)
