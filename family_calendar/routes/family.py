"""Family member routes.

Any member may list the family. Changing roles and removing members is
reserved for admins, who cannot do either to themselves.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from family_calendar.core.auth import get_viewer, require_role
from family_calendar.core.database import get_session
from family_calendar.models import (
    DayBackground,
    Event,
    Role,
    RoleUpdate,
    User,
    UserRead,
    ViewerContext,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/family", tags=["family"])

require_admin = require_role(Role.ADMIN)


def _get_member(session: Session, user_id: UUID, viewer: ViewerContext) -> User:
    member = session.get(User, user_id)
    if not member or member.family_id != viewer.family_id:
        raise HTTPException(status_code=404, detail="User not found")
    return member


@router.get("/members", response_model=list[UserRead])
async def list_members(
    viewer: ViewerContext = Depends(get_viewer),
    session: Session = Depends(get_session),
):
    """List the viewer's family, oldest member first."""
    statement = (
        select(User).where(User.family_id == viewer.family_id).order_by(User.created_at)
    )
    return session.exec(statement).all()


@router.put("/members/{user_id}/role", response_model=UserRead)
async def update_member_role(
    user_id: UUID,
    body: RoleUpdate,
    viewer: ViewerContext = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """
    Change a member's role (admin only).

    Returns 400 for an unknown role or when admins target themselves, and
    404 when the user is not in the admin's family.
    """
    try:
        role = Role(body.role)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid role")

    member = _get_member(session, user_id, viewer)
    if member.id == viewer.user_id:
        raise HTTPException(status_code=400, detail="Cannot change your own role")

    member.role = role
    session.add(member)
    session.commit()
    session.refresh(member)
    logger.info(f"User {viewer.user_id} set role of {member.id} to {role.value}")
    return member


@router.delete("/members/{user_id}")
async def remove_member(
    user_id: UUID,
    viewer: ViewerContext = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """
    Remove a member from the family (admin only).

    The member's events go with them. Day backgrounds they set stay with
    the family.
    """
    member = _get_member(session, user_id, viewer)
    if member.id == viewer.user_id:
        raise HTTPException(status_code=400, detail="Cannot remove yourself")

    events = session.exec(select(Event).where(Event.owner_id == member.id)).all()
    for event in events:
        session.delete(event)
    backgrounds = session.exec(
        select(DayBackground).where(DayBackground.created_by == member.id)
    ).all()
    for background in backgrounds:
        background.created_by = None
        session.add(background)
    session.flush()

    session.delete(member)
    session.commit()
    logger.info(f"User {viewer.user_id} removed {user_id} and {len(events)} event(s)")
    return {"message": "Member removed", "events_removed": len(events)}
