"""Day background routes.

Backgrounds belong to the family: any member may set or clear the image
behind a day, and everyone in the family sees the same one.
"""
import base64
import binascii
import logging
from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from family_calendar.core.auth import get_viewer
from family_calendar.core.database import get_session
from family_calendar.models import (
    MAX_BACKGROUND_BYTES,
    DayBackground,
    DayBackgroundCreate,
    DayBackgroundRead,
    ViewerContext,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/day-backgrounds", tags=["day-backgrounds"])


def check_image_data(image_data: str) -> int:
    """Validate a base64 image data URL and return its decoded size, or 400."""
    if not image_data.startswith("data:image/"):
        raise HTTPException(status_code=400, detail="Invalid image data")

    _, comma, payload = image_data.partition(",")
    if not comma:
        raise HTTPException(status_code=400, detail="Malformed data URL")

    try:
        size = len(base64.b64decode(payload, validate=True))
    except binascii.Error:
        raise HTTPException(status_code=400, detail="Invalid image encoding")

    if size > MAX_BACKGROUND_BYTES:
        raise HTTPException(status_code=400, detail="Image exceeds 1.5 MB size limit")
    return size


def _find(session: Session, family_id, day: date) -> DayBackground | None:
    statement = (
        select(DayBackground)
        .where(DayBackground.family_id == family_id)
        .where(DayBackground.date == day)
    )
    return session.exec(statement).first()


@router.get("", response_model=list[DayBackgroundRead])
async def list_backgrounds(
    viewer: ViewerContext = Depends(get_viewer),
    session: Session = Depends(get_session),
):
    """All of the family's day backgrounds, by date."""
    statement = (
        select(DayBackground)
        .where(DayBackground.family_id == viewer.family_id)
        .order_by(DayBackground.date)
    )
    return session.exec(statement).all()


@router.post("", response_model=DayBackgroundRead)
async def set_background(
    body: DayBackgroundCreate,
    viewer: ViewerContext = Depends(get_viewer),
    session: Session = Depends(get_session),
):
    """Set the background for a day, replacing any existing one."""
    size = check_image_data(body.image_data)

    background = _find(session, viewer.family_id, body.date)
    if background:
        background.image_data = body.image_data
        background.created_by = viewer.user_id
        background.updated_at = datetime.now(UTC)
    else:
        background = DayBackground(
            family_id=viewer.family_id,
            date=body.date,
            image_data=body.image_data,
            created_by=viewer.user_id,
        )
    session.add(background)
    session.commit()
    session.refresh(background)
    logger.info(f"Background for {body.date} set by {viewer.user_id} ({size} bytes)")
    return background


@router.delete("/{day}")
async def delete_background(
    day: date,
    viewer: ViewerContext = Depends(get_viewer),
    session: Session = Depends(get_session),
):
    """Clear the background for a day. Clearing a day without one is not an error."""
    background = _find(session, viewer.family_id, day)
    if background:
        session.delete(background)
        session.commit()
        logger.info(f"Background for {day} cleared by {viewer.user_id}")
    return {"success": True}
