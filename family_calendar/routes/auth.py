"""Authentication status routes."""
from fastapi import APIRouter, Depends

from family_calendar.core.auth import get_viewer
from family_calendar.models import ViewerContext

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=ViewerContext)
async def current_viewer(viewer: ViewerContext = Depends(get_viewer)):
    """
    Return the viewer context for the signed-in user.

    Returns 401 when the request carries no known user.
    """
    return viewer
