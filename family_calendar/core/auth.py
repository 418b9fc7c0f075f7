"""Viewer context resolution for incoming requests.

Sign-in and sessions live in the upstream auth layer, which forwards the
signed-in user's id in ``settings.viewer_header``. This module only maps
that id to a ViewerContext.
"""
import logging
from uuid import UUID

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from family_calendar.core.config import settings
from family_calendar.core.database import get_session
from family_calendar.models import Role, User, ViewerContext

logger = logging.getLogger(__name__)


def get_viewer(request: Request, session: Session = Depends(get_session)) -> ViewerContext:
    """Dependency returning the current viewer, or 401."""
    raw_user_id = request.headers.get(settings.viewer_header)
    if not raw_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        user_id = UUID(raw_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = session.get(User, user_id)
    if not user or user.family_id is None:
        logger.warning(f"Rejected request for unknown or family-less user {user_id}")
        raise HTTPException(status_code=401, detail="Authentication required")

    return ViewerContext.for_user(user)


def require_role(*roles: Role):
    """Dependency factory: the current viewer, or 403 unless their role is in *roles*."""

    def dependency(viewer: ViewerContext = Depends(get_viewer)) -> ViewerContext:
        if viewer.role not in roles:
            allowed = ", ".join(role.value for role in roles)
            logger.warning(f"User {viewer.user_id} ({viewer.role.value}) denied: needs {allowed}")
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return viewer

    return dependency
