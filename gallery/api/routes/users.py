"""Endpoints for the logged-in user's own account."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_settings, get_viewer
from gallery.core.config import Settings
from gallery.core.errors import InvalidInput
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.schemas import UserStatsResponse
from gallery.services import accounts
from gallery.services.authorization import require_authenticated

router = APIRouter()


@router.get("/stats", response_model=UserStatsResponse)
async def user_stats(
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_authenticated(viewer)
    if viewer.user_id is None:
        return {"email": "", "image_count": 0, "likes_count": 0, "comments_count": 0}
    return await accounts.user_stats(db, viewer.user_id)


@router.delete("/me")
async def delete_me(
    response: Response,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Delete the caller's account and everything it owns."""
    require_authenticated(viewer)
    if viewer.is_admin or viewer.user_id is None:
        raise InvalidInput("Admin accounts cannot be deleted this way")

    # Also drops every login session of this user, including the current one
    await accounts.delete_user(db, viewer.user_id, settings.uploads_dir, settings.thumbs_dir)
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True}
