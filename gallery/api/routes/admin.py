"""Admin-only moderation endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_settings, get_thumbnails, get_viewer
from gallery.core.config import Settings
from gallery.core.errors import InvalidInput
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.schemas import AdminStatsResponse, UserIdRequest, UserListItem
from gallery.services import ThumbnailGenerator, accounts, dashboard, images
from gallery.services.authorization import require_admin

router = APIRouter()


def _required_user_id(body: UserIdRequest) -> int:
    if not body.user_id:
        raise InvalidInput("userId required")
    return body.user_id


@router.get("/stats", response_model=AdminStatsResponse)
async def stats(
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_admin(viewer)
    return await dashboard.admin_overview(db)


@router.get("/pending-users")
async def pending_users(
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_admin(viewer, "Admin only")
    users = await accounts.list_pending(db)
    return {"users": [UserListItem.model_validate(user) for user in users]}


@router.post("/approve-user")
async def approve_user(
    body: UserIdRequest,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_admin(viewer, "Admin only")
    await accounts.approve_user(db, _required_user_id(body))
    return {"success": True, "message": "User approved"}


@router.post("/reject-user")
async def reject_user(
    body: UserIdRequest,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Reject a pending signup by deleting the account."""
    require_admin(viewer, "Admin only")
    await accounts.reject_user(
        db, _required_user_id(body), settings.uploads_dir, settings.thumbs_dir
    )
    return {"success": True, "message": "User rejected and deleted"}


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: int,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    require_admin(viewer)
    await accounts.delete_user(db, user_id, settings.uploads_dir, settings.thumbs_dir)
    return {"success": True}


@router.post("/thumbnails/regenerate")
async def regenerate_thumbnails(
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    thumbnails: ThumbnailGenerator = Depends(get_thumbnails),
) -> dict:
    """Generate thumbnails for any stored original that lacks one."""
    require_admin(viewer)
    filenames = await images.all_filenames(db)
    generated = await thumbnails.regenerate_missing(filenames)
    return {"success": True, "generated": generated}
