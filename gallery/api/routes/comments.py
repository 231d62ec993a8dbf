"""Comment moderation endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_viewer
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.schemas import CommentResponse
from gallery.services import comments
from gallery.services.authorization import require_admin, require_authenticated

router = APIRouter()


@router.get("/all")
async def list_all_comments(
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_authenticated(viewer)
    require_admin(viewer, "Admin only")
    rows = await comments.list_all(db)
    return {"comments": [CommentResponse.model_validate(row) for row in rows]}


@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: int,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a comment. Allowed for its author and for admin."""
    require_authenticated(viewer)
    await comments.delete_comment(db, comment_id, viewer)
    return {"success": True}
