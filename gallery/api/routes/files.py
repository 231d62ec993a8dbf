"""Gated file serving under /uploads."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_policy, get_viewer
from gallery.core.errors import InvalidInput, NotFound, PermissionDenied
from gallery.core.logging import get_logger
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.services import Access, VisibilityPolicy

logger = get_logger(__name__)
router = APIRouter()


@router.get("/uploads/{file_path:path}")
async def serve_upload(
    file_path: str,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
    policy: VisibilityPolicy = Depends(get_policy),
) -> FileResponse:
    """
    Serve an original or a thumbnail.

    Thumbnails are public. Originals in private albums need a login.
    """
    decision = await policy.decide(db, file_path, viewer)

    if decision.access is Access.BAD_PATH:
        logger.warning("Rejected upload path", path=file_path, reason=decision.reason)
        raise InvalidInput(decision.reason or "Invalid path")
    if decision.access is Access.FORBID:
        raise PermissionDenied("Forbidden")
    if decision.access is Access.NOT_FOUND or decision.path is None:
        raise NotFound("Not found")

    return FileResponse(decision.path)
