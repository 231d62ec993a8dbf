"""Album endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_viewer
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.schemas import AlbumListItem, AlbumResponse, AlbumWrite
from gallery.services import albums
from gallery.services.authorization import require_admin, require_authenticated

router = APIRouter()


@router.get("", response_model=list[AlbumListItem])
async def list_albums(db: AsyncSession = Depends(get_db)) -> list[dict]:
    """List albums with their image counts, newest first."""
    return await albums.list_albums(db)


@router.post("", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
async def create_album(
    body: AlbumWrite,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> AlbumResponse:
    require_authenticated(viewer)
    album = await albums.create_album(db, body.name, body.is_public)
    return AlbumResponse.model_validate(album)


@router.put("/{album_id}")
async def update_album(
    album_id: int,
    body: AlbumWrite,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    require_authenticated(viewer)
    require_admin(viewer, "Admin only")
    await albums.update_album(db, album_id, body.name, body.is_public)
    return {"message": "Album updated successfully"}


@router.delete("/{album_id}")
async def delete_album(
    album_id: int,
    viewer: Viewer = Depends(get_viewer),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete an album; its images become orphans."""
    require_authenticated(viewer)
    require_admin(viewer, "Admin only")
    await albums.delete_album(db, album_id)
    return {"message": "Album deleted successfully"}
