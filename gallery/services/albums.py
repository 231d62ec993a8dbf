"""Albums."""

from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.errors import InvalidInput, NotFound
from gallery.core.logging import get_logger
from gallery.models import Album, Image

logger = get_logger(__name__)


def _require_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidInput("Album name is required")
    return name


async def list_albums(db: AsyncSession) -> list[dict[str, Any]]:
    """All albums, newest first, each with its image count."""
    result = await db.execute(
        select(
            Album.id,
            Album.name,
            Album.is_public,
            Album.created_at,
            func.count(Image.id).label("image_count"),
        )
        .outerjoin(Image, Image.album_id == Album.id)
        .group_by(Album.id, Album.name, Album.is_public, Album.created_at)
        .order_by(Album.created_at.desc(), Album.id.desc())
    )
    return [dict(row) for row in result.mappings()]


async def create_album(db: AsyncSession, name: str | None, is_public: bool | None) -> Album:
    """Create an album. Albums are public unless stated otherwise."""
    album = Album(
        name=_require_name(name),
        is_public=True if is_public is None else is_public,
    )
    db.add(album)
    await db.commit()
    await db.refresh(album)
    logger.info("Album created", album_id=album.id, is_public=album.is_public)
    return album


async def update_album(
    db: AsyncSession,
    album_id: int,
    name: str | None,
    is_public: bool | None,
) -> Album:
    name = _require_name(name)
    album = await db.get(Album, album_id)
    if album is None:
        raise NotFound("Album not found")

    album.name = name
    if is_public is not None:
        album.is_public = is_public
    await db.commit()
    logger.info("Album updated", album_id=album_id, is_public=album.is_public)
    return album


async def delete_album(db: AsyncSession, album_id: int) -> None:
    """Delete an album. Its images survive as orphans."""
    album = await db.get(Album, album_id)
    if album is None:
        raise NotFound("Album not found")

    await db.execute(update(Image).where(Image.album_id == album_id).values(album_id=None))
    await db.delete(album)
    await db.commit()
    logger.info("Album deleted", album_id=album_id)
