"""Image mutations: edit, delete, like."""

import asyncio
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.errors import InvalidInput, NotFound
from gallery.core.logging import get_logger
from gallery.core.viewer import Viewer
from gallery.models import Comment, Image, Like
from gallery.services.authorization import ensure_can_modify

logger = get_logger(__name__)


def remove_image_files(uploads_dir: Path, thumbs_dir: Path, filename: str) -> None:
    """Delete the original and its thumbnail, whichever exist."""
    (uploads_dir / filename).unlink(missing_ok=True)
    (thumbs_dir / filename).unlink(missing_ok=True)


async def get_image(db: AsyncSession, image_id: int, message: str = "Image not found") -> Image:
    image = await db.get(Image, image_id)
    if image is None:
        raise NotFound(message)
    return image


async def update_image(
    db: AsyncSession,
    image_id: int,
    viewer: Viewer,
    changes: dict[str, str | None],
) -> Image:
    """Apply title/description changes. Only keys present in ``changes`` are touched."""
    image = await get_image(db, image_id)
    ensure_can_modify(viewer, image.user_id, "You do not have permission to edit this image")

    editable = {k: v for k, v in changes.items() if k in ("title", "description")}
    if not editable:
        raise InvalidInput("No fields to update")

    for field, value in editable.items():
        setattr(image, field, value)
    await db.commit()
    logger.info("Image updated", image_id=image_id, fields=sorted(editable))
    return image


async def delete_image(
    db: AsyncSession,
    image_id: int,
    viewer: Viewer,
    uploads_dir: Path,
    thumbs_dir: Path,
) -> None:
    """Delete the row, its likes and comments, then both files."""
    image = await get_image(db, image_id, "Not found")
    ensure_can_modify(viewer, image.user_id, "You do not have permission to delete this image")

    filename = image.filename
    await db.execute(delete(Like).where(Like.image_id == image_id))
    await db.execute(delete(Comment).where(Comment.image_id == image_id))
    await db.delete(image)
    await db.commit()

    await asyncio.to_thread(remove_image_files, uploads_dir, thumbs_dir, filename)
    logger.info("Image deleted", image_id=image_id, filename=filename, by_admin=viewer.is_admin)


async def like_image(db: AsyncSession, image_id: int, user_id: int) -> bool:
    """
    Record a like. Returns False when the user had already liked the image.

    The unique (user_id, image_id) constraint makes this insert-if-absent.
    """
    await get_image(db, image_id)
    db.add(Like(user_id=user_id, image_id=image_id))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        return False
    return True


async def unlike_image(db: AsyncSession, image_id: int, user_id: int) -> None:
    await db.execute(delete(Like).where(Like.user_id == user_id, Like.image_id == image_id))
    await db.commit()


async def all_filenames(db: AsyncSession) -> list[str]:
    result = await db.execute(select(Image.filename))
    return list(result.scalars().all())
