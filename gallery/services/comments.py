"""Comments on images."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.errors import InvalidInput, NotFound
from gallery.core.logging import get_logger
from gallery.core.viewer import Viewer
from gallery.models import Comment, Image, User
from gallery.services.authorization import ensure_can_modify
from gallery.services.images import get_image

logger = get_logger(__name__)

ANONYMOUS_AUTHOR = "Anonymous"


def _comment_columns() -> list[Any]:
    return [
        Comment.id,
        Comment.image_id,
        Comment.text,
        Comment.author_name,
        Comment.user_id,
        Comment.created_at,
        User.email,
    ]


async def list_for_image(db: AsyncSession, image_id: int) -> list[dict[str, Any]]:
    """Comments on one image, oldest first, with the commenter's email."""
    result = await db.execute(
        select(*_comment_columns())
        .outerjoin(User, User.id == Comment.user_id)
        .where(Comment.image_id == image_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    )
    return [dict(row) for row in result.mappings()]


async def list_all(db: AsyncSession) -> list[dict[str, Any]]:
    """Every comment, newest first, for the moderation view."""
    result = await db.execute(
        select(*_comment_columns(), Image.title.label("image_title"))
        .outerjoin(User, User.id == Comment.user_id)
        .outerjoin(Image, Image.id == Comment.image_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return [dict(row) for row in result.mappings()]


async def create_comment(
    db: AsyncSession,
    image_id: int,
    viewer: Viewer,
    text: str | None,
    author_name: str | None,
) -> Comment:
    """
    Post a comment.

    Callers with an account are recorded by user id; everyone else by a
    free-text author name.
    """
    text = (text or "").strip()
    if not text:
        raise InvalidInput("Comment text is required")
    await get_image(db, image_id)

    if viewer.has_account:
        author = None
    else:
        author = (author_name or "").strip() or ANONYMOUS_AUTHOR

    comment = Comment(
        image_id=image_id,
        user_id=viewer.user_id,
        author_name=author,
        text=text,
    )
    db.add(comment)
    await db.commit()
    await db.refresh(comment)
    logger.info("Comment posted", comment_id=comment.id, image_id=image_id, user_id=viewer.user_id)
    return comment


async def delete_comment(db: AsyncSession, comment_id: int, viewer: Viewer) -> None:
    comment = await db.get(Comment, comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    ensure_can_modify(viewer, comment.user_id)

    await db.execute(delete(Comment).where(Comment.id == comment_id))
    await db.commit()
    logger.info("Comment deleted", comment_id=comment_id, by_admin=viewer.is_admin)
