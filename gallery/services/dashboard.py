"""Admin dashboard aggregates."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.models import Album, Image, Like, User

RECENT_IMAGES_LIMIT = 5


async def admin_overview(db: AsyncSession) -> dict[str, Any]:
    """Table counts, the latest uploads and every user."""
    stats = {
        "users": await db.scalar(select(func.count(User.id))) or 0,
        "images": await db.scalar(select(func.count(Image.id))) or 0,
        "albums": await db.scalar(select(func.count(Album.id))) or 0,
        "likes": await db.scalar(select(func.count(Like.id))) or 0,
    }

    recent = await db.execute(
        select(Image.id, Image.filename, Image.title, Image.created_at)
        .order_by(Image.created_at.desc(), Image.id.desc())
        .limit(RECENT_IMAGES_LIMIT)
    )
    users = await db.execute(
        select(User.id, User.email, User.created_at).order_by(User.created_at.desc())
    )

    return {
        "stats": stats,
        "recent_images": [dict(row) for row in recent.mappings()],
        "users": [dict(row) for row in users.mappings()],
    }
