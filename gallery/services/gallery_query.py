"""Gallery listing query: filtering, sorting and per-image aggregates."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.viewer import Viewer
from gallery.models import Album, Comment, Image, Like


class SortKey(str, Enum):
    CREATED_AT = "created_at"
    DATE_TAKEN = "date_taken"
    TITLE = "title"
    LIKE_COUNT = "like_count"


@dataclass(frozen=True)
class GalleryQuery:
    """Listing parameters, already normalized."""

    album_id: int | None = None
    sort: SortKey = SortKey.CREATED_AT
    descending: bool = True

    @classmethod
    def from_params(
        cls,
        album_id: int | str | None = None,
        sort: str | None = None,
        order: str | None = None,
    ) -> "GalleryQuery":
        """
        Build a query from raw request parameters.

        An empty, non-numeric or zero album_id means no filter. Unknown sort
        keys fall back to created_at; anything but "asc" is descending.
        """
        try:
            sort_key = SortKey(sort or SortKey.CREATED_AT.value)
        except ValueError:
            sort_key = SortKey.CREATED_AT
        descending = (order or "desc").lower() != "asc"
        return cls(album_id=_parse_album_filter(album_id), sort=sort_key, descending=descending)


def _parse_album_filter(raw: int | str | None) -> int | None:
    if raw is None:
        return None
    try:
        album_id = int(str(raw).strip())
    except ValueError:
        return None
    return album_id or None


def _directed(column: Any, descending: bool) -> Any:
    return column.desc() if descending else column.asc()


def build_gallery_statement(query: GalleryQuery, viewer: Viewer) -> Select:
    """
    Build the listing SELECT.

    Like counts come from a grouped outer join, comment counts from a
    correlated subquery, and the caller's like state from a conditional
    aggregate that is only added for callers with an account.
    """
    like_count = func.count(Like.id).label("like_count")
    comment_count = (
        select(func.count(Comment.id))
        .where(Comment.image_id == Image.id)
        .correlate(Image)
        .scalar_subquery()
        .label("comment_count")
    )
    album_public = func.max(Album.is_public).label("album_public")

    columns: list[Any] = [
        Image.id,
        Image.album_id,
        Image.user_id,
        Image.filename,
        Image.title,
        Image.description,
        Image.date_taken,
        Image.created_at,
        like_count,
        comment_count,
        album_public,
    ]
    if viewer.has_account:
        columns.append(
            func.max(case((Like.user_id == viewer.user_id, 1), else_=0)).label("user_liked")
        )

    stmt = (
        select(*columns)
        .select_from(Image)
        .outerjoin(Like, Like.image_id == Image.id)
        .outerjoin(Album, Album.id == Image.album_id)
    )
    if query.album_id is not None:
        stmt = stmt.where(Image.album_id == query.album_id)
    stmt = stmt.group_by(Image.id)

    desc = query.descending
    if query.sort in (SortKey.DATE_TAKEN, SortKey.TITLE):
        column = Image.date_taken if query.sort is SortKey.DATE_TAKEN else Image.title
        # Titles compare case-insensitively
        key = func.lower(Image.title) if query.sort is SortKey.TITLE else column
        # Nulls last in both directions: "IS NULL" is 0 for values, 1 for nulls
        stmt = stmt.order_by(
            column.is_(None),
            _directed(key, desc),
            _directed(Image.created_at, desc),
        )
    elif query.sort is SortKey.LIKE_COUNT:
        stmt = stmt.order_by(_directed(like_count, desc), _directed(Image.created_at, desc))
    else:
        stmt = stmt.order_by(_directed(Image.created_at, desc), Image.id.desc())
    return stmt


async def list_gallery(
    db: AsyncSession,
    query: GalleryQuery,
    viewer: Viewer,
) -> list[dict[str, Any]]:
    """Run the listing and return one summary mapping per image."""
    result = await db.execute(build_gallery_statement(query, viewer))
    summaries = []
    for row in result.mappings():
        summary = dict(row)
        if summary["album_public"] is not None:
            summary["album_public"] = bool(summary["album_public"])
        if "user_liked" in summary:
            summary["user_liked"] = bool(summary["user_liked"])
        summaries.append(summary)
    return summaries
