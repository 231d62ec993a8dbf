"""Access policy for files under the upload root."""

import posixpath
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.viewer import Viewer
from gallery.models import Album, Image


class Access(str, Enum):
    """Outcome of a file access check."""

    ALLOW = "allow"
    FORBID = "forbid"
    NOT_FOUND = "not_found"
    BAD_PATH = "bad_path"


@dataclass(frozen=True)
class AccessDecision:
    access: Access
    path: Path | None = None
    reason: str | None = None


def normalize_relative_path(raw: str) -> str | None:
    """
    Lexically normalize a requested path.

    Returns None for anything that is absolute or climbs out of the root.
    No filesystem access happens here.
    """
    candidate = raw.replace("\\", "/")
    if candidate.startswith("/") or "\x00" in candidate:
        return None
    normalized = posixpath.normpath(candidate)
    if normalized in (".", "") or normalized == ".." or normalized.startswith("../"):
        return None
    return normalized


class VisibilityPolicy:
    """
    Decides whether an original or thumbnail may be served.

    Thumbnails are always public. Originals are public unless the image sits
    in an explicitly private album and the caller is anonymous; any logged-in
    caller may see everything.
    """

    def __init__(self, uploads_dir: Path, thumbs_dirname: str = "thumbs") -> None:
        self.uploads_dir = uploads_dir
        self.thumbs_dirname = thumbs_dirname

    async def decide(self, db: AsyncSession, raw_path: str, viewer: Viewer) -> AccessDecision:
        if not raw_path:
            return AccessDecision(Access.BAD_PATH, reason="Missing file path")

        rel_path = normalize_relative_path(raw_path)
        if rel_path is None:
            return AccessDecision(Access.BAD_PATH, reason="Invalid path")

        abs_path = self.uploads_dir / rel_path

        if rel_path.startswith(f"{self.thumbs_dirname}/"):
            if not abs_path.is_file():
                return AccessDecision(Access.NOT_FOUND)
            return AccessDecision(Access.ALLOW, path=abs_path)

        # The base filename is the lookup key
        base_name = posixpath.basename(rel_path)
        result = await db.execute(
            select(Image.id, Image.album_id, Album.is_public)
            .outerjoin(Album, Album.id == Image.album_id)
            .where(Image.filename == base_name)
            .limit(1)
        )
        row = result.first()

        allowed = (
            row is None
            or row.album_id is None
            or row.is_public is not False
            or viewer.authenticated
        )
        if not allowed:
            return AccessDecision(Access.FORBID)

        if not abs_path.is_file():
            return AccessDecision(Access.NOT_FOUND)
        return AccessDecision(Access.ALLOW, path=abs_path)
