"""Image ingestion: store the upload, derive metadata, record it."""

import asyncio
import re
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path, PureWindowsPath

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.errors import InvalidInput, NotAuthenticated, NotFound
from gallery.core.logging import get_logger
from gallery.core.viewer import Viewer
from gallery.models import Album, Image
from gallery.services.metadata import extract_capture_date
from gallery.services.thumbnails import ThumbnailGenerator

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_SAFE_EXT = re.compile(r"\.[A-Za-z0-9]{1,10}")


@dataclass(frozen=True)
class UploadFields:
    """Optional form fields sent alongside the file, as raw strings."""

    title: str | None = None
    description: str | None = None
    album_id: str | None = None
    date_taken: str | None = None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_album_id(raw: str | None) -> int | None:
    raw = _blank_to_none(raw)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput("album_id must be an integer") from None


def parse_date_taken(raw: str | None) -> date | None:
    raw = _blank_to_none(raw)
    if raw is None:
        return None
    try:
        # Accept full timestamps, keep the calendar date
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise InvalidInput("date_taken must be a YYYY-MM-DD date") from None


def make_upload_filename(original_name: str, timestamp_ms: int) -> str:
    """
    Build a path-safe ``<stem>_<timestamp><ext>`` name.

    Stem characters outside ``[A-Za-z0-9_-]`` become underscores and an
    unusual extension is dropped.
    """
    # Browsers on Windows may send full paths
    name = PureWindowsPath(original_name or "").name
    stem, dot, ext = name.rpartition(".")
    if not dot:
        stem, ext = name, ""
    else:
        ext = f".{ext}"
    if not _SAFE_EXT.fullmatch(ext):
        ext = ""
    stem = _UNSAFE_CHARS.sub("_", stem) or "image"
    return f"{stem}_{timestamp_ms}{ext}"


class IngestionPipeline:
    """Accepts one upload and produces one durable Image row."""

    def __init__(
        self,
        uploads_dir: Path,
        thumbnails: ThumbnailGenerator,
        allow_anonymous: bool = True,
    ) -> None:
        self.uploads_dir = uploads_dir
        self.thumbnails = thumbnails
        self.allow_anonymous = allow_anonymous

    def _store_original_sync(self, original_name: str, data: bytes) -> str:
        """Write the bytes under a fresh name, never overwriting an existing file."""
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        timestamp_ms = int(time.time() * 1000)
        while True:
            filename = make_upload_filename(original_name, timestamp_ms)
            try:
                with open(self.uploads_dir / filename, "xb") as f:
                    f.write(data)
                return filename
            except FileExistsError:
                timestamp_ms += 1

    async def ingest(
        self,
        db: AsyncSession,
        upload: UploadFile | None,
        fields: UploadFields,
        viewer: Viewer,
    ) -> Image:
        """
        Run the ingestion steps in order.

        1. Reject a missing file.
        2. Persist the original under a generated unique name.
        3. Extract the capture date unless one was supplied.
        4. Generate the thumbnail (best-effort).
        5. Insert the Image row.
        """
        if not self.allow_anonymous and not viewer.authenticated:
            raise NotAuthenticated("Login required to upload")

        if upload is None or not upload.filename:
            raise InvalidInput("No image file uploaded")

        album_id = parse_album_id(fields.album_id)
        date_taken = parse_date_taken(fields.date_taken)

        if album_id is not None and await db.get(Album, album_id) is None:
            raise NotFound("Album not found")

        data = await upload.read()
        filename = await asyncio.to_thread(self._store_original_sync, upload.filename, data)

        if date_taken is None:
            extracted = await asyncio.to_thread(extract_capture_date, data)
            if extracted.ok:
                date_taken = extracted.value
            else:
                logger.debug("No capture date", filename=filename, reason=extracted.reason)

        thumb = await self.thumbnails.generate(filename)

        image = Image(
            album_id=album_id,
            user_id=viewer.user_id,
            filename=filename,
            title=_blank_to_none(fields.title),
            description=_blank_to_none(fields.description),
            date_taken=date_taken,
        )
        db.add(image)
        await db.commit()
        await db.refresh(image)

        logger.info(
            "Image uploaded",
            image_id=image.id,
            filename=filename,
            size=len(data),
            album_id=album_id,
            user_id=viewer.user_id,
            thumbnail=thumb.ok,
        )
        return image
