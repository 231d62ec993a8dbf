"""Capture-date extraction from embedded EXIF metadata."""

import io
from datetime import date, datetime

from PIL import ExifTags, Image

from gallery.core.logging import get_logger
from gallery.core.outcome import Outcome

logger = get_logger(__name__)

# Priority order: original capture, digitization ("CreateDate"), generic modification
CAPTURE_TAGS = (
    ExifTags.Base.DateTimeOriginal,
    ExifTags.Base.DateTimeDigitized,
    ExifTags.Base.DateTime,
)

EXIF_DATE_FORMATS = (
    "%Y:%m:%d %H:%M:%S",
    "%Y:%m:%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def parse_exif_date(raw: object) -> date | None:
    """Parse an EXIF date string. Returns None for anything unparsable."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    if not isinstance(raw, str):
        return None

    value = raw.strip().strip("\x00").strip()
    if not value:
        return None

    # Drop sub-second and timezone suffixes ("2021:05:01 10:00:00.123+02:00")
    candidates = [value, value[:19], value[:10]]
    for candidate in candidates:
        for fmt in EXIF_DATE_FORMATS:
            try:
                return datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
    return None


def _read_tags(data: bytes) -> dict[int, object]:
    with Image.open(io.BytesIO(data)) as img:
        exif = img.getexif()
        tags: dict[int, object] = dict(exif.items())
        # DateTimeOriginal and DateTimeDigitized live in the Exif sub-IFD
        tags.update(exif.get_ifd(ExifTags.IFD.Exif).items())
    return tags


def extract_capture_date(data: bytes) -> Outcome[date]:
    """
    Recover the capture date of an image from its embedded metadata.

    Tags are tried in priority order and the first present, parsable value
    wins. Never raises: missing or broken metadata yields ``unavailable``.
    """
    try:
        tags = _read_tags(data)
    except Exception as e:
        logger.warning("EXIF parsing failed", error=str(e))
        return Outcome.unavailable(f"unreadable image: {e}")

    for tag in CAPTURE_TAGS:
        parsed = parse_exif_date(tags.get(tag))
        if parsed is not None:
            return Outcome.success(parsed)

    return Outcome.unavailable("no capture date tag")
