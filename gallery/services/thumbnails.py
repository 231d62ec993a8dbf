"""Thumbnail generation for uploaded photos."""

import asyncio
import io
from collections.abc import Iterable
from pathlib import Path

from PIL import Image, ImageOps

from gallery.core.logging import get_logger
from gallery.core.outcome import Outcome

logger = get_logger(__name__)


def render_thumbnail(
    image_data: bytes,
    size: tuple[int, int],
    quality: int = 75,
) -> bytes:
    """Rotate upright, cover-fit into ``size`` and encode as JPEG."""
    with Image.open(io.BytesIO(image_data)) as src:
        img = ImageOps.exif_transpose(src)

        # JPEG only takes RGB or greyscale
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")

        # Crop to fill the box, no letterboxing
        img = ImageOps.fit(img, size, Image.Resampling.LANCZOS)

        output = io.BytesIO()
        img.save(output, format="JPEG", quality=quality, optimize=True)
        return output.getvalue()


class ThumbnailGenerator:
    """Writes thumbnails under the side-car directory, best-effort."""

    def __init__(
        self,
        uploads_dir: Path,
        thumbs_dir: Path,
        size: tuple[int, int] = (360, 240),
        quality: int = 75,
    ) -> None:
        self.uploads_dir = uploads_dir
        self.thumbs_dir = thumbs_dir
        self.size = size
        self.quality = quality

    def thumbnail_path(self, filename: str) -> Path:
        return self.thumbs_dir / filename

    def _generate_sync(self, filename: str) -> Path:
        source = self.uploads_dir / filename
        thumb = render_thumbnail(source.read_bytes(), self.size, self.quality)
        self.thumbs_dir.mkdir(parents=True, exist_ok=True)
        target = self.thumbnail_path(filename)
        target.write_bytes(thumb)
        return target

    async def generate(self, filename: str) -> Outcome[Path]:
        """
        Generate the thumbnail for a stored original.

        Failure is logged and reported as ``unavailable``; the original stays
        displayable without a thumbnail.
        """
        try:
            # Pillow work is blocking, keep it off the event loop
            path = await asyncio.to_thread(self._generate_sync, filename)
        except Exception as e:
            logger.warning("Thumbnail generation failed", filename=filename, error=str(e))
            return Outcome.unavailable(str(e))

        logger.debug("Thumbnail generated", filename=filename, path=str(path))
        return Outcome.success(path)

    async def regenerate_missing(self, filenames: Iterable[str]) -> int:
        """
        Backfill thumbnails for originals that lack one.

        Skips missing originals and existing thumbnails, so repeated runs are
        no-ops. Returns the number of thumbnails written.
        """
        generated = 0
        for filename in filenames:
            original = self.uploads_dir / filename
            if not original.is_file() or self.thumbnail_path(filename).exists():
                continue
            outcome = await self.generate(filename)
            if outcome.ok:
                generated += 1

        logger.info("Thumbnail backfill finished", generated=generated)
        return generated
