"""Image schemas."""

from datetime import date, datetime

from gallery.schemas.base import ORMModel


class UploadedImageResponse(ORMModel):
    """Public fields of a freshly ingested image."""

    id: int
    filename: str
    title: str | None = None
    description: str | None = None
    album_id: int | None = None
    date_taken: date | None = None


class ImageSummary(ORMModel):
    """One gallery entry with its aggregates."""

    id: int
    album_id: int | None
    user_id: int | None
    filename: str
    title: str | None
    description: str | None
    date_taken: date | None
    created_at: datetime
    like_count: int
    comment_count: int
    album_public: bool | None = None
    user_liked: bool | None = None


class ImageUpdate(ORMModel):
    """Editable image fields. Absent fields are left untouched."""

    title: str | None = None
    description: str | None = None
