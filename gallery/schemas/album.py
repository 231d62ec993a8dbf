"""Album schemas."""

from datetime import datetime

from gallery.schemas.base import ORMModel


class AlbumWrite(ORMModel):
    """Album create/update payload."""

    name: str | None = None
    is_public: bool | None = None


class AlbumResponse(ORMModel):
    id: int
    name: str
    is_public: bool


class AlbumListItem(ORMModel):
    """Album with the number of images it holds."""

    id: int
    name: str
    is_public: bool
    created_at: datetime
    image_count: int
