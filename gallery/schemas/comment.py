"""Comment schemas."""

from datetime import datetime

from gallery.schemas.base import ORMModel


class CommentCreate(ORMModel):
    text: str | None = None
    author_name: str | None = None


class CommentResponse(ORMModel):
    """A comment, with the commenter's email when posted by a user."""

    id: int
    image_id: int
    text: str
    author_name: str | None
    user_id: int | None
    created_at: datetime
    email: str | None = None
    image_title: str | None = None
