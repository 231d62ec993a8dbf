"""Admin dashboard schemas."""

from datetime import datetime

from pydantic import Field

from gallery.schemas.auth import UserListItem
from gallery.schemas.base import ORMModel


class CountStats(ORMModel):
    users: int
    images: int
    albums: int
    likes: int


class RecentImage(ORMModel):
    id: int
    filename: str
    title: str | None
    created_at: datetime


class AdminStatsResponse(ORMModel):
    stats: CountStats
    recent_images: list[RecentImage] = Field(serialization_alias="recentImages")
    users: list[UserListItem]
