"""Authentication and account schemas."""

from datetime import datetime

from pydantic import Field

from gallery.schemas.base import ORMModel


class LoginRequest(ORMModel):
    """Either ``email`` or ``username`` identifies the caller."""

    email: str | None = None
    username: str | None = None
    password: str | None = None


class SignupRequest(ORMModel):
    email: str | None = None
    password: str | None = None


class UserInfo(ORMModel):
    id: int | None = None
    email: str | None = None
    admin: bool = False


class MeResponse(ORMModel):
    authenticated: bool
    user: UserInfo | None = None


class UserListItem(ORMModel):
    id: int
    email: str
    created_at: datetime


class UserIdRequest(ORMModel):
    user_id: int | None = Field(default=None, alias="userId")


class UserStatsResponse(ORMModel):
    email: str
    image_count: int = Field(serialization_alias="imageCount")
    likes_count: int = Field(serialization_alias="likesCount")
    comments_count: int = Field(serialization_alias="commentsCount")
