# Schemas module

from gallery.schemas.admin import AdminStatsResponse, CountStats, RecentImage
from gallery.schemas.album import AlbumListItem, AlbumResponse, AlbumWrite
from gallery.schemas.auth import (
    LoginRequest,
    MeResponse,
    SignupRequest,
    UserIdRequest,
    UserInfo,
    UserListItem,
    UserStatsResponse,
)
from gallery.schemas.comment import CommentCreate, CommentResponse
from gallery.schemas.image import ImageSummary, ImageUpdate, UploadedImageResponse

__all__ = [
    "AdminStatsResponse",
    "AlbumListItem",
    "AlbumResponse",
    "AlbumWrite",
    "CommentCreate",
    "CommentResponse",
    "CountStats",
    "ImageSummary",
    "ImageUpdate",
    "LoginRequest",
    "MeResponse",
    "RecentImage",
    "SignupRequest",
    "UploadedImageResponse",
    "UserIdRequest",
    "UserInfo",
    "UserListItem",
    "UserStatsResponse",
]
