"""Domain exceptions rendered as JSON error bodies."""

from fastapi import status


class GalleryError(Exception):
    """Base exception for request-level failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(GalleryError):
    """Request failed validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotAuthenticated(GalleryError):
    """No session, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(GalleryError):
    """Caller is authenticated but not allowed."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(GalleryError):
    """Row or file does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class Conflict(GalleryError):
    """Request conflicts with stored state."""

    status_code = status.HTTP_409_CONFLICT
