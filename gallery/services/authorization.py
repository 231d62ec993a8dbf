"""Role and ownership checks shared by the mutation endpoints."""

from gallery.core.errors import NotAuthenticated, PermissionDenied
from gallery.core.viewer import Viewer


def require_authenticated(viewer: Viewer) -> None:
    if not viewer.authenticated:
        raise NotAuthenticated("Unauthorized")


def require_admin(viewer: Viewer, message: str = "Admin access required") -> None:
    if not (viewer.authenticated and viewer.is_admin):
        raise PermissionDenied(message)


def require_account(viewer: Viewer, message: str = "Must be logged in") -> int:
    """Require a caller backed by a users row. Returns its id."""
    if not viewer.has_account:
        raise NotAuthenticated(message)
    return viewer.user_id  # type: ignore[return-value]


def can_modify(viewer: Viewer, owner_id: int | None) -> bool:
    """
    Ownership rule: admin, or the recorded owner.

    Resources with no owner (anonymous uploads and comments) are admin-only.
    """
    if not viewer.authenticated:
        return False
    if viewer.is_admin:
        return True
    return owner_id is not None and viewer.user_id == owner_id


def ensure_can_modify(viewer: Viewer, owner_id: int | None, message: str = "Forbidden") -> None:
    if not can_modify(viewer, owner_id):
        raise PermissionDenied(message)
