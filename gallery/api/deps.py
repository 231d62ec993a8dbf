"""Request dependencies: settings, caller identity and app-scoped services."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.config import Settings
from gallery.core.viewer import Viewer
from gallery.db.session import get_db
from gallery.services import IngestionPipeline, ThumbnailGenerator, VisibilityPolicy
from gallery.services.accounts import AdminCredentials
from gallery.services.login_sessions import resolve_viewer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_id(request: Request) -> str | None:
    return request.cookies.get(get_settings(request).session_cookie_name)


async def get_viewer(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Viewer:
    """Resolve the session cookie once per request."""
    return await resolve_viewer(db, get_session_id(request))


def get_pipeline(request: Request) -> IngestionPipeline:
    return request.app.state.pipeline


def get_thumbnails(request: Request) -> ThumbnailGenerator:
    return request.app.state.thumbnails


def get_policy(request: Request) -> VisibilityPolicy:
    return request.app.state.policy


def get_admin_credentials(request: Request) -> AdminCredentials:
    return request.app.state.admin
