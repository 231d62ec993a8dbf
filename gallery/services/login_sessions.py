"""Server-side login sessions keyed by an opaque cookie value."""

from datetime import timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.logging import get_logger
from gallery.core.viewer import ANONYMOUS, Viewer
from gallery.db.base import utcnow
from gallery.models import LoginSession

logger = get_logger(__name__)


async def open_session(
    db: AsyncSession,
    user_id: int | None,
    is_admin: bool,
    max_age_minutes: int,
) -> LoginSession:
    """Create a session row and return it; its id goes in the cookie."""
    session = LoginSession(
        user_id=user_id,
        is_admin=is_admin,
        expires_at=utcnow() + timedelta(minutes=max_age_minutes),
    )
    db.add(session)
    await db.commit()
    await db.refresh(session)
    logger.info("Session opened", user_id=user_id, is_admin=is_admin)
    return session


async def resolve_viewer(db: AsyncSession, session_id: str | None) -> Viewer:
    """Turn a cookie value into a Viewer. Unknown or expired ids are anonymous."""
    if not session_id:
        return ANONYMOUS

    result = await db.execute(
        select(LoginSession).where(
            LoginSession.id == session_id,
            LoginSession.expires_at > utcnow(),
        )
    )
    session = result.scalar_one_or_none()
    if session is None:
        return ANONYMOUS

    return Viewer(authenticated=True, user_id=session.user_id, is_admin=session.is_admin)


async def close_session(db: AsyncSession, session_id: str | None) -> None:
    if not session_id:
        return
    await db.execute(delete(LoginSession).where(LoginSession.id == session_id))
    await db.commit()


async def purge_expired(db: AsyncSession) -> int:
    """Drop expired session rows. Returns how many were removed."""
    result = await db.execute(delete(LoginSession).where(LoginSession.expires_at <= utcnow()))
    await db.commit()
    return result.rowcount or 0
