"""Accounts: signup, login, approval and deletion."""

import asyncio
import re
import secrets
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from gallery.core.errors import (
    Conflict,
    InvalidInput,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
)
from gallery.core.logging import get_logger
from gallery.models import Comment, Image, Like, LoginSession, User
from gallery.services.images import remove_image_files

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class AdminCredentials:
    """The configured superuser, which has no row in the users table."""

    username: str
    password: str

    def matches(self, identifier: str, password: str) -> bool:
        # Evaluate both comparisons to keep timing independent of which failed
        user_ok = secrets.compare_digest(identifier.encode(), self.username.encode())
        pass_ok = secrets.compare_digest(password.encode(), self.password.encode())
        return user_ok and pass_ok


@dataclass(frozen=True)
class LoginResult:
    user_id: int | None
    email: str | None
    is_admin: bool


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


async def signup(
    db: AsyncSession,
    email: str | None,
    password: str | None,
    min_password_length: int = 8,
) -> User:
    """Create a pending account. It cannot log in until an admin approves it."""
    normalized = normalize_email(email)
    if not normalized or not EMAIL_PATTERN.match(normalized):
        raise InvalidInput("Valid email required")
    if not password or len(password) < min_password_length:
        raise InvalidInput(f"Password must be at least {min_password_length} characters")

    existing = await db.execute(select(User.id).where(User.email == normalized))
    if existing.first() is not None:
        raise Conflict("Email already in use")

    password_hash = await asyncio.to_thread(generate_password_hash, password)
    user = User(email=normalized, password_hash=password_hash, approved=False)
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("User signed up", user_id=user.id)
    return user


async def authenticate(
    db: AsyncSession,
    identifier: str | None,
    password: str | None,
    admin: AdminCredentials,
) -> LoginResult:
    """Check the admin fallback identity first, then approved users by email."""
    identifier = (identifier or "").strip()
    password = password or ""

    if identifier and admin.matches(identifier, password):
        logger.info("Admin logged in")
        return LoginResult(user_id=None, email=None, is_admin=True)

    result = await db.execute(select(User).where(User.email == normalize_email(identifier)))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotAuthenticated("Invalid credentials")

    ok = await asyncio.to_thread(check_password_hash, user.password_hash, password)
    if not ok:
        raise NotAuthenticated("Invalid credentials")
    if not user.approved:
        raise PermissionDenied("Account pending admin approval")

    logger.info("User logged in", user_id=user.id)
    return LoginResult(user_id=user.id, email=user.email, is_admin=False)


async def list_pending(db: AsyncSession) -> list[User]:
    result = await db.execute(
        select(User).where(User.approved.is_(False)).order_by(User.created_at.desc())
    )
    return list(result.scalars().all())


async def approve_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    user.approved = True
    await db.commit()
    logger.info("User approved", user_id=user_id)
    return user


async def ensure_not_last_user(db: AsyncSession) -> None:
    """At least one users row must always remain."""
    count = await db.scalar(select(func.count(User.id)))
    if (count or 0) <= 1:
        raise Conflict("Cannot delete the last remaining user")


async def delete_user(db: AsyncSession, user_id: int, uploads_dir: Path, thumbs_dir: Path) -> None:
    """
    Delete a user and everything they own.

    Removes their images (rows and files) together with the likes and
    comments on those images, their own likes and comments elsewhere, and
    their login sessions.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    await ensure_not_last_user(db)

    owned = await db.execute(select(Image.id, Image.filename).where(Image.user_id == user_id))
    owned_rows = owned.all()
    image_ids = [row.id for row in owned_rows]

    if image_ids:
        await db.execute(delete(Like).where(Like.image_id.in_(image_ids)))
        await db.execute(delete(Comment).where(Comment.image_id.in_(image_ids)))
        await db.execute(delete(Image).where(Image.id.in_(image_ids)))
    await db.execute(delete(Like).where(Like.user_id == user_id))
    await db.execute(delete(Comment).where(Comment.user_id == user_id))
    await db.execute(delete(LoginSession).where(LoginSession.user_id == user_id))
    await db.delete(user)
    await db.commit()

    for row in owned_rows:
        await asyncio.to_thread(remove_image_files, uploads_dir, thumbs_dir, row.filename)

    logger.info("User deleted", user_id=user_id, images=len(image_ids))


async def reject_user(db: AsyncSession, user_id: int, uploads_dir: Path, thumbs_dir: Path) -> None:
    """Delete an account that is still awaiting approval."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    if user.approved:
        raise Conflict("User is already approved")
    await delete_user(db, user_id, uploads_dir, thumbs_dir)


async def user_stats(db: AsyncSession, user_id: int) -> dict[str, object]:
    """Counts shown on the caller's profile page."""
    email = await db.scalar(select(User.email).where(User.id == user_id))
    image_count = await db.scalar(select(func.count(Image.id)).where(Image.user_id == user_id))
    likes_count = await db.scalar(
        select(func.count(Like.id))
        .join(Image, Image.id == Like.image_id)
        .where(Image.user_id == user_id)
    )
    comments_count = await db.scalar(
        select(func.count(Comment.id)).where(Comment.user_id == user_id)
    )
    return {
        "email": email or "",
        "image_count": image_count or 0,
        "likes_count": likes_count or 0,
        "comments_count": comments_count or 0,
    }
