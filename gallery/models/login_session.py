"""Login session model."""

import secrets
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gallery.db.base import Base, utcnow


class LoginSession(Base):
    """Server-side session keyed by the opaque cookie value."""

    __tablename__ = "login_sessions"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: secrets.token_urlsafe(32),
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    # Null for the admin fallback identity
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
