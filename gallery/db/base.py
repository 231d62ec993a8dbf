"""Declarative base for all models."""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


def utcnow() -> datetime:
    # Microsecond precision keeps created_at ordering stable within a second
    return datetime.now(timezone.utc)
