"""SQLAlchemy declarative base with ULID primary key and audit mixins."""

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Boolean, String, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from ulid import ULID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ULIDMixin:
    """Mixin that provides a ULID primary key and created_at timestamp."""

    id: Mapped[str] = mapped_column(
        String(26), primary_key=True, default=lambda: str(ULID())
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )


class ActiveMixin:
    """Soft-delete flag. Rows are deactivated, never removed."""

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class AuditMixin(ActiveMixin):
    modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
