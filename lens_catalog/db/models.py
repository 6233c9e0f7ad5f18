"""SQLAlchemy ORM models for user preference sets.

Favorites and the comparison tray share one table: each row links a lens
identifier to the named set it belongs to. Lens records themselves come from
the catalog provider, so ``lens_id`` is a plain string rather than a foreign
key.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow():
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class PreferenceSetName(str, Enum):
    FAVORITES = "favorites"
    COMPARISON = "comparison"


class PreferenceEntry(Base):
    """Membership row for a lens inside a preference set."""

    __tablename__ = "preference_entries"
    __table_args__ = (
        UniqueConstraint(
            "set_name",
            "lens_id",
            name="uq_preference_entries_set_lens",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    set_name: Mapped[str] = mapped_column(
        String(32),
        index=True,
        nullable=False,
        doc="Either ``favorites`` or ``comparison``.",
    )
    lens_id: Mapped[str] = mapped_column(String(128), nullable=False)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


__all__ = ["Base", "PreferenceEntry", "PreferenceSetName", "utcnow"]
