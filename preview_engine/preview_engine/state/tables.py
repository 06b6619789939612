"""SQLAlchemy 2.0 ORM table definitions for the livepreview state store.

``projects`` holds the current snapshot per project; ``project_versions`` is
the append-only version trail.  Version rows are never updated; they are
only removed in bulk when their project is deleted.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# JSONB on PostgreSQL, plain JSON (TEXT) on SQLite.
_JsonType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Shared declarative base for all livepreview tables."""


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class ProjectTable(Base):
    """Current snapshot and metadata for each project."""

    __tablename__ = "projects"

    project_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    template: Mapped[str | None] = mapped_column(String(64), nullable=True)
    files_json: Mapped[dict[str, Any]] = mapped_column(_JsonType, nullable=False, default=dict)
    files_hash: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    __table_args__ = (Index("ix_projects_owner", "owner_id"),)


# ---------------------------------------------------------------------------
# Project versions
# ---------------------------------------------------------------------------


class ProjectVersionTable(Base):
    """Immutable version records, one per accepted sync."""

    __tablename__ = "project_versions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    files_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    changed_files: Mapped[list[str]] = mapped_column(_JsonType, nullable=False, default=list)
    removed_files: Mapped[list[str]] = mapped_column(_JsonType, nullable=False, default=list)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_versions_project", "project_id"),
        Index("ix_versions_user", "user_id"),
    )
