"""SQL-backed stores used by the project actor and version ledger.

The stores own their session lifecycle (one ``get_session`` per call) and
translate driver failures into :class:`StoreUnavailableError` so callers
only have to handle one error type.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from preview_engine.models.project import ProjectRecord
from preview_engine.models.version import VersionRecord
from preview_engine.state.database import get_session
from preview_engine.state.errors import StoreUnavailableError
from preview_engine.state.repository import ProjectRepository, VersionRepository
from preview_engine.state.tables import ProjectTable, ProjectVersionTable

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on read.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _project_from_row(row: ProjectTable) -> ProjectRecord:
    return ProjectRecord(
        project_id=row.project_id,
        owner_id=row.owner_id,
        name=row.name,
        template=row.template,
        files=dict(row.files_json or {}),
        files_hash=row.files_hash,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _version_from_row(row: ProjectVersionTable) -> VersionRecord:
    return VersionRecord(
        id=row.id,
        project_id=row.project_id,
        actor_id=row.user_id,
        files_hash=row.files_hash,
        changed_files=list(row.changed_files or []),
        removed_files=list(row.removed_files or []),
        message=row.message,
        created_at=_aware(row.created_at),
    )


class SqlSnapshotStore:
    """Durable copy of each project's current snapshot."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def load(self, project_id: str) -> ProjectRecord | None:
        try:
            async with get_session(self._engine) as session:
                row = await ProjectRepository(session).get(project_id)
                return _project_from_row(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"snapshot load failed for {project_id}: {exc}") from exc

    async def save(self, record: ProjectRecord) -> None:
        try:
            async with get_session(self._engine) as session:
                await ProjectRepository(session).upsert(
                    record.project_id,
                    owner_id=record.owner_id,
                    name=record.name,
                    template=record.template,
                    files=record.files,
                    files_hash=record.files_hash,
                    created_at=record.created_at,
                )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"snapshot save failed for {record.project_id}: {exc}") from exc

    async def delete(self, project_id: str) -> bool:
        try:
            async with get_session(self._engine) as session:
                return await ProjectRepository(session).delete(project_id)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"snapshot delete failed for {project_id}: {exc}") from exc


class SqlVersionStore:
    """:class:`~preview_engine.versioning.ledger.VersionStore` over ``project_versions``."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def append(self, record: VersionRecord) -> VersionRecord:
        try:
            async with get_session(self._engine) as session:
                row = await VersionRepository(session).append(
                    project_id=record.project_id,
                    user_id=record.actor_id,
                    files_hash=record.files_hash,
                    changed_files=record.changed_files,
                    removed_files=record.removed_files,
                    message=record.message,
                    created_at=record.created_at,
                )
                return _version_from_row(row)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"version append failed for {record.project_id}: {exc}") from exc

    async def list_recent(self, project_id: str, limit: int) -> list[VersionRecord]:
        try:
            async with get_session(self._engine) as session:
                rows = await VersionRepository(session).list_recent(project_id, limit)
                return [_version_from_row(r) for r in rows]
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"version listing failed for {project_id}: {exc}") from exc

    async def delete_project(self, project_id: str) -> int:
        try:
            async with get_session(self._engine) as session:
                return await VersionRepository(session).delete_for_project(project_id)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"version purge failed for {project_id}: {exc}") from exc
