"""Repository classes providing access to the livepreview state store.

Each repository takes an ``AsyncSession`` and operates within the caller's
transaction boundary.  Writes call ``session.flush()`` so that generated
defaults are populated; committing is left to ``get_session``.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from preview_engine.state.tables import ProjectTable, ProjectVersionTable

logger = logging.getLogger(__name__)


class ProjectRepository:
    """Current-snapshot rows, one per project."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, project_id: str) -> ProjectTable | None:
        stmt = select(ProjectTable).where(ProjectTable.project_id == project_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        project_id: str,
        *,
        owner_id: str,
        name: str,
        template: str | None,
        files: dict[str, str],
        files_hash: str,
        created_at: datetime | None = None,
    ) -> ProjectTable:
        """Insert the project row or replace its snapshot in place."""
        now = datetime.now(UTC)
        row = await self.get(project_id)
        if row is None:
            row = ProjectTable(
                project_id=project_id,
                owner_id=owner_id,
                name=name,
                template=template,
                files_json=dict(files),
                files_hash=files_hash,
                created_at=created_at or now,
                updated_at=now,
            )
            self._session.add(row)
        else:
            row.owner_id = owner_id
            row.name = name
            row.template = template
            row.files_json = dict(files)
            row.files_hash = files_hash
            row.updated_at = now
        await self._session.flush()
        return row

    async def delete(self, project_id: str) -> bool:
        stmt = delete(ProjectTable).where(ProjectTable.project_id == project_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return (result.rowcount or 0) > 0


class VersionRepository:
    """Append-only access to ``project_versions``."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(
        self,
        project_id: str,
        user_id: str,
        files_hash: str,
        changed_files: list[str],
        removed_files: list[str],
        message: str | None = None,
        created_at: datetime | None = None,
    ) -> ProjectVersionTable:
        row = ProjectVersionTable(
            project_id=project_id,
            user_id=user_id,
            files_hash=files_hash,
            changed_files=list(changed_files),
            removed_files=list(removed_files),
            message=message,
            created_at=created_at or datetime.now(UTC),
        )
        self._session.add(row)
        await self._session.flush()
        logger.debug("Appended version id=%s project=%s hash=%s", row.id, project_id, files_hash)
        return row

    async def list_recent(self, project_id: str, limit: int) -> list[ProjectVersionTable]:
        """Return up to *limit* rows, newest first.

        Ordering is by the autoincrement id so that records written within
        the same clock tick still come back in insertion order.
        """
        stmt = (
            select(ProjectVersionTable)
            .where(ProjectVersionTable.project_id == project_id)
            .order_by(ProjectVersionTable.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def delete_for_project(self, project_id: str) -> int:
        stmt = delete(ProjectVersionTable).where(ProjectVersionTable.project_id == project_id)
        result: Any = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0
