"""Append-only version ledger.

Every accepted sync produces exactly one :class:`VersionRecord` carrying the
new snapshot's content hash and the change set relative to the snapshot it
replaced.  The ledger never blocks a sync: when its backing store is missing
or failing, ``append`` logs a warning and still returns the versioning
result, and ``list`` returns an empty page flagged ``available=False``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from preview_engine.models.version import SyncResult, VersionHistory, VersionRecord
from preview_engine.state.errors import StoreUnavailableError
from preview_engine.versioning.change_detector import compute_change_set
from preview_engine.versioning.hasher import compute_content_hash

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20
MAX_HISTORY_LIMIT = 50

_STORE_ERRORS: tuple[type[BaseException], ...] = (StoreUnavailableError, OSError)


class VersionStore(Protocol):
    """Backing store for version records."""

    async def append(self, record: VersionRecord) -> VersionRecord: ...

    async def list_recent(self, project_id: str, limit: int) -> list[VersionRecord]: ...

    async def delete_project(self, project_id: str) -> int: ...


def build_sync_result(
    previous_files: Mapping[str, str] | None,
    current_files: Mapping[str, str],
) -> SyncResult:
    """Hash *current_files* and diff it against *previous_files*.  Pure."""
    change_set = compute_change_set(previous_files, current_files)
    return SyncResult(
        hash=compute_content_hash(current_files),
        changed_paths=change_set.changed,
        removed_paths=change_set.removed,
    )


class VersionLedger:
    """Records snapshot transitions and serves paginated history.

    Parameters
    ----------
    store:
        Record store.  ``None`` means the store has not been provisioned;
        appends become logged no-ops and listings report unavailability.
    default_limit:
        Page size used when ``list`` is called without a limit.
    max_limit:
        Hard cap applied to every listing.
    """

    def __init__(
        self,
        store: VersionStore | None,
        *,
        default_limit: int = DEFAULT_HISTORY_LIMIT,
        max_limit: int = MAX_HISTORY_LIMIT,
    ) -> None:
        self._store = store
        self._max_limit = max(1, max_limit)
        self._default_limit = max(1, min(default_limit, self._max_limit))

    @property
    def available(self) -> bool:
        return self._store is not None

    async def append(
        self,
        project_id: str,
        actor_id: str,
        previous_files: Mapping[str, str] | None,
        current_files: Mapping[str, str],
        message: str | None = None,
    ) -> SyncResult:
        """Compute the versioning result and write one immutable record."""
        result = build_sync_result(previous_files, current_files)

        if self._store is None:
            logger.warning("Version store not provisioned; skipping record for project=%s", project_id)
            return result.model_copy(update={"recorded": False})

        record = VersionRecord(
            project_id=project_id,
            actor_id=actor_id,
            files_hash=result.hash,
            changed_files=result.changed_paths,
            removed_files=result.removed_paths,
            message=message,
        )
        try:
            await self._store.append(record)
        except _STORE_ERRORS as exc:
            logger.warning(
                "Version store unavailable; record for project=%s hash=%s not written: %s",
                project_id,
                result.hash,
                exc,
            )
            return result.model_copy(update={"recorded": False})

        logger.info(
            "Version recorded: project=%s hash=%s changed=%d removed=%d",
            project_id,
            result.hash,
            len(result.changed_paths),
            len(result.removed_paths),
        )
        return result

    async def list(self, project_id: str, limit: int | None = None) -> VersionHistory:
        """Return up to *limit* records for *project_id*, most recent first."""
        if limit is None:
            limit = self._default_limit
        limit = max(1, min(limit, self._max_limit))

        if self._store is None:
            return VersionHistory(versions=[], available=False)
        try:
            versions = await self._store.list_recent(project_id, limit)
        except _STORE_ERRORS as exc:
            logger.warning("Version store unavailable; history for project=%s not read: %s", project_id, exc)
            return VersionHistory(versions=[], available=False)
        return VersionHistory(versions=versions[:limit], available=True)

    async def purge(self, project_id: str) -> int:
        """Remove the whole trail for a deleted project.  Returns rows removed."""
        if self._store is None:
            return 0
        try:
            return await self._store.delete_project(project_id)
        except _STORE_ERRORS as exc:
            logger.warning("Version store unavailable; trail for project=%s not purged: %s", project_id, exc)
            return 0
