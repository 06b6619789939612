"""Serial per-project actor.

Every mutation and read for a project goes through one mailbox and is
handled by a single worker task, one message at a time in arrival order.
The actor owns the current snapshot; anything crossing its boundary is a
copy.  Store, cache and ledger calls are the only suspension points inside
a handler, and their failures are logged and absorbed so that the in-memory
snapshot keeps serving.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import UTC, datetime
from typing import Any, Protocol, TypeVar

from preview_engine.analysis.summarizer import summarize_snapshot
from preview_engine.cache import SNAPSHOT, SUMMARY, ProjectCache
from preview_engine.models.operations import FileAction, FileOperation, FileOperationResult
from preview_engine.models.preview import RenderMode, SynthesisOptions
from preview_engine.models.project import FileEntry, ProjectRecord, ProjectStatus
from preview_engine.models.snapshot import ProjectSnapshot, check_file_entry
from preview_engine.models.summary import ProjectSummary
from preview_engine.models.version import SyncResult, VersionHistory
from preview_engine.project.templates import resolve_template, template_files
from preview_engine.state.errors import StoreUnavailableError
from preview_engine.synthesis.synthesizer import synthesize_document
from preview_engine.versioning.hasher import compute_content_hash
from preview_engine.versioning.ledger import VersionLedger

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STORE_ERRORS: tuple[type[BaseException], ...] = (StoreUnavailableError, OSError)


class ProjectNotFoundError(LookupError):
    """The project has not been created (or has been deleted)."""


class ProjectExistsError(ValueError):
    """``create`` was called for a project that already exists."""


class ActorClosedError(RuntimeError):
    """A message was sent to an actor after ``close``."""


class SnapshotStore(Protocol):
    """Durable copy of the current snapshot per project."""

    async def load(self, project_id: str) -> ProjectRecord | None: ...

    async def save(self, record: ProjectRecord) -> None: ...

    async def delete(self, project_id: str) -> bool: ...


_Message = tuple[Callable[[], Awaitable[Any]], asyncio.Future[Any]]


class ProjectActor:
    """Single-writer owner of one project's snapshot.

    Parameters
    ----------
    project_id:
        Identifier of the project this actor owns.
    ledger:
        Version ledger receiving one record per accepted sync.
    snapshot_store:
        Optional durable store; ``None`` keeps the project in memory only.
    cache:
        Optional opportunistic cache for the latest snapshot and summary.
    synthesis_options:
        Asset locations used by ``render_preview``.
    """

    def __init__(
        self,
        project_id: str,
        *,
        ledger: VersionLedger,
        snapshot_store: SnapshotStore | None = None,
        cache: ProjectCache | None = None,
        synthesis_options: SynthesisOptions | None = None,
    ) -> None:
        self.project_id = project_id
        self._ledger = ledger
        self._store = snapshot_store
        self._cache = cache
        self._options = synthesis_options or SynthesisOptions()
        self._mailbox: asyncio.Queue[_Message | None] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._record: ProjectRecord | None = None
        self._loaded = False
        self._closed = False

    # ------------------------------------------------------------------
    # Mailbox
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    async def _call(self, handler: Callable[[], Awaitable[T]]) -> T:
        if self._closed:
            raise ActorClosedError(f"actor for project {self.project_id} is closed")
        if self._worker is None:
            self._worker = asyncio.create_task(self._run(), name=f"project-actor:{self.project_id}")
        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        await self._mailbox.put((handler, future))
        return await future

    async def _run(self) -> None:
        while True:
            message = await self._mailbox.get()
            if message is None:
                break
            handler, future = message
            if future.cancelled():
                continue
            try:
                result = await handler()
            except Exception as exc:
                if not future.cancelled():
                    future.set_exception(exc)
            else:
                if not future.cancelled():
                    future.set_result(result)

    async def close(self) -> None:
        """Drain the mailbox and stop the worker.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._worker is not None:
            await self._mailbox.put(None)
            await self._worker
            self._worker = None
        logger.debug("Project actor closed: project=%s", self.project_id)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        if self._store is None:
            return
        try:
            self._record = await self._store.load(self.project_id)
        except _STORE_ERRORS as exc:
            logger.warning("Snapshot store unavailable; project=%s starts empty: %s", self.project_id, exc)

    async def _persist(self, record: ProjectRecord) -> None:
        if self._store is None:
            return
        try:
            await self._store.save(record)
        except _STORE_ERRORS as exc:
            logger.warning(
                "Snapshot store unavailable; project=%s hash=%s kept in memory only: %s",
                self.project_id,
                record.files_hash,
                exc,
            )

    def _refresh_cache(self, files: dict[str, str]) -> ProjectSummary:
        summary = summarize_snapshot(files)
        if self._cache is not None:
            self._cache.invalidate_project(self.project_id)
            self._cache.put(SNAPSHOT, self.project_id, dict(files))
            self._cache.put(SUMMARY, self.project_id, summary)
        return summary

    def _require(self) -> ProjectRecord:
        if self._record is None:
            raise ProjectNotFoundError(f"project {self.project_id} does not exist")
        return self._record

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create(
        self,
        owner_id: str,
        name: str,
        template: str | None = None,
        files: dict[str, str] | None = None,
    ) -> ProjectStatus:
        """Create the project from *files* or from a starter template."""
        template_name = resolve_template(template)
        snapshot = ProjectSnapshot.of(files if files is not None else template_files(template_name))

        async def handler() -> ProjectStatus:
            await self._ensure_loaded()
            if self._record is not None:
                raise ProjectExistsError(f"project {self.project_id} already exists")
            result = await self._ledger.append(
                self.project_id,
                owner_id,
                None,
                snapshot.files,
                message=f"Created from template {template_name}" if files is None else "Created",
            )
            record = ProjectRecord(
                project_id=self.project_id,
                owner_id=owner_id,
                name=name,
                template=template_name if files is None else template,
                files=snapshot.copy_files(),
                files_hash=result.hash,
            )
            self._record = record
            await self._persist(record)
            self._refresh_cache(record.files)
            logger.info("Project created: project=%s owner=%s files=%d", self.project_id, owner_id, len(snapshot))
            return self._status(record)

        return await self._call(handler)

    async def sync(
        self,
        files: dict[str, str],
        actor_id: str,
        message: str | None = None,
        name: str | None = None,
    ) -> SyncResult:
        """Replace the snapshot wholesale and record one version.

        Raises :class:`~preview_engine.models.snapshot.InvalidSnapshotError`
        before anything is queued when *files* is malformed.  A sync for a
        project that does not exist yet creates it, owned by *actor_id*.
        """
        snapshot = ProjectSnapshot.of(files)

        async def handler() -> SyncResult:
            await self._ensure_loaded()
            previous = self._record.files if self._record is not None else None
            result = await self._ledger.append(self.project_id, actor_id, previous, snapshot.files, message)
            now = datetime.now(UTC)
            if self._record is None:
                record = ProjectRecord(
                    project_id=self.project_id,
                    owner_id=actor_id,
                    name=name or self.project_id,
                    files=snapshot.copy_files(),
                    files_hash=result.hash,
                    created_at=now,
                    updated_at=now,
                )
            else:
                record = self._record.model_copy(
                    update={
                        "name": name or self._record.name,
                        "files": snapshot.copy_files(),
                        "files_hash": result.hash,
                        "updated_at": now,
                    }
                )
            self._record = record
            await self._persist(record)
            self._refresh_cache(record.files)
            logger.info(
                "Snapshot accepted: project=%s hash=%s changed=%d removed=%d",
                self.project_id,
                result.hash,
                len(result.changed_paths),
                len(result.removed_paths),
                extra={"project_id": self.project_id, "actor_id": actor_id},
            )
            return result

        return await self._call(handler)

    async def write_files(self, operations: Sequence[FileOperation]) -> list[FileOperationResult]:
        """Apply per-file edits.  Edits are not versioned; only syncs are."""
        ops = list(operations)

        async def handler() -> list[FileOperationResult]:
            await self._ensure_loaded()
            record = self._require()
            files = dict(record.files)
            results: list[FileOperationResult] = []
            mutated = False
            for op in ops:
                try:
                    check_file_entry(op.path, op.content)
                except ValueError as exc:
                    results.append(FileOperationResult(path=op.path, success=False, error=str(exc)))
                    continue
                if op.action in (FileAction.CREATE, FileAction.UPDATE):
                    if op.content is None:
                        results.append(FileOperationResult(path=op.path, success=False, error="content is required"))
                        continue
                    files[op.path] = op.content
                    mutated = True
                    results.append(FileOperationResult(path=op.path, success=True))
                elif op.action is FileAction.DELETE:
                    if files.pop(op.path, None) is None:
                        results.append(FileOperationResult(path=op.path, success=False, error="file not found"))
                        continue
                    mutated = True
                    results.append(FileOperationResult(path=op.path, success=True))
                else:
                    content = files.get(op.path)
                    if content is None:
                        results.append(FileOperationResult(path=op.path, success=False, error="file not found"))
                    else:
                        results.append(FileOperationResult(path=op.path, success=True, content=content))

            if mutated:
                updated = record.model_copy(
                    update={
                        "files": files,
                        "files_hash": compute_content_hash(files),
                        "updated_at": datetime.now(UTC),
                    }
                )
                self._record = updated
                await self._persist(updated)
                self._refresh_cache(updated.files)
            return results

        return await self._call(handler)

    async def read_file(self, path: str) -> str | None:
        async def handler() -> str | None:
            await self._ensure_loaded()
            return self._require().files.get(path)

        return await self._call(handler)

    async def list_files(self) -> list[FileEntry]:
        async def handler() -> list[FileEntry]:
            await self._ensure_loaded()
            files = self._require().files
            return [FileEntry(path=p, size=len(files[p].encode("utf-8"))) for p in sorted(files)]

        return await self._call(handler)

    async def snapshot(self) -> dict[str, str]:
        """Return a copy of the current file set."""

        async def handler() -> dict[str, str]:
            await self._ensure_loaded()
            return dict(self._require().files)

        return await self._call(handler)

    def _status(self, record: ProjectRecord) -> ProjectStatus:
        return ProjectStatus(
            project_id=record.project_id,
            name=record.name,
            owner_id=record.owner_id,
            template=record.template,
            file_count=len(record.files),
            files_hash=record.files_hash,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def status(self) -> ProjectStatus:
        async def handler() -> ProjectStatus:
            await self._ensure_loaded()
            return self._status(self._require())

        return await self._call(handler)

    async def render_preview(self, mode: RenderMode | None = None) -> str:
        async def handler() -> str:
            await self._ensure_loaded()
            record = self._require()
            options = self._options.model_copy(update={"title": record.name or self._options.title})
            return synthesize_document(record.files, mode=mode, options=options)

        return await self._call(handler)

    async def summary(self) -> ProjectSummary:
        async def handler() -> ProjectSummary:
            if self._cache is not None:
                cached = self._cache.get(SUMMARY, self.project_id)
                if cached is not None:
                    return cached
            await self._ensure_loaded()
            return self._refresh_cache(self._require().files)

        return await self._call(handler)

    async def history(self, limit: int | None = None) -> VersionHistory:
        async def handler() -> VersionHistory:
            return await self._ledger.list(self.project_id, limit)

        return await self._call(handler)

    async def delete(self) -> bool:
        """Remove the project and its whole version trail."""

        async def handler() -> bool:
            await self._ensure_loaded()
            existed = self._record is not None
            if self._store is not None:
                try:
                    existed = await self._store.delete(self.project_id) or existed
                except _STORE_ERRORS as exc:
                    logger.warning("Snapshot store unavailable; project=%s not deleted durably: %s", self.project_id, exc)
            purged = await self._ledger.purge(self.project_id)
            if self._cache is not None:
                self._cache.invalidate_project(self.project_id)
            self._record = None
            logger.info("Project deleted: project=%s versions_purged=%d", self.project_id, purged)
            return existed

        return await self._call(handler)
