"""Hands out exactly one :class:`ProjectActor` per project id."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from preview_engine.cache import ProjectCache
from preview_engine.config import Settings
from preview_engine.models.preview import SynthesisOptions
from preview_engine.project.actor import ProjectActor, SnapshotStore
from preview_engine.state.database import create_tables, get_engine
from preview_engine.state.stores import SqlSnapshotStore, SqlVersionStore
from preview_engine.versioning.ledger import VersionLedger

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """Process-wide map of project id to its serial actor.

    Actors share the ledger, snapshot store and cache, but never share
    snapshot state with each other.
    """

    def __init__(
        self,
        *,
        ledger: VersionLedger,
        snapshot_store: SnapshotStore | None = None,
        cache: ProjectCache | None = None,
        synthesis_options: SynthesisOptions | None = None,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._ledger = ledger
        self._store = snapshot_store
        self._cache = cache
        self._options = synthesis_options
        self._engine = engine
        self._actors: dict[str, ProjectActor] = {}
        self._lock = asyncio.Lock()

    @property
    def ledger(self) -> VersionLedger:
        return self._ledger

    def __len__(self) -> int:
        return len(self._actors)

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._actors

    async def get(self, project_id: str) -> ProjectActor:
        """Return the actor for *project_id*, starting one if needed."""
        if not project_id:
            raise ValueError("project_id must be non-empty")
        async with self._lock:
            actor = self._actors.get(project_id)
            if actor is None or actor.closed:
                actor = ProjectActor(
                    project_id,
                    ledger=self._ledger,
                    snapshot_store=self._store,
                    cache=self._cache,
                    synthesis_options=self._options,
                )
                self._actors[project_id] = actor
                logger.debug("Started project actor: project=%s", project_id)
            return actor

    async def release(self, project_id: str) -> None:
        """Stop and forget the actor for *project_id*, if any."""
        async with self._lock:
            actor = self._actors.pop(project_id, None)
        if actor is not None:
            await actor.close()

    async def close(self) -> None:
        async with self._lock:
            actors = list(self._actors.values())
            self._actors.clear()
        for actor in actors:
            await actor.close()
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
        logger.info("Project registry closed (%d actors)", len(actors))


async def open_registry(settings: Settings) -> ProjectRegistry:
    """Build a registry backed by the SQL store configured in *settings*."""
    engine = get_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await create_tables(engine)
    except BaseException:
        await engine.dispose()
        raise
    ledger = VersionLedger(
        SqlVersionStore(engine),
        default_limit=settings.history_default_limit,
        max_limit=settings.history_max_limit,
    )
    cache = ProjectCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_entries=settings.cache_max_entries,
        enabled=settings.cache_enabled,
    )
    return ProjectRegistry(
        ledger=ledger,
        snapshot_store=SqlSnapshotStore(engine),
        cache=cache,
        synthesis_options=settings.synthesis_options(),
        engine=engine,
    )
