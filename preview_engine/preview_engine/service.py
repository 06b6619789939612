"""Stateless entry points for host services.

These functions take snapshots directly and touch no project state; the
:class:`~preview_engine.project.ProjectActor` wraps the same calls with
serialisation, persistence and caching.
"""

from __future__ import annotations

from collections.abc import Mapping

from preview_engine.analysis.summarizer import summarize_snapshot
from preview_engine.models.preview import RenderMode, SynthesisOptions
from preview_engine.models.snapshot import ProjectSnapshot
from preview_engine.models.summary import ProjectSummary
from preview_engine.models.version import SyncResult, VersionHistory
from preview_engine.synthesis.synthesizer import synthesize_document
from preview_engine.versioning.ledger import VersionLedger, build_sync_result


def apply_sync(
    previous: Mapping[str, str] | None,
    current: Mapping[str, str],
    message: str | None = None,
) -> SyncResult:
    """Hash *current* and diff it against *previous*.  Persists nothing.

    *message* is accepted for symmetry with the ledger call and has no
    effect on the result.

    Raises
    ------
    InvalidSnapshotError
        If either mapping is not a legal snapshot.
    """
    new = ProjectSnapshot.of(dict(current))
    old = ProjectSnapshot.of(dict(previous)) if previous is not None else None
    return build_sync_result(old.files if old is not None else None, new.files)


def render_preview(
    files: Mapping[str, str],
    mode: RenderMode | None = None,
    options: SynthesisOptions | None = None,
) -> str:
    snapshot = ProjectSnapshot.of(dict(files))
    return synthesize_document(snapshot.files, mode=mode, options=options)


def summarize(files: Mapping[str, str]) -> ProjectSummary:
    return summarize_snapshot(ProjectSnapshot.of(dict(files)).files)


async def list_versions(ledger: VersionLedger, project_id: str, limit: int | None = None) -> VersionHistory:
    """Most-recent-first history for *project_id*, capped by the ledger."""
    return await ledger.list(project_id, limit)
