"""Version-ledger models: sync results and immutable version records."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class SyncResult(BaseModel):
    """Outcome of accepting a new snapshot."""

    hash: str = Field(..., description="Content hash of the accepted snapshot.")
    changed_paths: list[str] = Field(
        default_factory=list,
        description="Paths added or modified relative to the previous snapshot.",
    )
    removed_paths: list[str] = Field(
        default_factory=list,
        description="Paths dropped relative to the previous snapshot.",
    )
    recorded: bool = Field(
        default=True,
        description="False when the ledger store was unavailable and no record was written.",
    )


class VersionRecord(BaseModel):
    """Append-only record describing one accepted snapshot transition."""

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(default=None, description="Store-assigned sequence id.")
    project_id: str = Field(..., min_length=1)
    actor_id: str = Field(..., min_length=1)
    files_hash: str = Field(..., min_length=1)
    changed_files: list[str] = Field(default_factory=list)
    removed_files: list[str] = Field(default_factory=list)
    message: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class VersionHistory(BaseModel):
    """Most-recent-first page of version records."""

    versions: list[VersionRecord] = Field(default_factory=list)
    available: bool = Field(
        default=True,
        description="False when the backing store could not be read.",
    )
