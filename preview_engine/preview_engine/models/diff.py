"""Change-set model produced by comparing two snapshots."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChangeSet(BaseModel):
    """Symmetric difference between an old and a new snapshot.

    ``changed`` is the contract field (added *or* modified paths).  The
    ``added`` / ``modified`` split is carried alongside for callers that
    need to tell a new file from an edited one.  All lists are sorted.
    """

    changed: list[str] = Field(
        default_factory=list,
        description="Paths added or modified in the new snapshot.",
    )
    removed: list[str] = Field(
        default_factory=list,
        description="Paths present in the old snapshot but absent from the new one.",
    )
    added: list[str] = Field(
        default_factory=list,
        description="Subset of ``changed`` absent from the old snapshot.",
    )
    modified: list[str] = Field(
        default_factory=list,
        description="Subset of ``changed`` present in both snapshots with different content.",
    )

    @property
    def is_empty(self) -> bool:
        return not self.changed and not self.removed
