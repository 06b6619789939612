"""Advisory project summary derived from a snapshot."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProjectSummary(BaseModel):
    """Lightweight static facts about a snapshot.

    Every field is best-effort.  Nothing downstream may treat these values
    as invariants; they are recomputed from the snapshot on demand.
    """

    file_count: int = 0
    file_paths: list[str] = Field(default_factory=list)
    components: list[str] = Field(default_factory=list)
    routes: list[str] = Field(default_factory=list)
    has_css: bool = False
    has_tailwind: bool = False
    total_size: int = Field(default=0, description="Sum of UTF-8 encoded file sizes in bytes.")
