"""Per-project actors, the registry that owns them and starter templates."""

from preview_engine.project.actor import (
    ActorClosedError,
    ProjectActor,
    ProjectExistsError,
    ProjectNotFoundError,
    SnapshotStore,
)
from preview_engine.project.registry import ProjectRegistry, open_registry
from preview_engine.project.templates import available_templates, resolve_template, template_files

__all__ = [
    "ActorClosedError",
    "ProjectActor",
    "ProjectExistsError",
    "ProjectNotFoundError",
    "ProjectRegistry",
    "SnapshotStore",
    "available_templates",
    "open_registry",
    "resolve_template",
    "template_files",
]
