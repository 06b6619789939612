"""livepreview CLI application -- Typer-based developer interface.

Provides commands for rendering a project directory into a single preview
document, hashing and diffing snapshots, summarising a project, extracting
files from an assistant response, and recording / listing versions.
Human-readable output goes to *stderr* via Rich; machine-readable output
(the preview document, ``--json`` payloads) goes to *stdout* so that
pipelines can compose cleanly.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path, PurePosixPath
from typing import Any

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from preview_cli.display import (
    display_change_set,
    display_extracted,
    display_history,
    display_summary,
    display_sync_result,
)
from preview_engine.analysis.summarizer import summarize_snapshot
from preview_engine.config import Settings, load_settings
from preview_engine.ingest.response_parser import parse_project_files
from preview_engine.loader.directory_loader import SnapshotLoadError, load_snapshot_from_directory
from preview_engine.logging_config import configure_logging
from preview_engine.models.preview import RenderMode
from preview_engine.models.snapshot import InvalidSnapshotError, ProjectSnapshot
from preview_engine.project.registry import ProjectRegistry, open_registry
from preview_engine.synthesis.synthesizer import synthesize_document
from preview_engine.versioning.change_detector import compute_change_set
from preview_engine.versioning.hasher import compute_content_hash

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="livepreview",
    help="livepreview - single-document previews and version history for multi-file web projects",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Mutable global options populated by the Typer callback.
_json_output: bool = False


# ---------------------------------------------------------------------------
# Callback -- global options
# ---------------------------------------------------------------------------


@app.callback()
def _global_options(
    json_mode: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Emit structured JSON to stdout instead of human-readable output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log engine activity to stderr.",
    ),
) -> None:
    """Global options applied to every command."""
    global _json_output  # noqa: PLW0603
    _json_output = json_mode
    configure_logging(_settings(), level=logging.DEBUG if verbose else logging.WARNING)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _settings() -> Settings:
    return load_settings()


def _load(directory: Path, settings: Settings) -> ProjectSnapshot:
    try:
        return load_snapshot_from_directory(directory, max_file_bytes=settings.max_file_bytes)
    except (SnapshotLoadError, InvalidSnapshotError) as exc:
        console.print(f"[red]Failed to load project: {exc}[/red]")
        raise typer.Exit(code=3) from exc


def _with_registry(settings: Settings, work: Callable[[ProjectRegistry], Awaitable[Any]]) -> Any:
    """Run *work* against a registry opened from *settings*, then close it."""

    async def _run() -> Any:
        registry = await open_registry(settings)
        try:
            return await work(registry)
        finally:
            await registry.close()

    try:
        return asyncio.run(_run())
    except (OSError, SQLAlchemyError) as exc:
        console.print(f"[red]State store unavailable: {exc}[/red]")
        raise typer.Exit(code=3) from exc


def _write_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, default=str) + "\n")


def _safe_relative(path: str) -> PurePosixPath | None:
    candidate = PurePosixPath(path)
    if candidate.is_absolute() or ".." in candidate.parts:
        return None
    return candidate


_DIRECTORY_ARG = typer.Argument(
    ...,
    help="Project directory.",
    exists=True,
    file_okay=False,
    resolve_path=True,
)


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


@app.command()
def render(
    directory: Path = _DIRECTORY_ARG,
    out: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the preview document here instead of stdout.",
    ),
    mode: RenderMode | None = typer.Option(
        None,
        "--mode",
        help="Force a rendering mode instead of detecting it.",
    ),
    title: str = typer.Option("Preview", "--title", help="Document title for generated shells."),
) -> None:
    """Render a project directory into one self-contained HTML document."""
    settings = _settings()
    snapshot = _load(directory, settings)
    document = synthesize_document(snapshot.files, mode=mode, options=settings.synthesis_options(title=title))

    if out is None:
        sys.stdout.write(document)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(document, encoding="utf-8")
    console.print(f"[green]Preview written to {out}[/green] ({len(document)} chars, {len(snapshot)} files)")


# ---------------------------------------------------------------------------
# hash
# ---------------------------------------------------------------------------


@app.command(name="hash")
def hash_command(directory: Path = _DIRECTORY_ARG) -> None:
    """Print the content hash of a project directory."""
    snapshot = _load(directory, _settings())
    content_hash = compute_content_hash(snapshot.files)
    if _json_output:
        _write_json({"hash": content_hash, "file_count": len(snapshot)})
    else:
        sys.stdout.write(content_hash + "\n")


# ---------------------------------------------------------------------------
# diff
# ---------------------------------------------------------------------------


@app.command()
def diff(
    old: Path = typer.Argument(..., help="Directory holding the old snapshot.", exists=True, file_okay=False),
    new: Path = typer.Argument(..., help="Directory holding the new snapshot.", exists=True, file_okay=False),
) -> None:
    """Show which paths changed between two project directories."""
    settings = _settings()
    change_set = compute_change_set(_load(old, settings).files, _load(new, settings).files)
    if _json_output:
        _write_json(change_set.model_dump())
    else:
        display_change_set(console, change_set)


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------


@app.command()
def summary(directory: Path = _DIRECTORY_ARG) -> None:
    """Summarise components, routes and styling of a project directory."""
    result = summarize_snapshot(_load(directory, _settings()).files)
    if _json_output:
        _write_json(result.model_dump())
    else:
        display_summary(console, result)


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------


@app.command()
def extract(
    response: Path = typer.Argument(
        ...,
        help="Markdown file containing an assistant response.",
        exists=True,
        dir_okay=False,
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Directory to write the extracted files into.  Lists them when omitted.",
    ),
) -> None:
    """Extract announced code blocks from an assistant response."""
    files = parse_project_files(response.read_text(encoding="utf-8"))

    if out is not None:
        written = 0
        for path, content in sorted(files.items()):
            relative = _safe_relative(path)
            if relative is None:
                console.print(f"[yellow]Skipping unsafe path: {path}[/yellow]")
                continue
            target = out / Path(*relative.parts)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            written += 1
        console.print(f"[green]Wrote {written} file(s) to {out}[/green]")

    if _json_output:
        _write_json({"files": files})
    else:
        display_extracted(console, files)


# ---------------------------------------------------------------------------
# sync / history
# ---------------------------------------------------------------------------


@app.command()
def sync(
    directory: Path = _DIRECTORY_ARG,
    project: str = typer.Option(..., "--project", "-p", help="Project identifier."),
    actor: str = typer.Option("cli", "--actor", help="User or agent recorded on the version."),
    message: str | None = typer.Option(None, "--message", "-m", help="Version message."),
) -> None:
    """Record a project directory as the project's new snapshot."""
    settings = _settings()
    snapshot = _load(directory, settings)

    async def _sync(registry: ProjectRegistry) -> Any:
        project_actor = await registry.get(project)
        return await project_actor.sync(snapshot.files, actor, message)

    result = _with_registry(settings, _sync)
    if _json_output:
        _write_json({"project_id": project, **result.model_dump()})
    else:
        display_sync_result(console, project, result)


@app.command()
def history(
    project: str = typer.Option(..., "--project", "-p", help="Project identifier."),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum records to show.", min=1, max=50),
) -> None:
    """List a project's most recent versions."""
    settings = _settings()

    async def _history(registry: ProjectRegistry) -> Any:
        return await registry.ledger.list(project, limit)

    versions = _with_registry(settings, _history)
    if _json_output:
        _write_json(versions.model_dump(mode="json"))
    else:
        display_history(console, project, versions)
