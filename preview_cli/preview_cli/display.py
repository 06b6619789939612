"""Rich output formatting for the livepreview CLI.

All functions write to a :class:`rich.console.Console` instance (typically
bound to *stderr*) so that machine-readable output on *stdout* is never
polluted with human-readable decoration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from rich.console import Console

    from preview_engine.models.diff import ChangeSet
    from preview_engine.models.summary import ProjectSummary
    from preview_engine.models.version import SyncResult, VersionHistory


def _list_or_dash(values: list[str]) -> str:
    return ", ".join(values) if values else "-"


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def display_summary(console: Console, summary: ProjectSummary) -> None:
    """Render the advisory project summary as a panel.

    Parameters
    ----------
    console:
        Rich console to write to (typically stderr).
    summary:
        Summary computed from a snapshot.
    """
    lines = [
        f"[bold]Files:[/bold]       {summary.file_count}",
        f"[bold]Size:[/bold]        {summary.total_size} bytes",
        f"[bold]Components:[/bold]  {_list_or_dash(summary.components)}",
        f"[bold]Routes:[/bold]      {_list_or_dash(summary.routes)}",
        f"[bold]CSS:[/bold]         {'yes' if summary.has_css else 'no'}",
        f"[bold]Tailwind:[/bold]    {'yes' if summary.has_tailwind else 'no'}",
    ]
    console.print(Panel("\n".join(lines), title="Project Summary", border_style="blue"))


# ---------------------------------------------------------------------------
# Change sets
# ---------------------------------------------------------------------------


def display_change_set(console: Console, change_set: ChangeSet) -> None:
    if change_set.is_empty:
        console.print("[dim]No changes.[/dim]")
        return

    table = Table(title="Changes", show_lines=False, pad_edge=True, expand=False)
    table.add_column("Path", style="bold")
    table.add_column("Change")

    added = set(change_set.added)
    for path in change_set.changed:
        if path in added:
            table.add_row(path, "[green]added[/green]")
        else:
            table.add_row(path, "[yellow]modified[/yellow]")
    for path in change_set.removed:
        table.add_row(path, "[red]removed[/red]")

    console.print(table)
    console.print(
        f"\n[bold]{len(change_set.added)}[/bold] added, "
        f"[bold]{len(change_set.modified)}[/bold] modified, "
        f"[bold]{len(change_set.removed)}[/bold] removed"
    )


def display_sync_result(console: Console, project_id: str, result: SyncResult) -> None:
    console.print(f"[bold]Project:[/bold] {project_id}")
    console.print(f"[bold]Hash:[/bold]    {result.hash}")
    console.print(
        f"[bold]Changed:[/bold] {_list_or_dash(result.changed_paths)}\n"
        f"[bold]Removed:[/bold] {_list_or_dash(result.removed_paths)}"
    )
    if not result.recorded:
        console.print("[yellow]Version store unavailable; no history record was written.[/yellow]")


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


def display_history(console: Console, project_id: str, history: VersionHistory) -> None:
    """Render a project's version records, most recent first."""
    if not history.available:
        console.print("[yellow]Version history is unavailable.[/yellow]")
        return
    if not history.versions:
        console.print(f"[dim]No versions recorded for {project_id}.[/dim]")
        return

    table = Table(title=f"Versions of {project_id}", show_lines=False, pad_edge=True, expand=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Hash", style="bold")
    table.add_column("Actor")
    table.add_column("Changed", justify="right")
    table.add_column("Removed", justify="right")
    table.add_column("Message")
    table.add_column("Created")

    for record in history.versions:
        table.add_row(
            str(record.id) if record.id is not None else "-",
            record.files_hash,
            record.actor_id,
            str(len(record.changed_files)),
            str(len(record.removed_files)),
            record.message or "-",
            record.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )

    console.print(table)


def display_extracted(console: Console, files: dict[str, str]) -> None:
    if not files:
        console.print("[yellow]No files found in response.[/yellow]")
        return

    table = Table(title=f"Extracted files ({len(files)})", show_lines=False, pad_edge=True, expand=False)
    table.add_column("Path", style="bold")
    table.add_column("Bytes", justify="right")
    for path in sorted(files):
        table.add_row(path, str(len(files[path].encode("utf-8"))))
    console.print(table)
