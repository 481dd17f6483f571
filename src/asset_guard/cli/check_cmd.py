"""Editability check command."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from asset_guard.cli._common import load_settings
from asset_guard.core import AssetGuardError, StatusQueryOptions
from asset_guard.pipeline import build_dispatcher

console = Console()


def check(
    paths: list[str] = typer.Argument(..., help="Asset paths to check"),
    force: bool = typer.Option(False, "--force", "-f", help="Bypass cached version-control status"),
    config: Path | None = typer.Option(None, "--config", "-c", help="JSON config file"),
):
    """Check whether assets are open for edit."""
    try:
        settings = load_settings(config)
        dispatcher = build_dispatcher(settings)
        options = StatusQueryOptions.FORCE_UPDATE if force else StatusQueryOptions.USE_CACHED_IF_POSSIBLE

        not_editable = dispatcher.is_open_for_edit_many(paths, status_options=options)
        rejected = set(not_editable)

        table = Table(title="Editability")
        table.add_column("Path", style="cyan")
        table.add_column("Editable")
        table.add_column("Reason", style="dim")
        for path in dict.fromkeys(paths):
            if path in rejected:
                verdict = dispatcher.is_open_for_edit(path, options)
                table.add_row(path, "[red]no[/red]", verdict.reason)
            else:
                table.add_row(path, "[green]yes[/green]", "")
        console.print(table)
    except AssetGuardError as e:
        console.print(f"[red]Check failed:[/red] {e}")
        raise typer.Exit(code=2)

    if not_editable:
        console.print(f"[yellow]{len(not_editable)} asset(s) not open for edit[/yellow]")
        raise typer.Exit(code=1)
    console.print("[green]All assets are open for edit[/green]")
