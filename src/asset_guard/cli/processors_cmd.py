"""Processor listing command."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from asset_guard.cli._common import load_settings
from asset_guard.core import AssetEvent, AssetGuardError
from asset_guard.pipeline import build_dispatcher

console = Console()


def processors(
    config: Path | None = typer.Option(None, "--config", "-c", help="JSON config file"),
):
    """List discovered processors and the events each one handles."""
    try:
        settings = load_settings(config)
        registry = build_dispatcher(settings).registry
        found = registry.processors()
        bound: dict[type, list[str]] = {processor: [] for processor in found}
        for event in AssetEvent:
            for binding in registry.resolve(event):
                bound[binding.processor].append(event.value)
    except AssetGuardError as e:
        console.print(f"[red]Discovery failed:[/red] {e}")
        raise typer.Exit(code=1)

    if not found:
        console.print("[yellow]No asset modification processors found[/yellow]")
        return

    table = Table(title="Asset modification processors")
    table.add_column("Processor", style="cyan")
    table.add_column("Validated callbacks")
    for processor, events in bound.items():
        name = f"{processor.__module__}.{processor.__qualname__}"
        table.add_row(name, ", ".join(events) if events else "[dim]none[/dim]")
    console.print(table)
