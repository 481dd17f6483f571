"""Config subcommand group for configuration management."""

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel

from asset_guard.config import get_settings

app = typer.Typer(help="Configuration management")
console = Console()


@app.command()
def show(
    config: Path | None = typer.Option(None, "--config", "-c", help="JSON config file"),
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON instead of formatted panel"),
):
    """Show the effective configuration (defaults, file and environment merged)."""
    try:
        settings = get_settings(config) if config else get_settings(_force_reload=True)
    except (ValidationError, json.JSONDecodeError) as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(code=1)

    data = json.dumps(settings.model_dump(), indent=2)
    if json_output:
        typer.echo(data)
    else:
        title = f"Configuration: {config}" if config else "Configuration"
        console.print(Panel(JSON(data), title=title, border_style="cyan"))


@app.command()
def validate(
    config: Path = typer.Argument(..., help="JSON config file to validate"),
):
    """Validate a configuration file."""
    if not config.exists():
        console.print(f"[yellow]Config file not found:[/yellow] {config}")
        raise typer.Exit(code=1)

    try:
        settings = get_settings(config)
    except ValidationError as e:
        console.print("[red]Configuration validation failed:[/red]")
        for error in e.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            console.print(f"  [yellow]{loc}:[/yellow] {error['msg']}")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in config file:[/red] {e}")
        raise typer.Exit(code=1)

    console.print("[green]Configuration is valid[/green]")
    console.print(f"[dim]Backend: {settings.version_control.backend}[/dim]")
    console.print(f"[dim]Processor modules: {', '.join(settings.processors.modules) or 'none'}[/dim]")
