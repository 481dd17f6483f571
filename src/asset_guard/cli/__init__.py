"""CLI package for asset-guard."""

import typer

from asset_guard.cli import check_cmd, config_cmd, processors_cmd

app = typer.Typer(
    name="asset-guard",
    help="Inspect the asset modification pipeline",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config", help="Configuration management")

app.command(name="check", help="Report which assets are not open for edit")(check_cmd.check)
app.command(name="processors", help="List discovered asset modification processors")(processors_cmd.processors)


@app.command()
def version():
    """Show version information."""
    from asset_guard import __version__
    typer.echo(f"asset-guard {__version__}")


if __name__ == "__main__":
    app()
