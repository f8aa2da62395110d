import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import config
from ..domain.errors import ConfigError

app = typer.Typer()
console = Console()


@app.command("set")
def set_value(key: str, value: str):
    """store a configuration value."""
    try:
        config.set_value(key, value)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {key} set")


@app.command("get")
def get_value(key: str):
    """print one configuration value (environment wins over the file)."""
    value = config.get_value(key)
    if value is None:
        console.print(f"[yellow]{key} is not set.[/yellow]")
        raise typer.Exit(1)
    console.print(value)


@app.command("list")
def list_values():
    """list effective configuration."""
    try:
        settings = config.load_settings()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    for name, value in settings.model_dump(mode="json").items():
        if name == "token" and value:
            value = "********"
        table.add_row(name, "" if value is None else str(value))

    console.print(table)
    console.print(f"\n[dim]Config file: {config.CONFIG_FILE}[/dim]")


if __name__ == "__main__":
    app()
