"""Command-line diagnostics for dbtck."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dbtck import __version__
from dbtck.config.resolver import Property, resolve_settings
from dbtck.context import TestContext
from dbtck.testers.base import connection

app = typer.Typer(
    name="dbtck",
    help="Inspect the settings and backend the compatibility kit will use.",
    add_completion=False,
)
console = Console()

_SECRET_MARKERS = ("PASSWORD", "SECRET", "TOKEN")


def _display_value(key: str, value: str) -> str:
    if any(marker in key.upper() for marker in _SECRET_MARKERS):
        return "********" if value else ""
    return value


@app.command()
def version():
    """Show dbtck version."""
    console.print(f"dbtck version {__version__}")


@app.command()
def settings(
    start_dir: Optional[Path] = typer.Option(
        None, "--start-dir", "-d", help="Directory to start the search from"
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Show every setting, not only DBTCK_ ones"
    ),
):
    """Show resolved settings and the files they came from."""
    resolved = resolve_settings(start_dir)

    table = Table(title="Resolved settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")

    known = {prop.path for prop in Property}
    for key in sorted(resolved):
        if not show_all and key not in known and not key.startswith("DBTCK_"):
            continue
        table.add_row(key, _display_value(key, resolved[key]))
    console.print(table)

    console.print("\n[bold]Sources[/bold] (lowest precedence first):")
    for source in resolved.sources:
        console.print(f"  {source}")


@app.command()
def check(
    start_dir: Optional[Path] = typer.Option(
        None, "--start-dir", "-d", help="Directory to start the search from"
    ),
):
    """Build the test context and open one connection."""
    try:
        with TestContext.scoped(resolve_settings(start_dir)) as context:
            tester = context.get_tester()
            console.print(f"Tester:  {type(tester).__name__}")
            console.print(f"Flavor:  {tester.get_flavor().value}")
            console.print(f"Wrapper: {tester.get_wrapper().name}")
            console.print(f"URL:     {tester.get_url()}")
            with connection(tester):
                pass
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print("[green]✓[/green] Connection OK")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
