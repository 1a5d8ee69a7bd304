"""
Command-line interface for StartGrid.

This module provides the CLI using Typer for starting the StartGrid server
and inspecting stored grids.

Usage:
    startgrid serve --port 8050
    startgrid serve --host 0.0.0.0 --port 8080 --debug
    startgrid show --account default
    startgrid export grid.json
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from startgrid import __version__

app = typer.Typer(
    name="startgrid",
    help="Browser start page built from a grid of link tiles and widgets.",
    add_completion=False,
)
console = Console()


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"StartGrid version: {__version__}")
        raise typer.Exit()


def resolve_db(db_path: Optional[Path]) -> Path:
    return db_path if db_path is not None else Path.cwd() / "startgrid.db"


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """StartGrid - Customizable start page of link and widget cells."""
    pass


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        "-h",
        help="Host address to bind the server.",
    ),
    port: int = typer.Option(
        8050,
        "--port",
        "-p",
        min=1024,
        max=65535,
        help="Port number for the server.",
    ),
    db_path: Optional[Path] = typer.Option(
        None,
        "--db",
        "-d",
        help="Path to SQLite database (default: ./startgrid.db).",
    ),
    account: str = typer.Option(
        "default",
        "--account",
        "-a",
        help="Account whose grid is served.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with hot reloading.",
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't automatically open browser.",
    ),
):
    """
    Start the StartGrid server.

    Examples:
        startgrid serve
        startgrid serve --port 8080
        startgrid serve --host 0.0.0.0 --port 8080 --debug
    """
    import os
    from startgrid.config import Config
    from startgrid.db.schema import init_database

    setup_logging(debug)

    # In debug mode, Flask's reloader spawns a child process.
    # Only show startup messages in the main process (not the reloader).
    is_reloader = os.environ.get("WERKZEUG_RUN_MAIN") == "true"

    if not is_reloader:
        console.print(Panel.fit(
            f"[bold blue]StartGrid[/bold blue] v{__version__}\n"
            f"Your start page as a grid",
            border_style="blue",
        ))

    try:
        config = Config(
            db_path=resolve_db(db_path),
            host=host,
            port=port,
            debug=debug,
            account_id=account,
        )

        if not is_reloader:
            console.print(f"\n[dim]Database:[/dim] {config.db_path}")
            console.print(f"[dim]Account:[/dim] {config.account_id}")

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                progress.add_task("Initializing database...", total=None)
                init_database(config.db_path, config.account_id).close()
            console.print("[green]Database initialized.[/green]")
        else:
            init_database(config.db_path, config.account_id).close()

        url = config.api_base_url
        if not is_reloader:
            console.print(f"\n[bold green]Starting server at {url}[/bold green]")
            console.print("[dim]Press Ctrl+C to stop.[/dim]\n")

        from startgrid.app import create_app
        dash_app = create_app(config)

        # Auto-open browser after short delay (only on first run, not reloader)
        if not no_browser and not is_reloader:
            import webbrowser
            import threading
            threading.Timer(1.5, lambda: webbrowser.open(url)).start()

        try:
            dash_app.run(
                host=host,
                port=port,
                debug=debug,
            )
        finally:
            dash_app.server.config["session_host"].stop()

    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped.[/yellow]")
        raise typer.Exit(0)


@app.command()
def show(
    db_path: Optional[Path] = typer.Option(
        None,
        "--db",
        "-d",
        help="Path to SQLite database (default: ./startgrid.db).",
    ),
    account: str = typer.Option(
        "default",
        "--account",
        "-a",
        help="Account whose grid is shown.",
    ),
):
    """
    Print an account's grid without starting the server.
    """
    from startgrid.db.repository import GridRepository
    from startgrid.layouts.cells import DynamicContent, LinkContent

    db_path = resolve_db(db_path)
    if not db_path.exists():
        console.print(f"[red]Error:[/red] Database not found: {db_path}")
        raise typer.Exit(1)

    grid = GridRepository(db_path).get(account)

    table = Table(title=f"{account}: {grid.col} x {grid.row} grid", border_style="blue")
    table.add_column("Position", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Type")
    table.add_column("Target")

    for cell in grid.cells:
        content = cell.content
        if isinstance(content, LinkContent):
            kind, target = "link", content.link or "[dim](no link)[/dim]"
        elif isinstance(content, DynamicContent):
            kind, target = "dynamic", content.src
        else:
            kind, target = "[dim]empty[/dim]", ""
        table.add_row(f"{cell.x},{cell.y}", f"{cell.w}x{cell.h}", kind, target)

    console.print(table)
    console.print(f"[dim]{len(grid.cells)} cells[/dim]")


@app.command("export")
def export_grid(
    output: Path = typer.Argument(..., help="JSON file to write."),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help="Path to SQLite database."),
    account: str = typer.Option("default", "--account", "-a", help="Account to export."),
):
    """
    Write an account's grid to a JSON file.
    """
    from startgrid.db.repository import GridRepository
    from startgrid.layouts.serializer import save_grid_to_file

    db_path = resolve_db(db_path)
    if not db_path.exists():
        console.print(f"[red]Error:[/red] Database not found: {db_path}")
        raise typer.Exit(1)

    grid = GridRepository(db_path).get(account)
    save_grid_to_file(grid, output)
    console.print(f"[green]Exported {len(grid.cells)} cells to[/green] {output}")


@app.command("import")
def import_grid(
    source: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        help="JSON file holding a grid.",
    ),
    db_path: Optional[Path] = typer.Option(None, "--db", "-d", help="Path to SQLite database."),
    account: str = typer.Option("default", "--account", "-a", help="Account to replace."),
):
    """
    Replace an account's grid with one read from a JSON file.
    """
    import json
    from startgrid.db.repository import GridRepository
    from startgrid.db.schema import init_database
    from startgrid.layouts.serializer import load_grid_from_file

    db_path = resolve_db(db_path)

    try:
        grid = load_grid_from_file(source)
    except (json.JSONDecodeError, ValueError) as e:
        console.print(f"[red]Error:[/red] Invalid grid file: {e}")
        raise typer.Exit(1)

    init_database(db_path, account).close()
    GridRepository(db_path).replace(account, grid)
    console.print(f"[green]Imported {len(grid.cells)} cells for[/green] {account}")


if __name__ == "__main__":
    app()
