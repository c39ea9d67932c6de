import json
import subprocess
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from book import Book
from config import settings, setup_logging
from database import initialize_database
from library import Library

console = Console()

app = typer.Typer(help="Bookstore CLI")


def print_books(books: List[Book], mode: str = "plain") -> None:
    """Print books in the requested output mode.
    - plain: 'ID - Title by Author (Price)' lines, or 'No books in library.'
    - json: JSON array of records
    - rich: Rich table
    """
    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Price", justify="right")
        for b in books:
            table.add_row(str(b.id), b.title, b.author, f"{b.price:.2f}")
        console.print(table)
    else:
        for b in books:
            print(f"{b.id} - {b.title} by {b.author} ({b.price:.2f})")


@app.callback()
def _global_options(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """Global options for the CLI."""
    setup_logging(log_level or settings.log_level)


@app.command("init-db")
def cli_init_db():
    """Create the books table in the configured database."""
    initialize_database(settings.database_file)
    print(f"Database initialized at {settings.database_file}")


@app.command("list")
def cli_list(
    output: str = typer.Option("plain", "--output", "-o", help="Output format: plain | json | rich"),
):
    """List all stored books."""
    output = output.lower().strip()
    if output not in {"plain", "json", "rich"}:
        console.print(f"[bold red]Unknown output format: {output}[/]")
        raise typer.Exit(code=2)
    lib = Library(db_file=settings.database_file)
    print_books(lib.fetch_books(), output)


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default: API_PORT)"),
):
    """Start the HTTP API with uvicorn."""
    host = host or settings.api_host
    port = port or settings.api_port
    print(f"Starting API on http://{host}:{port}/")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
        "--log-level", settings.log_level.lower(),
    ]
    try:
        subprocess.run(args, check=False)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    app()
