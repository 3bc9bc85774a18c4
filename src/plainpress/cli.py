"""Command line interface for plainpress."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from plainpress.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from plainpress.errors import PlainpressError
from plainpress.index.collection import parse_tree
from plainpress.ingestion.entry_loader import parse_one
from plainpress.web.app import app as web_app


console = Console()
app = typer.Typer(help="plainpress - render a tree of plain-text entries")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(config_path: Path) -> AppConfig:
    try:
        return load_config(config_path)
    except PlainpressError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def show(
    file: Path = typer.Argument(..., help="Entry file to parse."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Parse a single entry and print it."""
    _setup_logging(verbose)
    try:
        document = parse_one(file)
    except PlainpressError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(f"[bold]{escape(document.title)}[/bold]")
    if document.author is not None:
        console.print(f"Author: {escape(document.author)}")
    if document.tags:
        console.print(f"Tags: {escape(', '.join(document.tags))}")
    console.print(f"Created: {document.created_at.isoformat()}")
    console.print()
    console.print(document.body, markup=False, highlight=False)


@app.command("list")
def list_entries(
    root: Optional[Path] = typer.Argument(None, help="Directory to scan (defaults to datadir)."),
    summary: Optional[bool] = typer.Option(
        None, "--summary/--no-summary", help="Summarize bodies (defaults to useSummary)."
    ),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Config JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the entries found under a directory."""
    _setup_logging(verbose)
    config = _load(config_path)
    target = root if root is not None else config.resolve_content_root(Path.cwd())
    use_summary = config.use_summary if summary is None else summary

    try:
        collection = parse_tree(target, use_summary)
    except PlainpressError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    if collection is None:
        console.print("[yellow]No entries found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Id")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Tags")
    table.add_column("Created")
    table.add_column("Body")

    for document in collection:
        snippet = document.body.replace("\n", " ")
        table.add_row(
            document.identifier or "",
            escape(document.title),
            escape(document.author or ""),
            escape(", ".join(document.tags)),
            document.created_at.isoformat(),
            escape(snippet[:80]),
        )

    console.print(table)


@app.command()
def serve(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Config JSON file"),
    host: Optional[str] = typer.Option(None, help="Host interface (defaults to config)"),
    port: Optional[int] = typer.Option(None, help="Server port (defaults to config)"),
) -> None:
    """Start the HTTP adapter."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    config = _load(config_path)
    bind_host = host or config.host
    bind_port = port or config.port
    web_app.state.config_path = config_path

    console.print(
        f"Serving {config.resolve_content_root(Path.cwd())} on http://{bind_host}:{bind_port}"
    )
    uvicorn.run(
        web_app,
        host=bind_host,
        port=bind_port,
        reload=False,
        log_level="info",
    )
