"""Drupal modules CLI — entry-point for local use of the lookup pipeline.

Usage:
    python cli/main.py --help

Commands:
    serve   → run the MCP server on stdio
    info    → fetch a module page from drupal.org and print the record
    parse   → extract a record from a saved project page (no network)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from drupal_modules.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

from drupal_modules.config import settings
from drupal_modules.pipeline import fetch_module_info, render_record
from drupal_modules.scraper import ModuleFetchError, ProjectPage, build_project_url
from drupal_modules.scraper.extractor import extract_module_record

app = typer.Typer(
    name="drupal-modules",
    help="Drupal module lookup CLI.",
    no_args_is_help=True,
)


@app.command("serve")
def serve(
    log_level: Optional[str] = typer.Option(None, help="Logging level (default from LOG_LEVEL)."),
) -> None:
    """Run the MCP server on stdin/stdout."""
    from drupal_modules.server import main as run_server

    run_server(log_level)


@app.command("info")
def info(
    module: str = typer.Option(..., help="Machine name of the Drupal module."),
    timeout: float = typer.Option(settings.request_timeout, help="Request timeout in seconds."),
) -> None:
    """Fetch a module's drupal.org page and print the extracted record as JSON."""
    try:
        record = asyncio.run(fetch_module_info(module, timeout=timeout))
    except ModuleFetchError as exc:
        typer.echo(f"[info] Failed to fetch module info: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(render_record(record))


@app.command("parse")
def parse(
    file: Path = typer.Option(..., exists=True, dir_okay=False, help="Saved project page HTML."),
    module: str = typer.Option(..., help="Machine name the page belongs to."),
) -> None:
    """Extract a record from a saved project page without touching the network."""
    page = ProjectPage(
        url=build_project_url(module),
        html=file.read_text(encoding="utf-8"),
        status_code=200,
    )
    typer.echo(render_record(extract_module_record(page)))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
