"""shascan CLI — entry-point for document ID discovery.

Usage:
    python cli/main.py --help

Commands:
    run   → render the target page in a headless browser, then scan its bundles
    scan  → scan the bundles referenced by a saved HTML file (no browser)
    show  → print the last persisted record
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from shascan.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from dataclasses import replace
from typing import Optional

import typer

from cli.rendering import render_record
from shascan.config import Settings, settings
from shascan.pipeline import collect_document_ids
from shascan.scraper.browser import PageLoadError, load_root_html

app = typer.Typer(
    name="shascan",
    help="Discover persisted-query document IDs in a web app's JS bundles.",
    no_args_is_help=True,
)


def _resolve_settings(
    output: Optional[Path] = None,
    mode: Optional[str] = None,
    debug: Optional[bool] = None,
    url: Optional[str] = None,
) -> Settings:
    """Return a copy of the global settings with CLI overrides applied."""
    overrides: dict = {}
    if output is not None:
        overrides["output_path"] = output
    if mode is not None:
        overrides["fetch_mode"] = mode
    if debug is not None:
        overrides["debug"] = debug
    if url is not None:
        overrides["target_url"] = url
    return replace(settings, **overrides)


def _run_pipeline(html: str, cfg: Settings) -> None:
    try:
        result = collect_document_ids(html, cfg)
    except ValueError as exc:
        typer.echo(f"[shascan] {exc}")
        raise typer.Exit(1)

    if result.record is None:
        typer.echo("[shascan] ✗ No JS files found; page shape changed or request blocked.")
    elif not result.ok:
        typer.echo("[shascan] ✗ No SHA resolved and no previous values to fall back on.")
    else:
        typer.echo(f"[shascan] ✅ Done ({result.link_count} JS file(s) considered).")
    raise typer.Exit(result.exit_code)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@app.command("run")
def run(
    url: Optional[str] = typer.Option(None, help="Page to render (default: SHASCAN_TARGET_URL)."),
    output: Optional[Path] = typer.Option(None, help="Record file to read and write."),
    mode: Optional[str] = typer.Option(None, help="Fetch mode: sequential | concurrent."),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Dump page HTML."),
) -> None:
    """Render the target page, scan its JS bundles and persist the SHAs."""
    cfg = _resolve_settings(output=output, mode=mode, debug=debug, url=url)
    try:
        html = load_root_html(cfg)
    except PageLoadError as exc:
        typer.echo(f"[shascan] ✗ {exc}")
        raise typer.Exit(1)
    _run_pipeline(html, cfg)


@app.command("scan")
def scan_html(
    html: Path = typer.Option(..., "--html", exists=True, dir_okay=False, help="Saved HTML page."),
    output: Optional[Path] = typer.Option(None, help="Record file to read and write."),
    mode: Optional[str] = typer.Option(None, help="Fetch mode: sequential | concurrent."),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Verbose dumps."),
) -> None:
    """Scan the JS bundles referenced by a saved HTML page."""
    cfg = _resolve_settings(output=output, mode=mode, debug=debug)
    _run_pipeline(html.read_text(encoding="utf-8"), cfg)


@app.command("show")
def show(
    output: Optional[Path] = typer.Option(None, help="Record file to print."),
) -> None:
    """Print the last persisted record."""
    path = output or settings.output_path
    if not path.exists():
        typer.echo(f"[show] No record at {path}")
        raise typer.Exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"[show] Unreadable record {path}: {exc}")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        typer.echo(f"[show] Unreadable record {path}: not a JSON object")
        raise typer.Exit(1)
    typer.echo(f"Record {path}:")
    typer.echo(render_record(data))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
