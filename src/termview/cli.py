"""CLI implementation for termview."""

import asyncio
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from . import load, load_sync
from .catalog import DEFAULT_FILE, DEFAULT_VERSION, VERSIONS, build_locator, file_name_from_locator, search_files
from .core.model import LoadResult
from .core.util import result_asdict
from .io import close_global_client, is_remote
from .io.base import DEFAULT_RANGE_END
from .pipeline import LoadPolicy, ROW_CAP
from .view import column_headers, filter_rows, paginate

app = typer.Typer(add_completion=False, help="Browse Tuva terminology files from the public bucket.")


def resolve_locator(source: str, version: str) -> str:
    """URLs and existing paths pass through; anything else is a catalog file name."""
    if is_remote(source) or Path(source).exists():
        return source
    return build_locator(source, version)


async def _load_async(locator: str, policy: LoadPolicy) -> LoadResult:
    try:
        return await load(locator, policy=policy)
    finally:
        await close_global_client()


@app.command("list")
def list_files(
    search: str = typer.Option("", "--search", "-s", help="Only names containing this text"),
    version: str = typer.Option(DEFAULT_VERSION, "--version", "-v", help="Terminology version"),
    urls: bool = typer.Option(False, "--urls", help="Print full URLs instead of names"),
):
    """List the known terminology files."""
    for name in search_files(search):
        typer.echo(build_locator(name, version) if urls else name)


@app.command("url")
def url(
    name: str = typer.Argument(..., help="Catalog file name"),
    version: str = typer.Option(DEFAULT_VERSION, "--version", "-v", help="Terminology version"),
):
    """Print the download URL for a file."""
    try:
        typer.echo(build_locator(name, version))
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)


@app.command("versions")
def versions():
    """List the known terminology versions."""
    for v in VERSIONS:
        typer.echo(f"{v}{' (default)' if v == DEFAULT_VERSION else ''}")


@app.command("show")
def show(
    source: str = typer.Argument(DEFAULT_FILE, help="Catalog file name, URL or local path"),
    version: str = typer.Option(DEFAULT_VERSION, "--version", "-v", help="Terminology version"),
    filter_term: str = typer.Option("", "--filter", "-f", help="Keep rows where any field contains this text"),
    page: int = typer.Option(1, "--page", min=1, help="Page to print (1-based)"),
    page_size: int = typer.Option(100, "--page-size", min=1, help="Rows per page"),
    as_csv: bool = typer.Option(False, "--csv", help="Print the page as CSV instead of JSON"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    sync: bool = typer.Option(False, "--sync", help="Force synchronous I/O"),
    row_cap: int = typer.Option(ROW_CAP, "--row-cap", min=1, help="Row cap for oversized files"),
    range_end: int = typer.Option(DEFAULT_RANGE_END, "--range-end", min=0, help="Last byte of the fallback window"),
    verbose: bool = typer.Option(False, "--verbose", help="Log pipeline progress to stderr"),
):
    """Load one file and print a page of its rows."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        locator = resolve_locator(source, version)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    policy = LoadPolicy(row_cap=row_cap, byte_range=(0, range_end))
    if sync:
        res = load_sync(locator, policy=policy)
    else:
        res = asyncio.run(_load_async(locator, policy))

    page_rows = []
    total_pages = 1
    if res.outcome is not None:
        matched = filter_rows(res.outcome.rows, filter_term)
        page_rows, total_pages = paginate(matched, page, page_size)

    # open output sink
    sink = open(output, "w", encoding="utf-8", newline="") if output else sys.stdout
    try:
        if not res.success:
            json.dump(result_asdict(res), sink, indent=2)
            sink.write("\n")
        elif as_csv:
            writer = csv.writer(sink)
            writer.writerow(column_headers(res.outcome.column_count))
            writer.writerows(page_rows)
        else:
            sel_fields = set(fields.split(",")) if fields else None
            obj = result_asdict(res, fields=sel_fields, rows=page_rows)
            obj.update({"page": min(page, total_pages), "total_pages": total_pages})
            json.dump(obj, sink, indent=2)
            sink.write("\n")
    finally:
        if output:
            sink.close()

    if res.is_partial:
        typer.echo(f"Note: showing partial data; download {file_name_from_locator(locator)} "
                   f"for the complete set: {locator}", err=True)
    if not res.success:
        typer.echo(f"Error: {res.error}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
