"""Shared CLI app objects and output helpers."""

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from cxcrawler.modules.vulndb.errors import CrawlerError
from cxcrawler.modules.vulndb.models import to_dict

app = typer.Typer(
    name="cxcrawler",
    help="Crawl and extract advisories from the cxsecurity vulnerability database",
    no_args_is_help=True,
)
console = Console()

FIELDS_HELP = "Comma-separated fields to keep, or 'all'"


def parse_fields(fields: str | None) -> list[str]:
    """Split a ``--fields`` value; empty or ``all`` means every field."""
    if not fields:
        return []
    names = [name.strip() for name in fields.split(",") if name.strip()]
    return [] if "all" in names else names


def filter_fields(data: dict[str, Any], fields: list[str]) -> dict[str, Any]:
    """Keep only the named keys, at the top level and inside lists of records."""
    if not fields:
        return data
    wanted = set(fields)
    filtered: dict[str, Any] = {}
    for key, value in data.items():
        if key in wanted:
            filtered[key] = value
        elif isinstance(value, list) and value and all(isinstance(item, dict) for item in value):
            narrowed = [{k: v for k, v in item.items() if k in wanted} for item in value]
            if any(narrowed):
                filtered[key] = narrowed
    return filtered


def write_json(data: dict[str, Any], output: Path) -> Path:
    """Write indented JSON, creating parent directories as needed."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return output


def paged_output_path(output: Path, page: int, first_page: int) -> Path:
    """Return ``output`` for the first page and ``<stem>_page<N><suffix>`` after it."""
    if page <= first_page:
        return output
    return output.with_name(f"{output.stem}_page{page}{output.suffix}")


def save_record(record: Any, output: Path | None, fields: list[str] | None = None) -> None:
    if output is None:
        return
    path = write_json(filter_fields(to_dict(record), fields or []), output)
    console.print(f"[green]Saved to {path}[/green]")


def fail(exc: CrawlerError | OSError) -> typer.Exit:
    """Report a crawl failure in red and return the exit to raise."""
    console.print(f"[red]Error: {exc}[/red]")
    return typer.Exit(1)
