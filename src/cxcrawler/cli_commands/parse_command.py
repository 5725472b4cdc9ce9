"""Offline extraction of saved HTML pages."""

from enum import Enum
from pathlib import Path

import typer

from cxcrawler.modules.vulndb.errors import CrawlerError
from cxcrawler.modules.vulndb.normalize import DEFAULT_ORIGIN
from cxcrawler.modules.vulndb.parsers import (
    parse_author_page,
    parse_cve_page,
    parse_detail_page,
    parse_list_page,
)

from .render import render_author, render_cve, render_detail, render_list
from .shared import FIELDS_HELP, app, console, fail, parse_fields, save_record


class PageKind(str, Enum):
    LIST = "list"
    DETAIL = "detail"
    CVE = "cve"
    AUTHOR = "author"


EXTRACTORS = {
    PageKind.LIST: (parse_list_page, render_list),
    PageKind.DETAIL: (parse_detail_page, render_detail),
    PageKind.CVE: (parse_cve_page, render_cve),
    PageKind.AUTHOR: (parse_author_page, render_author),
}


@app.command("parse")
def parse(
    input: Path = typer.Option(..., "--input", "-i", help="Saved HTML page to extract"),
    kind: PageKind = typer.Option(PageKind.DETAIL, "--kind", "-k", help="Page shape of the input"),
    origin: str = typer.Option(DEFAULT_ORIGIN, "--origin", help="Origin used to absolutize links"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    fields: str = typer.Option("all", "--fields", "-f", help=FIELDS_HELP),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not print the result"),
) -> None:
    """Run an extractor over a local HTML file without fetching anything."""
    extract, render = EXTRACTORS[kind]
    try:
        record = extract(input.read_text(encoding="utf-8", errors="replace"), origin)
        save_record(record, output, parse_fields(fields))
    except (CrawlerError, OSError) as exc:
        raise fail(exc) from exc

    if not silent:
        render(console, record)
