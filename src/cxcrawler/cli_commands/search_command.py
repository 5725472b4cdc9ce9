"""Keyword search CLI command."""

from pathlib import Path

import typer

from cxcrawler.modules.vulndb.client_search_mixin import normalize_search_params
from cxcrawler.modules.vulndb.errors import CrawlerError

from .deps import cli_module
from .render import render_search
from .shared import app, console, fail, paged_output_path, save_record


@app.command("search")
def search(
    keyword: str = typer.Option(..., "--keyword", "-k", help="Search keyword"),
    page: int = typer.Option(1, "--page", "-p", help="First page to fetch"),
    per_page: int = typer.Option(10, "--per-page", help="Results per page (10 or 30)"),
    sort: str = typer.Option("DESC", "--sort", help="Sort order by date (ASC or DESC)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write each page as JSON"),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not print the results"),
    no_paging: bool = typer.Option(False, "--no-paging", help="Do not prompt for further pages"),
) -> None:
    """Search advisories by keyword, optionally paging through the results."""
    cli = cli_module()

    coerced_per_page, coerced_sort, first_page = normalize_search_params(per_page, sort, page)
    if coerced_per_page != per_page:
        console.print("[yellow]Results per page must be 10 or 30; using 10.[/yellow]")
    if coerced_sort != sort.upper():
        console.print("[yellow]Sort order must be ASC or DESC; using DESC.[/yellow]")

    current = first_page
    try:
        with cli.build_client() as client:
            while True:
                result = client.search_vulnerabilities_advanced(
                    keyword, current, coerced_per_page, coerced_sort
                )
                if output is not None:
                    save_record(result, paged_output_path(output, current, first_page))
                if not silent:
                    render_search(console, result)

                if no_paging or current >= result.total_pages:
                    break
                if not typer.confirm("Show the next page?", default=False):
                    break
                current += 1
    except (CrawlerError, OSError) as exc:
        raise fail(exc) from exc
