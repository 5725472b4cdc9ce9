"""Advisory listing and detail CLI commands."""

from pathlib import Path

import typer

from cxcrawler.modules.vulndb.errors import CrawlerError
from cxcrawler.modules.vulndb.models import VulnerabilityList

from .deps import cli_module
from .render import render_detail, render_list
from .shared import FIELDS_HELP, app, console, fail, parse_fields, save_record


@app.command("exploit")
def exploit(
    id: str = typer.Option("", "--id", help="Advisory id (WLB- prefix optional); empty for the latest list"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    fields: str = typer.Option("all", "--fields", "-f", help=FIELDS_HELP),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not print the result"),
) -> None:
    """Crawl the latest advisory list, or one advisory when --id is given."""
    cli = cli_module()
    try:
        with cli.build_client() as client:
            result = client.crawl_exploit(id)
        save_record(result, output, parse_fields(fields))
    except (CrawlerError, OSError) as exc:
        raise fail(exc) from exc

    if silent:
        return
    if isinstance(result, VulnerabilityList):
        render_list(console, result)
    else:
        render_detail(console, result)


@app.command("detail")
def detail(
    id: str = typer.Option(..., "--id", help="Advisory id, e.g. WLB-2024010001 or 2024010001"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    fields: str = typer.Option("all", "--fields", "-f", help=FIELDS_HELP),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not print the result"),
) -> None:
    """Crawl a single advisory page."""
    cli = cli_module()
    record_id = id if id.startswith("WLB-") else f"WLB-{id}"
    try:
        with cli.build_client() as client:
            record = client.crawl_vulnerability_detail(f"/issue/{record_id}")
        save_record(record, output, parse_fields(fields))
    except (CrawlerError, OSError) as exc:
        raise fail(exc) from exc

    if not silent:
        render_detail(console, record)
