"""CVE detail CLI command."""

from pathlib import Path

import typer

from cxcrawler.modules.vulndb.errors import CrawlerError

from .deps import cli_module
from .render import render_cve
from .shared import FIELDS_HELP, app, console, fail, parse_fields, save_record


@app.command("cve")
def cve(
    id: str = typer.Option(..., "--id", help="CVE id, e.g. CVE-2021-44228 or 2021-44228"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    fields: str = typer.Option("all", "--fields", "-f", help=FIELDS_HELP),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not print the result"),
) -> None:
    """Crawl the CVE page for a CVE id."""
    cli = cli_module()
    try:
        with cli.build_client() as client:
            record = client.crawl_cve_detail(id)
        save_record(record, output, parse_fields(fields))
    except (CrawlerError, OSError) as exc:
        raise fail(exc) from exc

    if not silent:
        render_cve(console, record)
