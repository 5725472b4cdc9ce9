"""Author profile CLI command."""

from pathlib import Path

import typer

from cxcrawler.modules.vulndb.errors import CrawlerError

from .deps import cli_module
from .render import render_author
from .shared import FIELDS_HELP, app, console, fail, parse_fields, save_record


@app.command("author")
def author(
    id: str = typer.Option(..., "--id", help="Author id as it appears in /author/<id>/"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result as JSON"),
    fields: str = typer.Option("all", "--fields", "-f", help=FIELDS_HELP),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not print the result"),
) -> None:
    """Crawl an author profile and the advisories listed on it."""
    cli = cli_module()
    try:
        with cli.build_client() as client:
            profile = client.crawl_author(id)
        save_record(profile, output, parse_fields(fields))
    except (CrawlerError, OSError) as exc:
        raise fail(exc) from exc

    if not silent:
        render_author(console, profile)
