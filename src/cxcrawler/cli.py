"""cxcrawler CLI - crawl the cxsecurity vulnerability database."""

import typer

from cxcrawler.cli_commands import (  # noqa: F401  (registers commands)
    author_command,
    cve_command,
    exploit_command,
    parse_command,
    search_command,
    version_command,
)
from cxcrawler.cli_commands.shared import app, console
from cxcrawler.config import get_verbose, load_client_settings
from cxcrawler.modules.vulndb.client import VulnDBClient
from cxcrawler.utils.debug import configure_logging, debug_print

__all__ = ["app", "build_client", "console", "main"]


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Crawl and extract advisories from the cxsecurity vulnerability database."""
    configure_logging(verbose or get_verbose())


def build_client() -> VulnDBClient:
    """Create a client from the layered configuration."""
    settings = load_client_settings()
    debug_print(
        "config",
        "Client settings",
        base_url=settings.base_url,
        timeout=settings.timeout,
        proxy=settings.proxy,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )
    return VulnDBClient(settings)


def main():
    """Entry point for the CLI."""
    app()
