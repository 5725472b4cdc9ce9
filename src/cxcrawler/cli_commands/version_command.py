"""Version CLI command."""

from importlib.metadata import PackageNotFoundError, version as pkg_version

from .shared import app, console


@app.command()
def version() -> None:
    """Show the installed cxcrawler version."""
    try:
        current_version = pkg_version("cxcrawler")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"cxcrawler {current_version}")
