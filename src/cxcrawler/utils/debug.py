"""Debug utilities for crawl visibility.

Thread-safe debug state plus rich-formatted logging for console sessions.
"""

import json
import logging
import threading
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

# Thread-local storage for debug state
_debug_state = threading.local()

LOG_FORMAT = "%(name)s: %(message)s"


def set_debug_enabled(enabled: bool) -> None:
    """Set debug mode for the current thread/session."""
    _debug_state.enabled = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled for the current thread/session."""
    return getattr(_debug_state, "enabled", False)


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route the ``cxcrawler`` loggers through a single rich handler.

    Verbose sessions log at DEBUG, everything else at WARNING. Calling this
    again replaces the previous handler instead of stacking a second one.
    """
    set_debug_enabled(verbose)
    logger = logging.getLogger("cxcrawler")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (fetch, parse, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    console = Console(stderr=True)
    console.print(f"[DEBUG:{category}] {message}", style="bold cyan", markup=False)
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                json_str = json.dumps(value, indent=2, default=str)
                console.print(f"  {key}:", style="dim")
                console.print(Syntax(json_str, "json", theme="monokai", line_numbers=False))
            except (TypeError, ValueError):
                console.print(f"  {key}: {value}", style="dim", markup=False)
        elif isinstance(value, str) and len(value) > 100:
            # Truncate long strings
            console.print(f"  {key}: {value[:100]}... ({len(value)} chars)", style="dim", markup=False)
        else:
            console.print(f"  {key}: {value}", style="dim", markup=False)
