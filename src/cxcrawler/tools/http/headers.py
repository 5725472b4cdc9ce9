"""Baseline request headers sent with every page fetch."""

from collections.abc import Mapping

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

DEFAULT_HEADERS: Mapping[str, str] = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


def merge_headers(overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Merge caller overrides onto the baseline; overrides win.

    Header names compare case-insensitively, so ``user-agent`` replaces the
    default ``User-Agent`` instead of being sent alongside it.
    """
    merged = dict(DEFAULT_HEADERS)
    for key, value in (overrides or {}).items():
        for existing in [name for name in merged if name.lower() == key.lower()]:
            del merged[existing]
        merged[key] = value
    return merged
