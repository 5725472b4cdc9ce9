"""HTTP fetching for cxcrawler."""

from .client import ClientSettings, PageClient
from .headers import DEFAULT_HEADERS, DEFAULT_USER_AGENT, merge_headers

__all__ = [
    "ClientSettings",
    "DEFAULT_HEADERS",
    "DEFAULT_USER_AGENT",
    "PageClient",
    "merge_headers",
]
