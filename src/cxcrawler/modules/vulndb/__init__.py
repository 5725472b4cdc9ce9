"""cxsecurity vulnerability database crawling."""

from .errors import ConfigurationError, CrawlerError, EmptyContentError, FetchError
from .models import (
    AffectedSoftware,
    AuthorProfile,
    CveDetail,
    SearchResult,
    SearchVulnerability,
    Vulnerability,
    VulnerabilityList,
    to_dict,
)

__all__ = [
    "AffectedSoftware",
    "AuthorProfile",
    "ConfigurationError",
    "CrawlerError",
    "CveDetail",
    "EmptyContentError",
    "FetchError",
    "SearchResult",
    "SearchVulnerability",
    "VulnDBClient",
    "Vulnerability",
    "VulnerabilityList",
    "to_dict",
]


def __getattr__(name: str):
    # The client pulls in the HTTP layer, which itself imports errors from here.
    if name == "VulnDBClient":
        from .client import VulnDBClient

        return VulnDBClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
