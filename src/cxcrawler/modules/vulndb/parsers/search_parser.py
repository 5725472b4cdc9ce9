"""Keyword search result extractor.

Search pages share the listing layout, so this wraps
:class:`ListPageParser` and reshapes each item. The request parameters
(keyword, sort order, page size) come from the caller, not the document.
"""

from ..models import SearchResult, SearchVulnerability, Vulnerability
from ..normalize import DEFAULT_ORIGIN, extract_id
from .list_parser import ListPageParser

UNKNOWN = "unknown"


class SearchResultParser:
    """Turn a search result page into a :class:`SearchResult`."""

    def __init__(
        self,
        keyword: str,
        sort_order: str = "DESC",
        per_page: int = 10,
        origin: str = DEFAULT_ORIGIN,
    ):
        self.keyword = keyword
        self.sort_order = sort_order
        self.per_page = per_page
        self.list_parser = ListPageParser(origin)

    def parse(self, content: str) -> SearchResult:
        listing = self.list_parser.parse(content)
        return SearchResult(
            keyword=self.keyword,
            current_page=listing.current_page,
            total_pages=listing.total_pages,
            sort_order=self.sort_order,
            per_page=self.per_page,
            vulnerabilities=[to_search_vulnerability(item) for item in listing.items],
        )


def to_search_vulnerability(item: Vulnerability) -> SearchVulnerability:
    """Narrow a full advisory record to the search hit shape."""
    return SearchVulnerability(
        id=item.id or extract_id(item.url) or UNKNOWN,
        title=item.title,
        url=item.url,
        date=item.date.isoformat() if item.date else UNKNOWN,
        risk_level=item.risk_level,
        author=item.author,
        author_url=item.author_url,
    )
