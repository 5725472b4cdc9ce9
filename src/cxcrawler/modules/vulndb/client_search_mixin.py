"""Keyword search for the crawling client."""

from urllib.parse import quote_plus

from .models import SearchResult
from .parsers import SearchResultParser

ALLOWED_PAGE_SIZES = (10, 30)
ALLOWED_SORT_ORDERS = ("ASC", "DESC")
SEARCH_START_DATE = "1999.1.1"


class ClientSearchMixin:
    """Provide site search; expects ``http``, ``origin`` and ``clock``."""

    def search_vulnerabilities(self, keyword: str, page: int = 1) -> SearchResult:
        """Search with the default page size and newest-first ordering."""
        return self.search_vulnerabilities_advanced(keyword, page, 10, "DESC")

    def search_vulnerabilities_advanced(
        self,
        keyword: str,
        page: int = 1,
        per_page: int = 10,
        sort_order: str = "DESC",
    ) -> SearchResult:
        """Search advisories by keyword.

        Args:
            keyword: Free-text query, URL-quoted into the path.
            page: 1-based page number; values below 1 become 1.
            per_page: 10 or 30; anything else becomes 10.
            sort_order: ``ASC`` or ``DESC`` in any case; anything else becomes ``DESC``.

        Returns:
            The hits on the requested page together with the coerced parameters.
        """
        per_page, sort_order, page = normalize_search_params(per_page, sort_order, page)
        path = self.search_path(keyword, page, per_page, sort_order)
        parser = SearchResultParser(keyword, sort_order, per_page, self.origin)
        return parser.parse(self.http.get_page(path))

    def search_path(self, keyword: str, page: int, per_page: int, sort_order: str) -> str:
        today = self.clock()
        end_date = f"{today.year}.{today.month}.{today.day}"
        return (
            f"/search/wlb/{sort_order}/AND/{end_date}.{SEARCH_START_DATE}"
            f"/{page}/{per_page}/{quote_plus(keyword)}/"
        )


def normalize_search_params(per_page: int, sort_order: str, page: int) -> tuple[int, str, int]:
    """Coerce search parameters into the values the site accepts."""
    if per_page not in ALLOWED_PAGE_SIZES:
        per_page = 10
    sort_order = (sort_order or "").upper()
    if sort_order not in ALLOWED_SORT_ORDERS:
        sort_order = "DESC"
    return per_page, sort_order, max(1, page)
