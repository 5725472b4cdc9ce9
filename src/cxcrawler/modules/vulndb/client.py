"""Primary cxsecurity crawling client."""

from collections.abc import Callable
from datetime import date

from cxcrawler.tools.http.client import ClientSettings, PageClient

from .client_detail_mixin import ClientDetailMixin
from .client_search_mixin import ClientSearchMixin
from .models import VulnerabilityList
from .normalize import DEFAULT_ORIGIN
from .parsers import ListPageParser


class VulnDBClient(ClientDetailMixin, ClientSearchMixin):
    """Fetch cxsecurity pages and turn them into records.

    Fetch and extraction errors propagate unchanged; nothing is wrapped.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        http: PageClient | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.http = http or PageClient(settings)
        self.clock = clock

    @property
    def origin(self) -> str:
        return self.http.base_url or DEFAULT_ORIGIN

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.http.close()

    def crawl_page(self, path: str = "/exploit/1") -> VulnerabilityList:
        """Fetch and extract one advisory listing page."""
        return ListPageParser(self.origin).parse(self.http.get_page(path))
