"""HTML extractors for every cxsecurity page shape."""

from .author_parser import AuthorParser, parse_author_page
from .base import Extractor, load_document
from .cve_parser import CveDetailParser, parse_cve_page
from .detail_parser import DetailPageParser, parse_detail_page
from .list_parser import ListPageParser, parse_list_page
from .search_parser import SearchResultParser, to_search_vulnerability

__all__ = [
    "AuthorParser",
    "CveDetailParser",
    "DetailPageParser",
    "Extractor",
    "ListPageParser",
    "SearchResultParser",
    "load_document",
    "parse_author_page",
    "parse_cve_page",
    "parse_detail_page",
    "parse_list_page",
    "to_search_vulnerability",
]
