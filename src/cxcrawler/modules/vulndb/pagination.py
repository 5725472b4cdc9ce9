"""Recover paging counters from the AngularJS bootstrap scripts."""

import logging
import math
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_TOTAL_ITEMS_RE = re.compile(r"\$scope\.totalItems\s*=\s*(\d+)")
_CURRENT_PAGE_RE = re.compile(r"\$scope\.currentPage\s*=\s*(\d+)")
_PER_PAGE_RE = re.compile(r"\$scope\.perPage\s*=\s*(\d+)")


@dataclass(frozen=True)
class PageInfo:
    """Paging counters mined from a page."""

    current_page: int = 1
    total_pages: int = 1
    total_items: int = 1
    per_page: int = 10


def _first_int(pattern: re.Pattern[str], scripts: list[str]) -> int | None:
    for script in scripts:
        match = pattern.search(script)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                logger.debug("Ignoring oversized paging counter in script")
    return None


def mine_pagination(document: BeautifulSoup | str) -> PageInfo:
    """Scan inline ``<script>`` blocks for paging assignments.

    Each counter is matched independently; anything missing keeps its
    default. ``total_pages`` is only computed when both operands are positive.
    """
    if isinstance(document, str):
        document = BeautifulSoup(document, "html.parser")

    scripts = [script.get_text() for script in document.find_all("script")]

    current_page = _first_int(_CURRENT_PAGE_RE, scripts) or 1
    total_items = _first_int(_TOTAL_ITEMS_RE, scripts)
    per_page = _first_int(_PER_PAGE_RE, scripts)
    total_items = 1 if total_items is None else total_items
    per_page = 10 if per_page is None else per_page

    if total_items > 0 and per_page > 0:
        total_pages = max(1, math.ceil(total_items / per_page))
    else:
        total_pages = 1

    return PageInfo(
        current_page=current_page,
        total_pages=total_pages,
        total_items=total_items,
        per_page=per_page,
    )
