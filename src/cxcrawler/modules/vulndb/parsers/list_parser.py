"""Listing page extractor (``/exploit/N`` and search result pages)."""

import logging
import re
from datetime import date

from bs4 import BeautifulSoup, Tag

from ..models import Vulnerability, VulnerabilityList
from ..normalize import (
    DEFAULT_ORIGIN,
    absolutize,
    dedup_preserve_order,
    extract_id,
    normalize_risk,
    parse_flexible_date,
)
from ..pagination import mine_pagination
from .base import href_of, load_document, row_cells, table_rows, text_of

logger = logging.getLogger(__name__)

GROUP_DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%b %d, %Y")
ROW_DATE_FORMATS = ("%d.%m.%Y", "%Y-%m-%d", "%Y.%m.%d", "%b %d, %Y")

_CVE_RE = re.compile(r"CVE-\d{4}-\d+", re.IGNORECASE)
_CWE_RE = re.compile(r"CWE-\d+", re.IGNORECASE)
_ROW_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}|\d{1,2}\.\d{1,2}\.\d{4}|\d{4}\.\d{2}\.\d{2}")


class ListPageParser:
    """Extract advisories from a listing page.

    Two layouts are understood. The standard one groups rows under ``thead``
    date headers inside ``table.table-striped``; the search-style one is a
    flat table where every row carries its own date cell.
    """

    def __init__(self, origin: str = DEFAULT_ORIGIN):
        self.origin = origin

    def parse(self, content: str) -> VulnerabilityList:
        soup = load_document(content)
        if self._is_standard_layout(soup):
            logger.debug("Listing page uses the date-grouped layout")
            items = self._parse_standard(soup)
        else:
            logger.debug("Listing page uses the flat search layout")
            items = self._parse_flat(soup)

        paging = mine_pagination(soup)
        return VulnerabilityList(
            items=items,
            current_page=paging.current_page,
            total_pages=paging.total_pages,
        )

    @staticmethod
    def _is_standard_layout(soup: BeautifulSoup) -> bool:
        return soup.select_one("table.table-striped thead th font") is not None

    def _parse_standard(self, soup: BeautifulSoup) -> list[Vulnerability]:
        items: list[Vulnerability] = []
        for table in soup.select("table.table-striped"):
            current_date: date | None = None
            for element in table.find_all(["thead", "tr"]):
                if element.find_parent("table") is not table:
                    continue
                if element.name == "thead":
                    header = text_of(element.select_one("tr > th font"))
                    parsed = parse_flexible_date(header, GROUP_DATE_FORMATS)
                    if parsed is not None:
                        current_date = parsed
                    continue
                if element.find_parent("thead") is not None:
                    continue
                item = self._parse_standard_row(element, current_date)
                if item is not None:
                    items.append(item)
        return items

    def _parse_standard_row(self, row: Tag, current_date: date | None) -> Vulnerability | None:
        cells = row_cells(row)
        if len(cells) < 2:
            return None

        body = cells[1]
        title_link = body.select_one("div.row div.col-md-7 a")
        title = text_of(title_link)
        if not title:
            return None

        url = absolutize(href_of(title_link), self.origin)
        author_link = body.select_one("div.row div.col-md-5 a[href*='/author/']")

        labels = [
            label
            for label in body.select("div.row div.col-md-5 span.label")
            if label.select_one("a[href*='/author/']") is None
        ]
        tags, cve, cwe = _split_tags(labels)

        return Vulnerability(
            date=current_date,
            title=title,
            url=url,
            id=extract_id(url),
            risk_level=normalize_risk(text_of(cells[0].select_one("span.label"))),
            tags=tags,
            cve=cve,
            cwe=cwe,
            is_remote="Remote" in tags,
            is_local="Local" in tags,
            author=text_of(author_link),
            author_url=absolutize(href_of(author_link), self.origin),
        )

    def _parse_flat(self, soup: BeautifulSoup) -> list[Vulnerability]:
        items: list[Vulnerability] = []
        for table in soup.find_all("table"):
            for row in table_rows(table):
                if row.find_parent("thead") is not None or row.find("th") is not None:
                    continue
                item = self._parse_flat_row(row)
                if item is not None:
                    items.append(item)
        return items

    def _parse_flat_row(self, row: Tag) -> Vulnerability | None:
        title_link = row.select_one("a[href*='/issue/']")
        title = text_of(title_link)
        if not title:
            return None

        url = absolutize(href_of(title_link), self.origin)
        author_link = row.select_one("a[href*='/author/']")

        row_date = None
        for cell in row_cells(row):
            match = _ROW_DATE_RE.search(text_of(cell))
            if match:
                row_date = parse_flexible_date(match.group(0), ROW_DATE_FORMATS)
                if row_date is not None:
                    break

        labels = [
            label
            for label in row.select("span.label")[1:]
            if label.select_one("a[href*='/author/']") is None
        ]
        tags, cve, cwe = _split_tags(labels)
        row_text = text_of(row)
        is_remote = "Remote" in tags or bool(re.search(r"\bRemote\b", row_text))
        is_local = "Local" in tags or bool(re.search(r"\bLocal\b", row_text))

        return Vulnerability(
            date=row_date,
            title=title,
            url=url,
            id=extract_id(url),
            risk_level=normalize_risk(text_of(row.select_one("span.label"))),
            tags=tags,
            cve=cve,
            cwe=cwe,
            is_remote=is_remote,
            is_local=is_local,
            author=text_of(author_link),
            author_url=absolutize(href_of(author_link), self.origin),
        )


def _split_tags(labels: list[Tag]) -> tuple[list[str], str, str]:
    """Turn label spans into free-form tags plus promoted CVE/CWE ids."""
    tags: list[str] = []
    cve = ""
    cwe = ""
    for label in labels:
        text = text_of(label)
        if not text:
            continue
        link_target = " ".join(href_of(link) for link in label.find_all("a"))

        cve_match = _CVE_RE.search(text) or _CVE_RE.search(link_target)
        if cve_match:
            cve = cve or cve_match.group(0).upper()
            tags.append("CVE")
            continue

        cwe_match = _CWE_RE.search(text) or _CWE_RE.search(link_target)
        if cwe_match:
            cwe = cwe or cwe_match.group(0).upper()
            tags.append("CWE")
            continue

        tags.append(text)
    return dedup_preserve_order(tags), cve, cwe


def parse_list_page(content: str, origin: str = DEFAULT_ORIGIN) -> VulnerabilityList:
    """Convenience wrapper around :class:`ListPageParser`."""
    return ListPageParser(origin).parse(content)
