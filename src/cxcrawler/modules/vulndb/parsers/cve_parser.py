"""CVE detail page extractor (``/cveshow/CVE-.../``)."""

import logging
import re
from datetime import date

from bs4 import BeautifulSoup, Tag

from ..models import AffectedSoftware, CveDetail, Vulnerability
from ..normalize import (
    DEFAULT_ORIGIN,
    absolutize,
    extract_id,
    extract_score,
    normalize_risk,
    parse_flexible_date,
)
from .base import href_of, innermost, load_document, next_row, row_cells, table_rows, text_of

logger = logging.getLogger(__name__)

RELATED_DATE_FORMATS = ("%d.%m.%Y", "%Y-%m-%d")

_PUBLISHED_RE = re.compile(r"Published:\s*(\d{4}-\d{2}-\d{2})")
_MODIFIED_RE = re.compile(r"Modified:\s*(\d{4}-\d{2}-\d{2})")
_WINDOW_OPEN_RE = re.compile(r"window\.open\('([^']*)'")

ATTRIBUTE_FIELDS = {
    "Exploit range": "exploit_range",
    "Attack complexity": "attack_complexity",
    "Authentication": "authentication",
    "Confidentiality impact": "confidentiality_impact",
    "Integrity impact": "integrity_impact",
    "Availability impact": "availability_impact",
}


class CveDetailParser:
    """Extract scores, attributes and cross references from a CVE page."""

    def __init__(self, origin: str = DEFAULT_ORIGIN):
        self.origin = origin

    def parse(self, content: str) -> CveDetail:
        soup = load_document(content)
        published, modified = self._dates(soup)
        base, impact, exploit = self._scores(soup)
        attributes = self._attributes(soup)

        type_label = next(iter(innermost(soup, "b:-soup-contains('Type:')")), None)
        cwe_link = type_label.parent.select_one("a[href*='/cwe/']") if type_label else None

        return CveDetail(
            cve_id=text_of(soup.select_one("h1 strong")),
            published=published,
            modified=modified,
            description=text_of(self._cell_after_label(soup, "Description:", "td h6")),
            cwe_type=text_of(cwe_link),
            cvss_base_score=base,
            cvss_impact_score=impact,
            cvss_exploit_score=exploit,
            affected_software=self._affected_software(soup),
            references=self._references(soup),
            related_vulnerabilities=self._related(soup),
            **{name: attributes.get(label, "") for label, name in ATTRIBUTE_FIELDS.items()},
        )

    @staticmethod
    def _dates(soup: BeautifulSoup) -> tuple[date | None, date | None]:
        published = modified = None
        for label in soup.select("center > b"):
            text = text_of(label)
            parent_text = text_of(label.parent)
            if "Published:" in text and published is None:
                match = _PUBLISHED_RE.search(parent_text)
                if match:
                    published = parse_flexible_date(match.group(1), ("%Y-%m-%d",))
            elif "Modified:" in text and modified is None:
                match = _MODIFIED_RE.search(parent_text)
                if match:
                    modified = parse_flexible_date(match.group(1), ("%Y-%m-%d",))
        return published, modified

    @staticmethod
    def _cell_after_label(soup: BeautifulSoup, label: str, selector: str) -> Tag | None:
        for cell in innermost(soup, f"td:-soup-contains('{label}')"):
            row = next_row(cell.find_parent("tr"))
            if row is not None:
                found = row.select_one(selector)
                if found is not None:
                    return found
        return None

    @staticmethod
    def _scores(soup: BeautifulSoup) -> tuple[float, float, float]:
        for label in innermost(soup, "b:-soup-contains('CVSS Base Score')"):
            table = label.find_parent("table")
            if table is None:
                continue
            rows = table_rows(table)
            if len(rows) < 2:
                continue
            cells = row_cells(rows[1])
            if len(cells) < 3:
                continue
            return tuple(extract_score(text_of(cell.select_one("span.label"))) for cell in cells[:3])
        return 0.0, 0.0, 0.0

    @staticmethod
    def _attributes(soup: BeautifulSoup) -> dict[str, str]:
        """Read the two header/value row pairs of the attribute table."""
        values: dict[str, str] = {}
        label = next(iter(innermost(soup, "b:-soup-contains('Exploit range')")), None)
        table = label.find_parent("table") if label else None
        if table is None:
            return values

        rows = table_rows(table)
        for header_idx in (0, 2):
            if header_idx + 1 >= len(rows):
                break
            headers = [text_of(b) for b in rows[header_idx].select("td b")]
            cells = rows[header_idx + 1].select("td h6")
            for header, cell in zip(headers, cells):
                values[header] = text_of(cell)
        return values

    def _affected_software(self, soup: BeautifulSoup) -> list[AffectedSoftware]:
        table = soup.select_one("table.table-striped:has(th:-soup-contains('Affected software'))")
        if table is None:
            return []

        software = []
        for row in table_rows(table):
            links = row.select("td a")
            if len(links) < 2:
                continue
            vendor, product = links[0], links[1]
            if not text_of(vendor) or not text_of(product):
                continue
            software.append(
                AffectedSoftware(
                    vendor_name=text_of(vendor),
                    vendor_url=absolutize(href_of(vendor), self.origin),
                    product_name=text_of(product),
                    product_url=absolutize(href_of(product), self.origin),
                )
            )
        return software

    @staticmethod
    def _references(soup: BeautifulSoup) -> list[str]:
        references = []
        for cell in innermost(soup, "td:-soup-contains('References:')"):
            row = next_row(cell.find_parent("tr"))
            if row is None:
                continue
            for div in row.select("td div[onclick]"):
                match = _WINDOW_OPEN_RE.search(div.get("onclick", ""))
                if not match:
                    continue
                link = match.group(1).strip()
                if link.startswith("http"):
                    references.append(link)
            break
        return references

    def _related(self, soup: BeautifulSoup) -> list[Vulnerability]:
        marker = next(
            iter(innermost(soup, "td > center:-soup-contains('See advisories in our WLB2 database')")),
            None,
        )
        container = marker.find_parent("td") if marker else None
        table = container.find("table") if container else None
        if table is None:
            return []

        related = []
        for row in table_rows(table)[1:]:
            cells = row_cells(row)
            if len(cells) < 4:
                continue
            title_link = cells[1].find("a")
            title = text_of(title_link)
            if not title:
                continue
            url = absolutize(href_of(title_link), self.origin)
            author_link = cells[2].find("a")
            related.append(
                Vulnerability(
                    date=parse_flexible_date(text_of(cells[3]), RELATED_DATE_FORMATS),
                    title=title,
                    url=url,
                    id=extract_id(url),
                    risk_level=normalize_risk(text_of(cells[0].select_one("span.label"))),
                    author=text_of(cells[2]),
                    author_url=absolutize(href_of(author_link), self.origin),
                )
            )
        if not related:
            logger.debug("No related advisories found on CVE page")
        return related


def parse_cve_page(content: str, origin: str = DEFAULT_ORIGIN) -> CveDetail:
    """Convenience wrapper around :class:`CveDetailParser`."""
    return CveDetailParser(origin).parse(content)
