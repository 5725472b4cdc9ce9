"""Advisory detail page extractor (``/issue/WLB-...``)."""

import logging
import re
from datetime import date

from bs4 import BeautifulSoup, Tag

from ..models import Vulnerability
from ..normalize import (
    DEFAULT_ORIGIN,
    absolutize,
    dedup_preserve_order,
    normalize_risk,
    parse_flexible_date,
)
from .base import href_of, load_document, text_of

logger = logging.getLogger(__name__)

DETAIL_DATE_FORMATS = ("%Y.%m.%d", "%Y-%m-%d", "%d.%m.%Y", "%b %d, %Y", "%B %d, %Y")

_CVE_RE = re.compile(r"CVE-\d{4}-\d+")
_CWE_RE = re.compile(r"CWE-\d+")

# Wells whose text contains one of these are mapped onto dedicated fields.
KNOWN_FIELD_LABELS = ("CVE:", "CWE:", "Local:", "Remote:", "Risk:", "Credit:")


class DetailPageParser:
    """Extract one advisory from its detail page."""

    def __init__(self, origin: str = DEFAULT_ORIGIN):
        self.origin = origin

    def parse(self, content: str) -> Vulnerability:
        soup = load_document(content)

        title = text_of(soup.select_one("h4 > b"))
        if not title:
            logger.debug("Primary title selector empty, trying panel heading")
            title = text_of(soup.select_one(".panel-body h4 b"))

        author_link = self._well(soup, "Credit:", "a[href*='author']")

        return Vulnerability(
            date=self._publish_date(soup),
            title=title,
            risk_level=normalize_risk(text_of(self._well(soup, "Risk:", "span.label"))),
            tags=self._other_tags(soup),
            cve=self._match_id(soup, "CVE:", "a[href*='cveshow']", _CVE_RE),
            cwe=self._match_id(soup, "CWE:", "a[href*='cwe']", _CWE_RE),
            is_remote=self._flag(soup, "Remote:"),
            is_local=self._flag(soup, "Local:"),
            author=text_of(author_link),
            author_url=absolutize(href_of(author_link), self.origin),
        )

    @staticmethod
    def _well(soup: BeautifulSoup, label: str, selector: str) -> Tag | None:
        for well in soup.select(f".well-sm:-soup-contains('{label}')"):
            found = well.select_one(selector)
            if found is not None:
                return found
        return None

    def _match_id(self, soup: BeautifulSoup, label: str, selector: str, pattern: re.Pattern[str]) -> str:
        text = text_of(self._well(soup, label, selector))
        if not text:
            return ""
        match = pattern.search(text)
        return match.group(0) if match else text

    @staticmethod
    def _flag(soup: BeautifulSoup, label: str) -> bool:
        for well in soup.select(f".well-sm:-soup-contains('{label}')"):
            if any(text_of(bold) == "Yes" for bold in well.find_all("b")):
                return True
        return False

    @staticmethod
    def _publish_date(soup: BeautifulSoup) -> date | None:
        for candidate in soup.select(".panel-body .row .col-xs-12.col-md-3 .well-sm b"):
            parsed = parse_flexible_date(text_of(candidate), DETAIL_DATE_FORMATS)
            if parsed is not None:
                return parsed
        return None

    @staticmethod
    def _other_tags(soup: BeautifulSoup) -> list[str]:
        tags = []
        for well in soup.select(".well-sm"):
            well_text = well.get_text(" ")
            if any(label in well_text for label in KNOWN_FIELD_LABELS):
                continue
            label_text = " ".join(
                text for text in (text_of(label) for label in well.select("label, span.label")) if text
            )
            if label_text and label_text != "N/A" and ":" not in label_text:
                tags.append(label_text)
        return dedup_preserve_order(tags)


def parse_detail_page(content: str, origin: str = DEFAULT_ORIGIN) -> Vulnerability:
    """Convenience wrapper around :class:`DetailPageParser`."""
    return DetailPageParser(origin).parse(content)
