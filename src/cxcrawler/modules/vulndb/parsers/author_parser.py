"""Author profile page extractor (``/author/<id>/<page>/``)."""

import logging
import re
from collections.abc import Mapping

from bs4 import BeautifulSoup, Tag

from ..countries import COUNTRY_NAMES, country_name
from ..models import AuthorProfile, Vulnerability
from ..normalize import (
    DEFAULT_ORIGIN,
    absolutize,
    clean_text,
    dedup_preserve_order,
    extract_id,
    normalize_risk,
    parse_flexible_date,
)
from ..pagination import mine_pagination
from .base import href_of, load_document, text_of

logger = logging.getLogger(__name__)

AUTHOR_DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")

_FLAG_RE = re.compile(r"/flags?/([a-zA-Z]{2})\.(?:png|gif|jpe?g|svg)", re.IGNORECASE)
_BEST_RE = re.compile(r"/best/([^/]+)/")
_REPORTED_RE = re.compile(r"Reported research:\D*(\d+)", re.IGNORECASE)
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}|\d{1,2}\.\d{1,2}\.\d{4}")

# Contact fields and the label prefixes that introduce them.
CONTACT_LABELS = {
    "twitter": ("Twitter:",),
    "website": ("Website:", "WWW:", "Homepage:"),
    "zone_h": ("Zone-H:", "Zone-h:", "Zone H:"),
    "description": ("Description:", "About:"),
}
_LABEL_TAGS = ["b", "strong", "label", "dt", "th", "td", "span", "li", "p", "div"]


class AuthorParser:
    """Extract a contributor profile and the advisories listed on it.

    The country table is injected so callers can extend or replace it.
    """

    def __init__(
        self,
        origin: str = DEFAULT_ORIGIN,
        countries: Mapping[str, str] = COUNTRY_NAMES,
    ):
        self.origin = origin
        self.countries = countries

    def parse(self, content: str) -> AuthorProfile:
        soup = load_document(content)

        name = ""
        heading = soup.select_one("h1:-soup-contains('Author:')")
        if heading is not None:
            name = clean_text(text_of(heading).replace("Author:", "", 1))

        country_code = self._country_code(soup)
        contacts = self._contacts(soup)
        paging = mine_pagination(soup)

        return AuthorProfile(
            id=name,
            name=name,
            country=country_name(country_code, self.countries),
            country_code=country_code,
            reported_count=self._reported_count(soup),
            twitter=contacts.get("twitter", ""),
            website=contacts.get("website", ""),
            zone_h=contacts.get("zone_h", ""),
            description=contacts.get("description", ""),
            vulnerabilities=self._vulnerabilities(soup, name),
            current_page=paging.current_page,
            total_pages=paging.total_pages,
        )

    @staticmethod
    def _country_code(soup: BeautifulSoup) -> str:
        for image in soup.find_all("img", src=True):
            match = _FLAG_RE.search(image["src"])
            if match:
                return match.group(1).upper()

        link = soup.select_one("a[href*='/best/']")
        if link is not None:
            match = _BEST_RE.search(href_of(link))
            if match:
                return match.group(1).upper()
        return ""

    @staticmethod
    def _reported_count(soup: BeautifulSoup) -> int:
        heading = soup.select_one("h4:-soup-contains('Reported research:')")
        if heading is None:
            return 0
        match = _REPORTED_RE.search(text_of(heading))
        if not match:
            return 0
        try:
            return int(match.group(1))
        except ValueError:
            logger.debug("Reported research count is too large to read")
            return 0

    def _contacts(self, soup: BeautifulSoup) -> dict[str, str]:
        contacts: dict[str, str] = {}
        for element in soup.find_all(_LABEL_TAGS):
            text = text_of(element)
            for key, prefixes in CONTACT_LABELS.items():
                if key in contacts:
                    continue
                prefix = next((p for p in prefixes if text.lower().startswith(p.lower())), None)
                if prefix is None:
                    continue
                # Skip containers whose label lives in a child element.
                if any(text_of(child).lower().startswith(prefix.lower()) for child in element.find_all(_LABEL_TAGS)):
                    continue
                value = self._contact_value(element, prefix, text[len(prefix):].strip(), key)
                if value:
                    contacts[key] = value
        return contacts

    def _contact_value(self, element: Tag, prefix: str, remainder: str, key: str) -> str:
        """Resolve the value that follows a contact label.

        Links win for the URL-like fields, then the text after the label,
        then the text of the enclosing line, then the next sibling element.
        """
        sibling = element.find_next_sibling()
        parent = element.parent
        parent_text = text_of(parent) if isinstance(parent, Tag) else ""
        owns_line = parent_text.lower().startswith(prefix.lower())

        if key != "description":
            link = element.find("a", href=True)
            if link is None and sibling is not None and not remainder:
                link = sibling if sibling.name == "a" else sibling.find("a", href=True)
            if link is None and owns_line:
                link = parent.find("a", href=True)
            if link is not None and href_of(link):
                return absolutize(href_of(link), self.origin)

        if remainder:
            return remainder
        if owns_line and parent_text[len(prefix):].strip():
            return parent_text[len(prefix):].strip()
        return text_of(sibling)

    def _vulnerabilities(self, soup: BeautifulSoup, author: str) -> list[Vulnerability]:
        author_url = f"{self.origin.rstrip('/')}/author/{author}/1/" if author else ""
        unique: dict[str, Vulnerability] = {}

        for row in soup.select("tbody tr") or soup.select("tr"):
            title_link = row.select_one("a[href*='/issue/']")
            title = text_of(title_link)
            url = absolutize(href_of(title_link), self.origin)
            vuln_id = extract_id(url)
            if not vuln_id or not title:
                continue

            tags = []
            if "CVE assigned" in text_of(row.select_one("font[color='#FF8C00']")):
                tags.append("CVE")

            details = text_of(row.select_one("div.col-md-3")) or text_of(row)
            is_remote = "Remote" in details
            is_local = "Local" in details
            if is_remote:
                tags.append("Remote")
            if is_local:
                tags.append("Local")

            date_match = _DATE_RE.search(details)
            unique[vuln_id] = Vulnerability(
                date=parse_flexible_date(date_match.group(0), AUTHOR_DATE_FORMATS) if date_match else None,
                title=title,
                url=url,
                id=vuln_id,
                risk_level=normalize_risk(text_of(row.select_one("span.label"))),
                tags=dedup_preserve_order(tags),
                is_remote=is_remote,
                is_local=is_local,
                author=author,
                author_url=author_url,
            )

        logger.debug("Author page listed %d unique advisories", len(unique))
        return list(unique.values())


def parse_author_page(
    content: str,
    origin: str = DEFAULT_ORIGIN,
    countries: Mapping[str, str] = COUNTRY_NAMES,
) -> AuthorProfile:
    """Convenience wrapper around :class:`AuthorParser`."""
    return AuthorParser(origin, countries).parse(content)
