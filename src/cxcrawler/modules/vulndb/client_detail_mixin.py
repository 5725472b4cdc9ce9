"""Detail, CVE and author lookups for the crawling client."""

import logging
from dataclasses import replace

from .models import AuthorProfile, CveDetail, Vulnerability, VulnerabilityList
from .normalize import RECORD_ID_MARKER, extract_id
from .parsers import AuthorParser, CveDetailParser, DetailPageParser

logger = logging.getLogger(__name__)

CVE_PREFIX = "CVE-"
_DOUBLED_ISSUE = f"/issue/{RECORD_ID_MARKER}{RECORD_ID_MARKER}"
_ISSUE = f"/issue/{RECORD_ID_MARKER}"


class ClientDetailMixin:
    """Single-record lookups; expects ``http``, ``origin`` and ``crawl_page``."""

    def crawl_exploit(self, id: str = "") -> Vulnerability | VulnerabilityList:
        """Fetch the front listing when ``id`` is empty, else one advisory."""
        if not id:
            return self.crawl_page("/exploit/1")
        record_id = id if id.startswith(RECORD_ID_MARKER) else RECORD_ID_MARKER + id
        return self.crawl_vulnerability_detail(f"/issue/{record_id}")

    def crawl_vulnerability_detail(self, path: str) -> Vulnerability:
        """Fetch one advisory page.

        The record url falls back to origin + path when the page carries
        none, and the id is always derived from the final url.
        """
        if path and not path.startswith("/"):
            path = "/" + path
        path = path.replace(_DOUBLED_ISSUE, _ISSUE, 1)

        record = DetailPageParser(self.origin).parse(self.http.get_page(path))
        url = record.url or self.origin.rstrip("/") + path
        return replace(record, url=url, id=extract_id(url))

    def crawl_cve_detail(self, cve: str) -> CveDetail:
        """Fetch the CVE page for ``cve``; a bare number gets the ``CVE-`` prefix."""
        cve = cve.strip()
        if not cve.upper().startswith(CVE_PREFIX):
            cve = CVE_PREFIX + cve
        return CveDetailParser(self.origin).parse(self.http.get_page(f"/cveshow/{cve}/"))

    def crawl_author(self, author_id: str) -> AuthorProfile:
        """Fetch the first page of an author profile."""
        profile = AuthorParser(self.origin).parse(self.http.get_page(f"/author/{author_id}/1/"))
        if not profile.id:
            logger.debug("Author id missing from page, using requested id %s", author_id)
            profile = replace(profile, id=author_id)
        return profile
