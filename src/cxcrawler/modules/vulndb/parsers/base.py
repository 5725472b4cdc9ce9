"""Shared extractor contract and soup helpers."""

import logging
from typing import Protocol, TypeVar

from bs4 import BeautifulSoup, Tag

from ..errors import EmptyContentError
from ..normalize import clean_text

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", covariant=True)


class Extractor(Protocol[RecordT]):
    """Maps raw document text to a record.

    Blank input raises :class:`EmptyContentError`; any other input yields a
    populated-or-zero record and never raises.
    """

    def parse(self, content: str) -> RecordT: ...


def load_document(content: str) -> BeautifulSoup:
    """Parse ``content`` into a soup, rejecting blank documents."""
    if content is None or not content.strip():
        raise EmptyContentError("HTML content is empty")
    try:
        return BeautifulSoup(content, "html.parser")
    except Exception:
        logger.debug("html.parser rejected document, treating it as empty", exc_info=True)
        return BeautifulSoup("", "html.parser")


def text_of(element: Tag | None) -> str:
    """Whitespace-normalized text of ``element`` (empty for ``None``)."""
    if element is None:
        return ""
    return clean_text(element.get_text(" "))


def href_of(element: Tag | None) -> str:
    if element is None:
        return ""
    href = element.get("href")
    return href.strip() if isinstance(href, str) else ""


def innermost(soup: BeautifulSoup | Tag, selector: str) -> list[Tag]:
    """Select ``selector`` but drop matches that contain another match.

    ``:-soup-contains`` matches every ancestor of the text as well, so on the
    nested table layouts only the deepest element is the real label.
    """
    matches = soup.select(selector)
    match_ids = {id(match) for match in matches}
    result = []
    for match in matches:
        if any(id(inner) in match_ids for inner in match.select(selector)):
            continue
        result.append(match)
    return result


def table_rows(table: Tag) -> list[Tag]:
    """Rows owned by ``table`` itself, skipping rows of nested tables."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def row_cells(row: Tag) -> list[Tag]:
    """Direct ``td`` cells of a row."""
    return row.find_all("td", recursive=False)


def next_row(row: Tag | None) -> Tag | None:
    if row is None:
        return None
    return row.find_next_sibling("tr")
