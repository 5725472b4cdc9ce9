"""Pure helpers shared by every extractor."""

import re
from collections.abc import Iterable, Sequence
from datetime import date, datetime

DEFAULT_ORIGIN = "https://cxsecurity.com"
RECORD_ID_MARKER = "WLB-"

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_SCORE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*/\s*10")
_WHITESPACE_RE = re.compile(r"\s+")

_RISK_LEVELS = {
    "high": "High",
    "med": "Med.",
    "med.": "Med.",
    "medium": "Med.",
    "low": "Low",
}


def absolutize(url: str, origin: str = DEFAULT_ORIGIN) -> str:
    """Return ``url`` rooted at ``origin`` unless it already carries a scheme."""
    url = (url or "").strip()
    if not url or _SCHEME_RE.match(url):
        return url
    origin = origin.rstrip("/")
    if url.startswith("/"):
        return origin + url
    return f"{origin}/{url}"


def parse_flexible_date(text: str, formats: Sequence[str]) -> date | None:
    """Try each ``strptime`` format in order; ``None`` when none matches."""
    text = clean_text(text)
    if not text:
        return None
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def dedup_preserve_order(tags: Iterable[str]) -> list[str]:
    """Drop repeated tags, keeping the first occurrence of each."""
    return list(dict.fromkeys(tags))


def extract_score(label_text: str) -> float:
    """Read a ``7.5/10`` style score; ``0.0`` when absent."""
    match = _SCORE_RE.search(label_text or "")
    if not match:
        return 0.0
    try:
        return float(match.group(1))
    except ValueError:
        return 0.0


def extract_id(url: str) -> str:
    """Slice the ``WLB-...`` record id out of an advisory URL."""
    idx = (url or "").find(RECORD_ID_MARKER)
    if idx == -1:
        return ""
    return url[idx:].split("/", 1)[0].split("?", 1)[0]


def normalize_risk(text: str) -> str:
    """Map a risk label onto ``High``/``Med.``/``Low``/``unknown``."""
    text = clean_text(text)
    if not text:
        return ""
    return _RISK_LEVELS.get(text.lower(), "unknown")


def clean_text(text: str | None) -> str:
    """Collapse runs of whitespace and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()
