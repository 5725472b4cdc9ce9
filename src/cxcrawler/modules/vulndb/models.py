"""Canonical records extracted from cxsecurity pages.

Every record is a frozen value object built by one extraction call. Freezing
is shallow: list fields reject reassignment but not in-place mutation, so
callers that need a private copy should go through ``to_dict``.
Fields that could not be located are left at their zero value (empty string,
``0``, ``0.0``, ``False``, ``None`` for dates or an empty list), so a caller
cannot tell "found but empty" apart from "not found". That ambiguity is part
of the tolerant-parsing contract.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from datetime import date
from typing import Any


def _date_to_str(value: date | None) -> str | None:
    return value.isoformat() if value else None


def _date_from_str(value: Any) -> date | None:
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


@dataclass(frozen=True)
class Vulnerability:
    """A single WLB advisory as it appears on list, detail or author pages."""

    date: date | None = None
    title: str = ""
    url: str = ""
    id: str = ""
    risk_level: str = ""
    tags: list[str] = field(default_factory=list)
    cve: str = ""
    cwe: str = ""
    is_remote: bool = False
    is_local: bool = False
    author: str = ""
    author_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vulnerability":
        return cls(
            date=_date_from_str(data.get("date")),
            title=data.get("title", ""),
            url=data.get("url", ""),
            id=data.get("id", ""),
            risk_level=data.get("risk_level", ""),
            tags=list(data.get("tags") or []),
            cve=data.get("cve", ""),
            cwe=data.get("cwe", ""),
            is_remote=bool(data.get("is_remote", False)),
            is_local=bool(data.get("is_local", False)),
            author=data.get("author", ""),
            author_url=data.get("author_url", ""),
        )


@dataclass(frozen=True)
class VulnerabilityList:
    """One listing page worth of advisories."""

    items: list[Vulnerability] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VulnerabilityList":
        return cls(
            items=[Vulnerability.from_dict(item) for item in data.get("items") or []],
            current_page=int(data.get("current_page", 1)),
            total_pages=int(data.get("total_pages", 1)),
        )


@dataclass(frozen=True)
class AffectedSoftware:
    """Vendor/product pair listed on a CVE page."""

    vendor_name: str = ""
    vendor_url: str = ""
    product_name: str = ""
    product_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AffectedSoftware":
        return cls(
            vendor_name=data.get("vendor_name", ""),
            vendor_url=data.get("vendor_url", ""),
            product_name=data.get("product_name", ""),
            product_url=data.get("product_url", ""),
        )


@dataclass(frozen=True)
class CveDetail:
    """Everything the CVE detail page exposes about one CVE."""

    cve_id: str = ""
    published: date | None = None
    modified: date | None = None
    description: str = ""
    cwe_type: str = ""
    cvss_base_score: float = 0.0
    cvss_impact_score: float = 0.0
    cvss_exploit_score: float = 0.0
    exploit_range: str = ""
    attack_complexity: str = ""
    authentication: str = ""
    confidentiality_impact: str = ""
    integrity_impact: str = ""
    availability_impact: str = ""
    affected_software: list[AffectedSoftware] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
    related_vulnerabilities: list[Vulnerability] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CveDetail":
        return cls(
            cve_id=data.get("cve_id", ""),
            published=_date_from_str(data.get("published")),
            modified=_date_from_str(data.get("modified")),
            description=data.get("description", ""),
            cwe_type=data.get("cwe_type", ""),
            cvss_base_score=float(data.get("cvss_base_score", 0.0)),
            cvss_impact_score=float(data.get("cvss_impact_score", 0.0)),
            cvss_exploit_score=float(data.get("cvss_exploit_score", 0.0)),
            exploit_range=data.get("exploit_range", ""),
            attack_complexity=data.get("attack_complexity", ""),
            authentication=data.get("authentication", ""),
            confidentiality_impact=data.get("confidentiality_impact", ""),
            integrity_impact=data.get("integrity_impact", ""),
            availability_impact=data.get("availability_impact", ""),
            affected_software=[
                AffectedSoftware.from_dict(item) for item in data.get("affected_software") or []
            ],
            references=list(data.get("references") or []),
            related_vulnerabilities=[
                Vulnerability.from_dict(item) for item in data.get("related_vulnerabilities") or []
            ],
        )


@dataclass(frozen=True)
class AuthorProfile:
    """Contributor profile page plus the advisories listed on it."""

    id: str = ""
    name: str = ""
    country: str = ""
    country_code: str = ""
    reported_count: int = 0
    twitter: str = ""
    website: str = ""
    zone_h: str = ""
    description: str = ""
    vulnerabilities: list[Vulnerability] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuthorProfile":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            country=data.get("country", ""),
            country_code=data.get("country_code", ""),
            reported_count=int(data.get("reported_count", 0)),
            twitter=data.get("twitter", ""),
            website=data.get("website", ""),
            zone_h=data.get("zone_h", ""),
            description=data.get("description", ""),
            vulnerabilities=[
                Vulnerability.from_dict(item) for item in data.get("vulnerabilities") or []
            ],
            current_page=int(data.get("current_page", 1)),
            total_pages=int(data.get("total_pages", 1)),
        )


@dataclass(frozen=True)
class SearchVulnerability:
    """Narrow advisory shape returned by keyword search."""

    id: str = ""
    title: str = ""
    url: str = ""
    date: str = ""
    risk_level: str = ""
    author: str = ""
    author_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchVulnerability":
        return cls(**{f.name: data.get(f.name, "") for f in fields(cls)})


@dataclass(frozen=True)
class SearchResult:
    """Search request metadata plus one page of hits."""

    keyword: str = ""
    current_page: int = 1
    total_pages: int = 1
    sort_order: str = "DESC"
    per_page: int = 10
    vulnerabilities: list[SearchVulnerability] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            keyword=data.get("keyword", ""),
            current_page=int(data.get("current_page", 1)),
            total_pages=int(data.get("total_pages", 1)),
            sort_order=data.get("sort_order", "DESC"),
            per_page=int(data.get("per_page", 10)),
            vulnerabilities=[
                SearchVulnerability.from_dict(item) for item in data.get("vulnerabilities") or []
            ],
        )


def _jsonable(value: Any) -> Any:
    if isinstance(value, date):
        return _date_to_str(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def to_dict(record: Any) -> dict[str, Any]:
    """Convert a record into JSON-ready primitives (dates become ISO strings)."""
    if not is_dataclass(record) or isinstance(record, type):
        raise TypeError(f"Expected a record instance, got {type(record).__name__}")
    return _jsonable(asdict(record))
