"""Rich rendering of crawl records for the terminal."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cxcrawler.modules.vulndb.models import (
    AuthorProfile,
    CveDetail,
    SearchResult,
    Vulnerability,
    VulnerabilityList,
)

RISK_STYLES = {"High": "bold red", "Med.": "yellow", "Low": "green"}


def _risk(level: str) -> str:
    style = RISK_STYLES.get(level)
    if not level:
        return "[dim]-[/]"
    return f"[{style}]{escape(level)}[/]" if style else escape(level)


def _date(value) -> str:
    return value.isoformat() if value else "[dim]-[/]"


def _advisory_table(items: list[Vulnerability], title: str) -> Table:
    table = Table(title=title, show_lines=False, expand=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Risk", no_wrap=True)
    table.add_column("Title", ratio=3)
    table.add_column("Tags")
    table.add_column("Author", style="magenta")
    for item in items:
        table.add_row(
            escape(item.id),
            _date(item.date),
            _risk(item.risk_level),
            escape(item.title),
            escape(", ".join(item.tags)),
            escape(item.author),
        )
    return table


def _fields_table(rows: list[tuple[str, str]]) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for label, value in rows:
        table.add_row(label, escape(value) if value else "[dim]-[/]")
    return table


def render_list(console: Console, result: VulnerabilityList) -> None:
    console.print(
        _advisory_table(result.items, f"Advisories (page {result.current_page}/{result.total_pages})")
    )


def render_detail(console: Console, record: Vulnerability) -> None:
    rows = [
        ("ID", record.id),
        ("Date", record.date.isoformat() if record.date else ""),
        ("Risk", record.risk_level),
        ("CVE", record.cve),
        ("CWE", record.cwe),
        ("Remote", "Yes" if record.is_remote else "No"),
        ("Local", "Yes" if record.is_local else "No"),
        ("Tags", ", ".join(record.tags)),
        ("Author", record.author),
        ("Author URL", record.author_url),
        ("URL", record.url),
    ]
    console.print(
        Panel(
            _fields_table(rows),
            title=f"[bold]{escape(record.title or 'Advisory')}[/]",
            border_style="cyan",
        )
    )


def render_cve(console: Console, record: CveDetail) -> None:
    rows = [
        ("Published", record.published.isoformat() if record.published else ""),
        ("Modified", record.modified.isoformat() if record.modified else ""),
        ("Type", record.cwe_type),
        ("CVSS base", f"{record.cvss_base_score:.1f}"),
        ("CVSS impact", f"{record.cvss_impact_score:.1f}"),
        ("CVSS exploit", f"{record.cvss_exploit_score:.1f}"),
        ("Exploit range", record.exploit_range),
        ("Attack complexity", record.attack_complexity),
        ("Authentication", record.authentication),
        ("Confidentiality", record.confidentiality_impact),
        ("Integrity", record.integrity_impact),
        ("Availability", record.availability_impact),
        ("Description", record.description),
    ]
    console.print(
        Panel(_fields_table(rows), title=f"[bold]{escape(record.cve_id or 'CVE')}[/]", border_style="cyan")
    )

    if record.affected_software:
        software = Table(title="Affected software", expand=True)
        software.add_column("Vendor", style="magenta")
        software.add_column("Product")
        for entry in record.affected_software:
            software.add_row(escape(entry.vendor_name), escape(entry.product_name))
        console.print(software)

    for reference in record.references:
        console.print(f"  [dim]ref[/] {escape(reference)}")

    if record.related_vulnerabilities:
        console.print(_advisory_table(record.related_vulnerabilities, "Related advisories"))


def render_author(console: Console, profile: AuthorProfile) -> None:
    rows = [
        ("ID", profile.id),
        ("Country", f"{profile.country} ({profile.country_code})" if profile.country_code else ""),
        ("Reported", str(profile.reported_count)),
        ("Twitter", profile.twitter),
        ("Website", profile.website),
        ("Zone-H", profile.zone_h),
        ("Description", profile.description),
    ]
    console.print(
        Panel(_fields_table(rows), title=f"[bold]{escape(profile.name or profile.id)}[/]", border_style="cyan")
    )
    if profile.vulnerabilities:
        title = f"Advisories (page {profile.current_page}/{profile.total_pages})"
        console.print(_advisory_table(profile.vulnerabilities, title))


def render_search(console: Console, result: SearchResult) -> None:
    table = Table(
        title=(
            f"Search: {escape(result.keyword)} "
            f"(page {result.current_page}/{result.total_pages}, {result.sort_order}, {result.per_page}/page)"
        ),
        expand=True,
    )
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Risk", no_wrap=True)
    table.add_column("Title", ratio=3)
    table.add_column("Author", style="magenta")
    for hit in result.vulnerabilities:
        table.add_row(escape(hit.id), escape(hit.date), _risk(hit.risk_level), escape(hit.title), escape(hit.author))
    console.print(table)
    if not result.vulnerabilities:
        console.print("[yellow]No results found.[/yellow]")
