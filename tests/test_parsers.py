"""Tests for the HTML extractors."""

from datetime import date

import pytest

from cxcrawler.modules.vulndb.errors import EmptyContentError
from cxcrawler.modules.vulndb.models import (
    AuthorProfile,
    CveDetail,
    SearchResult,
    Vulnerability,
    VulnerabilityList,
)
from cxcrawler.modules.vulndb.parsers import (
    AuthorParser,
    CveDetailParser,
    DetailPageParser,
    ListPageParser,
    SearchResultParser,
    parse_author_page,
    parse_cve_page,
    parse_detail_page,
    parse_list_page,
)

ALL_PARSERS = [
    ListPageParser(),
    DetailPageParser(),
    CveDetailParser(),
    AuthorParser(),
    SearchResultParser("php"),
]


class TestTolerantParsing:
    """Every extractor shares the same input contract."""

    @pytest.mark.parametrize("parser", ALL_PARSERS, ids=lambda p: type(p).__name__)
    @pytest.mark.parametrize("content", ["", "   \n\t"])
    def test_blank_input_raises(self, parser, content):
        with pytest.raises(EmptyContentError):
            parser.parse(content)

    def test_empty_content_is_value_error(self):
        with pytest.raises(ValueError):
            parse_list_page("")

    def test_invalid_markup_yields_zero_records(self):
        content = "<invalid>html</content>"
        assert parse_list_page(content) == VulnerabilityList()
        assert parse_detail_page(content) == Vulnerability()
        assert parse_cve_page(content) == CveDetail()
        assert parse_author_page(content) == AuthorProfile()
        assert SearchResultParser("php").parse(content) == SearchResult(keyword="php")


class TestListPageParser:
    """Test listing page extraction."""

    def test_minimal_document(self, mock_list_html):
        result = parse_list_page(mock_list_html)

        assert len(result.items) == 1
        item = result.items[0]
        assert item.date == date(2023, 6, 15)
        assert item.title == "test vuln"
        assert item.risk_level == "High"
        assert item.tags == ["CVE", "Remote"]
        assert item.author == "alice"
        assert item.author_url == "https://cxsecurity.com/author/alice"
        assert item.url == "https://cxsecurity.com/vuln/123"
        assert item.id == ""
        assert item.is_remote is True

    def test_grouped_rows_take_their_header_date(self, list_page_html):
        result = parse_list_page(list_page_html)

        assert [item.id for item in result.items] == ["WLB-2024010001", "WLB-2024010002"]
        first, second = result.items
        assert first.date == date(2024, 1, 10)
        assert second.date == date(2024, 1, 9)

    def test_cve_and_cwe_promoted(self, list_page_html):
        first = parse_list_page(list_page_html).items[0]

        assert first.cve == "CVE-2024-1234"
        assert first.cwe == "CWE-89"
        assert first.tags == ["CVE", "CWE", "Remote"]
        assert first.author_url == "https://cxsecurity.com/author/rgod/1/"

    def test_duplicate_tags_removed(self, list_page_html):
        second = parse_list_page(list_page_html).items[1]

        assert second.tags == ["Local"]
        assert second.is_local is True
        assert second.risk_level == "Med."
        assert second.url == "https://cxsecurity.com/issue/WLB-2024010002"

    def test_pagination(self, list_page_html):
        result = parse_list_page(list_page_html)
        assert (result.current_page, result.total_pages) == (2, 15)

    def test_custom_origin(self, mock_list_html):
        item = ListPageParser("http://mirror.local").parse(mock_list_html).items[0]
        assert item.url == "http://mirror.local/vuln/123"

    def test_flat_layout(self, search_page_html):
        result = parse_list_page(search_page_html)

        assert len(result.items) == 2
        assert result.items[0].date == date(2024, 2, 12)
        assert result.items[0].author == "carol"
        assert result.items[1].date is None
        assert result.items[1].risk_level == "Low"


class TestDetailPageParser:
    """Test advisory detail extraction."""

    def test_fields(self, detail_page_html):
        record = DetailPageParser().parse(detail_page_html)

        assert record.title == "WordPress Plugin SQL Injection"
        assert record.date == date(2024, 1, 10)
        assert record.risk_level == "High"
        assert record.cve == "CVE-2024-1234"
        assert record.cwe == "CWE-89"
        assert record.is_remote is True
        assert record.is_local is False
        assert record.author == "rgod"
        assert record.author_url == "https://cxsecurity.com/author/rgod/1/"

    def test_other_labels_become_tags(self, detail_page_html):
        assert DetailPageParser().parse(detail_page_html).tags == ["Web Application"]

    def test_url_left_for_caller(self, detail_page_html):
        record = DetailPageParser().parse(detail_page_html)
        assert record.url == ""
        assert record.id == ""

    def test_title_fallback(self):
        html = '<div class="panel-body"><h4><span><b>Fallback title</b></span></h4></div>'
        assert DetailPageParser().parse(html).title == "Fallback title"


class TestCveDetailParser:
    """Test CVE page extraction."""

    def test_scores(self, cve_page_html):
        record = CveDetailParser().parse(cve_page_html)

        assert record.cvss_base_score == 7.5
        assert record.cvss_impact_score == 6.4
        assert record.cvss_exploit_score == 8.6

    def test_header_fields(self, cve_page_html):
        record = CveDetailParser().parse(cve_page_html)

        assert record.cve_id == "CVE-2007-1411"
        assert record.published == date(2007, 3, 10)
        assert record.modified == date(2017, 10, 11)
        assert record.description.startswith("Buffer overflow in PHP 4.4.6")
        assert record.cwe_type == "CWE-119"

    def test_attributes(self, cve_page_html):
        record = CveDetailParser().parse(cve_page_html)

        assert record.exploit_range == "Remote"
        assert record.attack_complexity == "Low"
        assert record.authentication == "No required"
        assert record.confidentiality_impact == "Partial"
        assert record.integrity_impact == "Partial"
        assert record.availability_impact == "Complete"

    def test_affected_software(self, cve_page_html):
        software = CveDetailParser().parse(cve_page_html).affected_software

        assert len(software) == 1
        assert software[0].vendor_name == "PHP"
        assert software[0].vendor_url == "https://cxsecurity.com/cvevendor/1/"
        assert software[0].product_url == "https://cxsecurity.com/cveproduct/2/"

    def test_references_keep_only_absolute_links(self, cve_page_html):
        references = CveDetailParser().parse(cve_page_html).references
        assert references == ["http://retrogod.altervista.org/php_446_mssql_connect_bof.html"]

    def test_related_advisories(self, cve_page_html):
        related = CveDetailParser().parse(cve_page_html).related_vulnerabilities

        assert len(related) == 1
        assert related[0].id == "WLB-2007030137"
        assert related[0].title == "PHP mssql_connect overflow"
        assert related[0].date == date(2007, 3, 21)
        assert related[0].risk_level == "High"
        assert related[0].author == "rgod"
        assert related[0].tags == []

    def test_missing_scores_are_zero(self):
        record = CveDetailParser().parse("<h1><strong>CVE-2020-1</strong></h1>")
        assert record.cve_id == "CVE-2020-1"
        assert (record.cvss_base_score, record.cvss_impact_score, record.cvss_exploit_score) == (0.0, 0.0, 0.0)


class TestAuthorParser:
    """Test author profile extraction."""

    def test_profile_fields(self, author_page_html):
        profile = AuthorParser().parse(author_page_html)

        assert profile.id == "rgod"
        assert profile.name == "rgod"
        assert profile.country_code == "IT"
        assert profile.country == "Italy"
        assert profile.reported_count == 42
        assert profile.twitter == "https://twitter.com/rgod"
        assert profile.website == "http://retrogod.altervista.org"
        assert profile.description == "Italian security researcher"

    def test_vulnerabilities_deduplicated_by_id(self, author_page_html):
        vulns = AuthorParser().parse(author_page_html).vulnerabilities

        assert [v.id for v in vulns] == ["WLB-2007030137", "WLB-2007030140"]
        # first position, last value
        assert vulns[0].title == "PHP overflow v2"
        assert vulns[0].date == date(2007, 3, 23)
        assert vulns[0].tags == ["Local"]

    def test_vulnerability_details(self, author_page_html):
        vulns = AuthorParser().parse(author_page_html).vulnerabilities

        assert vulns[1].is_remote is True
        assert vulns[1].risk_level == "Med."
        assert vulns[1].author == "rgod"
        assert vulns[1].author_url == "https://cxsecurity.com/author/rgod/1/"

    def test_oversized_reported_count(self):
        html = "<h1>Author: x</h1><h4>Reported research: " + "9" * 5000 + "</h4>"

        assert AuthorParser().parse(html).reported_count == 0

    def test_cve_assigned_marker(self):
        html = (
            "<h1>Author: x</h1><table><tr><td><span class='label'>High</span></td>"
            "<td><a href='/issue/WLB-1'>t</a> <font color='#FF8C00'>CVE assigned</font></td></tr></table>"
        )
        assert AuthorParser().parse(html).vulnerabilities[0].tags == ["CVE"]

    def test_injected_country_table(self, author_page_html):
        profile = AuthorParser(countries={"IT": "Italia"}).parse(author_page_html)
        assert profile.country == "Italia"

    def test_country_from_ranking_link(self):
        html = '<h1>Author: y</h1><a href="/best/pl/1/">ranking</a>'
        profile = AuthorParser().parse(html)
        assert profile.country_code == "PL"
        assert profile.country == "Poland"


class TestSearchResultParser:
    """Test search result reshaping."""

    def test_hits(self, search_page_html):
        result = SearchResultParser("apache", "ASC", 30).parse(search_page_html)

        assert result.keyword == "apache"
        assert result.sort_order == "ASC"
        assert result.per_page == 30
        assert (result.current_page, result.total_pages) == (1, 3)
        assert [hit.id for hit in result.vulnerabilities] == ["WLB-2024020001", "WLB-2024020002"]
        assert result.vulnerabilities[0].date == "2024-02-12"
        assert result.vulnerabilities[0].url == "https://cxsecurity.com/issue/WLB-2024020001"

    def test_unknown_date_marker(self, search_page_html):
        result = SearchResultParser("apache").parse(search_page_html)
        assert result.vulnerabilities[1].date == "unknown"
