"""Tests for the VulnDBClient facade."""

from datetime import date

import pytest
import respx
from httpx import Response

from cxcrawler.modules.vulndb import VulnDBClient
from cxcrawler.modules.vulndb.client_search_mixin import normalize_search_params
from cxcrawler.modules.vulndb.errors import FetchError
from cxcrawler.modules.vulndb.models import Vulnerability, VulnerabilityList
from cxcrawler.tools.http import ClientSettings, PageClient

ORIGIN = "https://cxsecurity.com"


def fixed_clock() -> date:
    return date(2024, 3, 5)


@pytest.fixture
def client():
    settings = ClientSettings(max_retries=1, retry_delay=0)
    with VulnDBClient(http=PageClient(settings, sleep=lambda _: None), clock=fixed_clock) as vulndb:
        yield vulndb


class TestCrawlPages:
    """Test list and detail crawling."""

    @respx.mock
    def test_crawl_page_relative_path(self, client, list_page_html):
        respx.get(f"{ORIGIN}/exploit/2").mock(return_value=Response(200, text=list_page_html))

        result = client.crawl_page("exploit/2")

        assert len(result.items) == 2

    @respx.mock
    def test_crawl_page_default_path(self, client, list_page_html):
        respx.get(f"{ORIGIN}/exploit/1").mock(return_value=Response(200, text=list_page_html))

        result = client.crawl_page()

        assert isinstance(result, VulnerabilityList)
        assert len(result.items) == 2

    @respx.mock
    def test_crawl_exploit_without_id_lists(self, client, list_page_html):
        respx.get(f"{ORIGIN}/exploit/1").mock(return_value=Response(200, text=list_page_html))

        assert isinstance(client.crawl_exploit(), VulnerabilityList)

    @pytest.mark.parametrize("record_id", ["2024010001", "WLB-2024010001"])
    @respx.mock
    def test_crawl_exploit_prefix_applied_once(self, client, detail_page_html, record_id):
        route = respx.get(f"{ORIGIN}/issue/WLB-2024010001").mock(
            return_value=Response(200, text=detail_page_html)
        )

        record = client.crawl_exploit(record_id)

        assert route.called
        assert isinstance(record, Vulnerability)
        assert record.id == "WLB-2024010001"
        assert record.url == f"{ORIGIN}/issue/WLB-2024010001"

    @respx.mock
    def test_detail_path_normalized(self, client, detail_page_html):
        route = respx.get(f"{ORIGIN}/issue/WLB-2024010001").mock(
            return_value=Response(200, text=detail_page_html)
        )

        record = client.crawl_vulnerability_detail("issue/WLB-WLB-2024010001")

        assert route.called
        assert record.url == f"{ORIGIN}/issue/WLB-2024010001"
        assert record.id == "WLB-2024010001"
        assert record.title == "WordPress Plugin SQL Injection"

    @respx.mock
    def test_cve_prefix_applied_once(self, client, cve_page_html):
        route = respx.get(f"{ORIGIN}/cveshow/CVE-2007-1411/").mock(
            return_value=Response(200, text=cve_page_html)
        )

        assert client.crawl_cve_detail("2007-1411").cve_id == "CVE-2007-1411"
        assert client.crawl_cve_detail("CVE-2007-1411").cvss_base_score == 7.5
        assert route.call_count == 2

    @respx.mock
    def test_author_id_falls_back_to_request(self, client):
        respx.get(f"{ORIGIN}/author/ghost/1/").mock(return_value=Response(200, text="<html><p>gone</p></html>"))

        profile = client.crawl_author("ghost")

        assert profile.id == "ghost"
        assert profile.name == ""

    @respx.mock
    def test_author_profile(self, client, author_page_html):
        respx.get(f"{ORIGIN}/author/rgod/1/").mock(return_value=Response(200, text=author_page_html))

        profile = client.crawl_author("rgod")

        assert profile.id == "rgod"
        assert len(profile.vulnerabilities) == 2

    @respx.mock
    def test_fetch_errors_propagate(self, client):
        respx.get(f"{ORIGIN}/exploit/1").mock(return_value=Response(502))

        with pytest.raises(FetchError):
            client.crawl_page()


class TestSearch:
    """Test keyword search."""

    @respx.mock
    def test_search_path_and_result(self, client, search_page_html):
        route = respx.get(
            f"{ORIGIN}/search/wlb/DESC/AND/2024.3.5.1999.1.1/1/10/sql+injection/"
        ).mock(return_value=Response(200, text=search_page_html))

        result = client.search_vulnerabilities("sql injection")

        assert route.called
        assert result.keyword == "sql injection"
        assert len(result.vulnerabilities) == 2

    @respx.mock
    def test_out_of_range_parameters_coerced(self, client, search_page_html):
        route = respx.get(
            f"{ORIGIN}/search/wlb/DESC/AND/2024.3.5.1999.1.1/1/10/php/"
        ).mock(return_value=Response(200, text=search_page_html))

        result = client.search_vulnerabilities_advanced("php", 0, per_page=20, sort_order="BAD")

        assert route.called
        assert result.per_page == 10
        assert result.sort_order == "DESC"

    @respx.mock
    def test_lowercase_sort_accepted(self, client, search_page_html):
        route = respx.get(
            f"{ORIGIN}/search/wlb/ASC/AND/2024.3.5.1999.1.1/2/30/php/"
        ).mock(return_value=Response(200, text=search_page_html))

        result = client.search_vulnerabilities_advanced("php", 2, per_page=30, sort_order="asc")

        assert route.called
        assert (result.per_page, result.sort_order) == (30, "ASC")

    def test_keyword_quoted(self, client):
        path = client.search_path("a/b&c", 1, 10, "DESC")
        assert path.endswith("/1/10/a%2Fb%26c/")

    def test_normalize_search_params(self):
        assert normalize_search_params(30, "desc", 4) == (30, "DESC", 4)
        assert normalize_search_params(11, "", -3) == (10, "DESC", 1)
