"""Test configuration and fixtures for cxcrawler."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

MOCK_LIST_HTML = """
<html><body>
<table class="table table-striped">
  <thead><tr><th colspan="2"><font>2023-06-15</font></th></tr></thead>
  <tr>
    <td><span class="label label-danger">High</span></td>
    <td>
      <div class="row">
        <div class="col-md-7"><a href="/vuln/123">test vuln</a></div>
        <div class="col-md-5">
          <span class="label label-default">CVE</span>
          <span class="label label-default">Remote</span>
          <span class="label label-info"><a href="/author/alice">alice</a></span>
        </div>
      </div>
    </td>
  </tr>
</table>
</body></html>
"""

LIST_PAGE_HTML = """
<html><body>
<table class="table table-striped">
  <thead><tr><th colspan="2"><font>2024-01-10</font></th></tr></thead>
  <tr>
    <td><span class="label label-danger">High</span></td>
    <td>
      <div class="row">
        <div class="col-md-7">
          <a href="https://cxsecurity.com/issue/WLB-2024010001">WordPress Plugin SQL Injection</a>
        </div>
        <div class="col-md-5">
          <span class="label label-default"><a href="/cveshow/CVE-2024-1234/">CVE-2024-1234</a></span>
          <span class="label label-default">CWE-89</span>
          <span class="label label-default">Remote</span>
          <span class="label label-info"><a href="/author/rgod/1/">rgod</a></span>
        </div>
      </div>
    </td>
  </tr>
  <thead><tr><th colspan="2"><font>09.01.2024</font></th></tr></thead>
  <tr>
    <td><span class="label label-warning">Med.</span></td>
    <td>
      <div class="row">
        <div class="col-md-7"><a href="/issue/WLB-2024010002">Local privilege escalation</a></div>
        <div class="col-md-5">
          <span class="label label-default">Local</span>
          <span class="label label-default">Local</span>
          <span class="label label-info"><a href="/author/bob/1/">bob</a></span>
        </div>
      </div>
    </td>
  </tr>
</table>
<script>
  $scope.currentPage = 2;
  $scope.totalItems = 860;
  $scope.perPage = 60;
</script>
</body></html>
"""

SEARCH_PAGE_HTML = """
<html><body>
<table class="table">
  <tr><th>Risk</th><th>Title</th><th>Author</th><th>Date</th></tr>
  <tr>
    <td><span class="label label-danger">High</span></td>
    <td><a href="/issue/WLB-2024020001">Apache RCE</a></td>
    <td><a href="/author/carol/1/">carol</a></td>
    <td>12.02.2024</td>
  </tr>
  <tr>
    <td><span class="label label-success">Low</span></td>
    <td><a href="/issue/WLB-2024020002">Info leak</a></td>
    <td></td>
    <td>n/a</td>
  </tr>
</table>
<script>
  $scope.currentPage = 1;
  $scope.totalItems = 25;
  $scope.perPage = 10;
</script>
</body></html>
"""

DETAIL_PAGE_HTML = """
<html><body>
<div class="panel-body">
  <h4><b>WordPress Plugin SQL Injection</b></h4>
  <div class="row">
    <div class="col-xs-12 col-md-3"><div class="well well-sm"><b>2024.01.10</b></div></div>
    <div class="col-xs-12 col-md-3">
      <div class="well well-sm">Risk: <span class="label label-danger">High</span></div>
    </div>
    <div class="col-xs-12 col-md-3"><div class="well well-sm">Local: <b>No</b></div></div>
    <div class="col-xs-12 col-md-3"><div class="well well-sm">Remote: <b>Yes</b></div></div>
  </div>
  <div class="row">
    <div class="col-xs-12 col-md-6">
      <div class="well well-sm">CVE: <a href="https://cxsecurity.com/cveshow/CVE-2024-1234/">CVE-2024-1234</a></div>
    </div>
    <div class="col-xs-12 col-md-6">
      <div class="well well-sm">CWE: <a href="https://cxsecurity.com/cwe/CWE-89">CWE-89</a></div>
    </div>
  </div>
  <div class="row">
    <div class="col-xs-12 col-md-6">
      <div class="well well-sm"><span class="label label-info">Web Application</span></div>
    </div>
    <div class="col-xs-12 col-md-6">
      <div class="well well-sm">Credit: <a href="/author/rgod/1/">rgod</a></div>
    </div>
  </div>
</div>
</body></html>
"""

CVE_PAGE_HTML = """
<html><body>
<h1><strong>CVE-2007-1411</strong></h1>
<center><b>Published:</b> 2007-03-10 <b>Modified:</b> 2017-10-11</center>
<table>
  <tr><td><b>Description:</b></td></tr>
  <tr><td><h6>Buffer overflow in PHP 4.4.6 and earlier allows local users to execute code.</h6></td></tr>
</table>
<table>
  <tr><td><b>Type:</b> <a href="https://cxsecurity.com/cwe/CWE-119">CWE-119</a></td></tr>
</table>
<table>
  <tr><td><b>CVSS Base Score</b></td><td><b>Impact Subscore</b></td><td><b>Exploitability Subscore</b></td></tr>
  <tr>
    <td><span class="label label-danger">7.5/10</span></td>
    <td><span class="label label-warning">6.4/10</span></td>
    <td><span class="label label-danger">8.6/10</span></td>
  </tr>
</table>
<table>
  <tr><td><b>Exploit range</b></td><td><b>Attack complexity</b></td><td><b>Authentication</b></td></tr>
  <tr><td><h6>Remote</h6></td><td><h6>Low</h6></td><td><h6>No required</h6></td></tr>
  <tr><td><b>Confidentiality impact</b></td><td><b>Integrity impact</b></td><td><b>Availability impact</b></td></tr>
  <tr><td><h6>Partial</h6></td><td><h6>Partial</h6></td><td><h6>Complete</h6></td></tr>
</table>
<table class="table table-striped">
  <tr><th>Affected software</th></tr>
  <tr><td><a href="/cvevendor/1/">PHP</a></td><td><a href="/cveproduct/2/">PHP</a></td></tr>
</table>
<table>
  <tr><td><b>References:</b></td></tr>
  <tr><td>
    <div onclick="window.open('http://retrogod.altervista.org/php_446_mssql_connect_bof.html')">ref</div>
    <div onclick="window.open('/local/only')">ref</div>
  </td></tr>
</table>
<table><tr><td>
  <center>See advisories in our WLB2 database:</center>
  <table>
    <tr><td>Risk</td><td>Topic</td><td>Author</td><td>Date</td></tr>
    <tr>
      <td><span class="label label-danger">High</span></td>
      <td><a href="https://cxsecurity.com/issue/WLB-2007030137">PHP mssql_connect overflow</a></td>
      <td><a href="/author/rgod/1/">rgod</a></td>
      <td>21.03.2007</td>
    </tr>
  </table>
</td></tr></table>
</body></html>
"""

AUTHOR_PAGE_HTML = """
<html><body>
<h1>Author: rgod</h1>
<img src="/images/flags/it.png">
<h4>Reported research: 42</h4>
<p><b>Twitter:</b> <a href="https://twitter.com/rgod">@rgod</a></p>
<p><b>Website:</b> <a href="http://retrogod.altervista.org">retrogod.altervista.org</a></p>
<p><b>Description:</b> Italian security researcher</p>
<table>
  <tr>
    <td><span class="label label-danger">High</span></td>
    <td><a href="/issue/WLB-2007030137">PHP overflow</a> <font color="#FF8C00">CVE assigned</font></td>
    <td><div class="col-md-3">Local 2007-03-21</div></td>
  </tr>
  <tr>
    <td><span class="label label-warning">Med.</span></td>
    <td><a href="/issue/WLB-2007030140">XSS bug</a></td>
    <td><div class="col-md-3">Remote 2007-03-22</div></td>
  </tr>
  <tr>
    <td><span class="label label-danger">High</span></td>
    <td><a href="/issue/WLB-2007030137">PHP overflow v2</a></td>
    <td><div class="col-md-3">Local 2007-03-23</div></td>
  </tr>
</table>
</body></html>
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_config(monkeypatch, temp_dir: Path) -> Path:
    """Point every configuration layer at an empty temporary location."""
    for key in (
        "CXCRAWLER_BASE_URL",
        "CXCRAWLER_TIMEOUT",
        "CXCRAWLER_PROXY",
        "CXCRAWLER_MAX_RETRIES",
        "CXCRAWLER_RETRY_DELAY",
        "CXCRAWLER_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(temp_dir)
    return temp_dir


@pytest.fixture
def mock_list_html() -> str:
    return MOCK_LIST_HTML


@pytest.fixture
def list_page_html() -> str:
    return LIST_PAGE_HTML


@pytest.fixture
def search_page_html() -> str:
    return SEARCH_PAGE_HTML


@pytest.fixture
def detail_page_html() -> str:
    return DETAIL_PAGE_HTML


@pytest.fixture
def cve_page_html() -> str:
    return CVE_PAGE_HTML


@pytest.fixture
def author_page_html() -> str:
    return AUTHOR_PAGE_HTML
