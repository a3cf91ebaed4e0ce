"""Unit tests for page fetching and extraction"""
import httpx
import pytest

from landingfix.exceptions import FetchError
from landingfix.fetcher import extract_page_content, fetch_page, normalize_url

HTML = """
<html>
<head>
  <title>Acme CRM</title>
  <meta name="description" content="The CRM for small teams">
  <script>var tracking = "do not include";</script>
  <style>body { color: red; }</style>
</head>
<body>
  <nav>Home Pricing</nav>
  <main>
    <h1>Close more deals</h1>
    <h2>Built for   teams</h2>
    <p>Start your free trial today.</p>
  </main>
  <noscript>Enable JavaScript</noscript>
</body>
</html>
"""


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestNormalizeUrl:
    """Tests for normalize_url"""

    @pytest.mark.parametrize("url,expected", [
        ("example.com", "https://example.com"),
        ("  example.com/page ", "https://example.com/page"),
        ("http://example.com", "http://example.com"),
        ("https://example.com", "https://example.com"),
    ])
    def test_scheme(self, url, expected):
        """Test a scheme is added only when missing"""
        assert normalize_url(url) == expected


class TestExtractPageContent:
    """Tests for extract_page_content"""

    def test_fields(self):
        """Test title, description and headings"""
        page = extract_page_content(HTML, "https://acme.test")
        assert page.title == "Acme CRM"
        assert page.meta_description == "The CRM for small teams"
        assert page.h1 == ["Close more deals"]
        assert page.h2 == ["Built for teams"]

    def test_visible_text_excludes_scripts(self):
        """Test script, style and noscript content is dropped"""
        page = extract_page_content(HTML, "https://acme.test")
        assert "Close more deals" in page.visible_text
        assert "Home Pricing" in page.visible_text
        assert "tracking" not in page.visible_text
        assert "color: red" not in page.visible_text
        assert "Enable JavaScript" not in page.visible_text

    def test_main_content_prefers_main(self):
        """Test main content comes from the main element"""
        page = extract_page_content(HTML, "https://acme.test")
        assert page.main_content == "Close more deals Built for teams Start your free trial today."

    def test_html_truncated(self):
        """Test raw HTML is capped"""
        page = extract_page_content(HTML, "https://acme.test", max_html_length=50)
        assert len(page.html) == 50

    def test_visible_text_capped(self):
        """Test visible text is capped at 4000 characters"""
        page = extract_page_content(f"<html><body><p>{'word ' * 2000}</p></body></html>", "https://x.test")
        assert len(page.visible_text) == 4000


class TestFetchPage:
    """Tests for fetch_page"""

    def test_success(self):
        """Test a page is fetched and extracted"""
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, text=HTML)

        page = fetch_page("acme.test", client=_client(handler))
        assert seen[0].startswith("https://acme.test")
        assert page.title == "Acme CRM"
        assert page.url.startswith("https://acme.test")

    def test_http_error(self):
        """Test non-2xx responses raise FetchError"""
        with pytest.raises(FetchError, match="HTTP 404"):
            fetch_page("https://acme.test", client=_client(lambda r: httpx.Response(404)))

    def test_timeout(self):
        """Test timeouts raise FetchError"""
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(FetchError, match="Timeout"):
            fetch_page("https://acme.test", timeout=5, client=_client(handler))

    def test_connection_error(self):
        """Test connection failures raise FetchError"""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(FetchError, match="Request failed"):
            fetch_page("https://acme.test", client=_client(handler))
