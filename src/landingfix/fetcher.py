"""Fetch a landing page and extract the content sent to the AI."""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from .exceptions import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; LandingFix/1.2; +https://landingfixai.com)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

MAX_VISIBLE_TEXT = 4000
MAX_MAIN_CONTENT = 2000


@dataclass
class PageContent:
    """Text extracted from a landing page."""
    url: str
    html: str = ""
    title: str = ""
    meta_description: str = ""
    h1: list[str] = field(default_factory=list)
    h2: list[str] = field(default_factory=list)
    visible_text: str = ""
    main_content: str = ""


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def _clean_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def extract_page_content(html: str, url: str, max_html_length: int = 10000) -> PageContent:
    """Pull title, headings, visible text and main content out of HTML."""
    soup = BeautifulSoup(html, "lxml")

    title_tag = soup.find("title")
    desc_tag = soup.find("meta", attrs={"name": "description"})

    page = PageContent(
        url=url,
        html=html[:max_html_length],
        title=title_tag.get_text(strip=True) if title_tag else "",
        meta_description=(desc_tag.get("content") or "").strip() if desc_tag else "",
        h1=[_clean_text(h.get_text(" ")) for h in soup.find_all("h1")],
        h2=[_clean_text(h.get_text(" ")) for h in soup.find_all("h2")],
    )

    for tag in soup.find_all(["script", "style", "noscript", "template"]):
        tag.decompose()

    body = soup.body or soup
    page.visible_text = _clean_text(body.get_text(" "))[:MAX_VISIBLE_TEXT]

    main = soup.find("main") or soup.find("article") or body
    page.main_content = _clean_text(main.get_text(" "))[:MAX_MAIN_CONTENT]

    return page


def fetch_page(
    url: str,
    timeout: float = 30.0,
    max_html_length: int = 10000,
    client: Optional[httpx.Client] = None,
) -> PageContent:
    """Fetch a landing page and extract its content.

    Raises:
        FetchError: on timeouts, HTTP errors or failed requests.
    """
    url = normalize_url(url)
    owns_client = client is None
    if owns_client:
        client = httpx.Client(headers=DEFAULT_HEADERS, timeout=timeout, follow_redirects=True)

    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException:
        raise FetchError(f"Timeout after {timeout}s fetching {url}") from None
    except httpx.HTTPStatusError as e:
        raise FetchError(f"HTTP {e.response.status_code} fetching {url}") from None
    except httpx.RequestError as e:
        raise FetchError(f"Request failed: {e}") from None
    finally:
        if owns_client:
            client.close()

    final_url = str(response.url)
    page = extract_page_content(response.text, final_url, max_html_length)
    logger.debug(
        "Fetched %s: %d chars visible text, %d chars main content",
        final_url, len(page.visible_text), len(page.main_content),
    )
    return page
