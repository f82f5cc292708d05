# site_index/crawler/link_extractor.py
"""
Link extraction for SiteIndex: every ``<a href>`` resolved against the page URL.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

if TYPE_CHECKING:
    from site_index.crawler.models import Document

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def extract_links(page: "Document") -> List[str]:
    """
    Extract HTTP(S) links from the page content.

    Relative hrefs are resolved against ``page.url``. Domain filtering is left
    to the link filter, so external links are returned as well.
    """
    soup = BeautifulSoup(page.content, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIPPED_SCHEMES):
            continue
        absolute = urljoin(page.url, raw)
        if urlparse(absolute).scheme in ("http", "https"):
            links.append(absolute)
    return links
