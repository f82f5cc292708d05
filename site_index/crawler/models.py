"""
Data models for the SiteIndex crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from site_index.crawler.link_extractor import extract_links
from site_index.crawler.urls import root_url


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """Domain to crawl plus path prefixes that must never be queued."""

    domain: str
    exclusions: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def root_url(self) -> str:
        return root_url(self.domain)


@dataclass(frozen=True, slots=True)
class VisitedRecord:
    """A page that was fetched successfully. ``index`` is its 1-based crawl position."""

    url: str
    content: str
    index: int

    def as_dict(self) -> dict[str, str]:
        return {"url": self.url, "content": self.content}


@dataclass(frozen=True, slots=True)
class CrawlProgress:
    """Reported to the progress callback after every successful fetch."""

    url: str
    content: str
    total_visited: int
    remaining_pool_size: int


@dataclass(slots=True)
class Document:
    """Fetched HTML page. ``url`` is the address the content was served from."""

    url: str
    content: str

    def links(self) -> List[str]:
        """All anchor targets of the page as absolute URLs."""
        return extract_links(self)
