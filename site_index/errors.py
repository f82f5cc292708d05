# File: site_index/errors.py
"""Exception hierarchy shared by the frontier, the fetcher and the crawl engine."""

from __future__ import annotations

__all__ = [
    "SiteIndexError",
    "EmptyFrontier",
    "DuplicateVisit",
    "FetchFailure",
    "FrontierError",
]


class SiteIndexError(Exception):
    """Base class for all SiteIndex errors."""


class EmptyFrontier(SiteIndexError, IndexError):
    """Raised by ``pop_pool`` when the pending pool is empty."""


class DuplicateVisit(SiteIndexError):
    """A URL was marked visited twice. Indicates a filtering bug; fatal."""

    def __init__(self, url: str) -> None:
        super().__init__(f"URL already visited: {url}")
        self.url = url


class FetchFailure(SiteIndexError):
    """A page could not be retrieved or is not an HTML document."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class FrontierError(SiteIndexError):
    """The frontier storage itself failed (e.g. database unavailable)."""
