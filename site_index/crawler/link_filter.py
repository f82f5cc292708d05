# File: site_index/crawler/link_filter.py
"""Eligibility rules for links discovered on a crawled page."""

from __future__ import annotations

from typing import TYPE_CHECKING

from site_index.crawler.models import CrawlTarget
from site_index.crawler.urls import host_of, is_document_extension, is_recursive, normalize, path_of

if TYPE_CHECKING:
    from site_index.crawler.frontier import Frontier

__all__ = ["is_eligible", "is_excluded", "LinkFilter"]


def is_excluded(url: str, target: CrawlTarget) -> bool:
    """True if the URL path starts with one of the target's exclusion prefixes."""
    path = path_of(url)
    return any(path.startswith(prefix) for prefix in target.exclusions)


def is_eligible(raw_link: str, target: CrawlTarget, frontier: "Frontier") -> bool:
    """
    Decide whether ``raw_link`` may enter the pool.

    The link is normalized first; the link must be new to the frontier, live on
    ``target.domain``, be outside every exclusion prefix, have no repeated path
    segment and not point to a document file.
    """
    url = normalize(raw_link)
    return (
        not frontier.has_been_attempted(url)
        and host_of(url) == target.domain
        and not is_excluded(url, target)
        and not is_recursive(url)
        and not is_document_extension(url)
    )


class LinkFilter:
    """:func:`is_eligible` bound to one target and frontier, usable as an ``admit`` predicate."""

    def __init__(self, target: CrawlTarget, frontier: "Frontier") -> None:
        self.target = target
        self.frontier = frontier

    def __call__(self, raw_link: str) -> bool:
        return is_eligible(raw_link, self.target, self.frontier)
