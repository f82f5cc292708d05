"""site_index.crawler: frontier, link filtering and the crawl engine."""

from site_index.crawler.crawler import CrawlEngine, CrawlState
from site_index.crawler.fetcher import Fetcher
from site_index.crawler.frontier import Frontier, MemoryFrontier, SqliteFrontier
from site_index.crawler.link_filter import LinkFilter, is_eligible
from site_index.crawler.models import CrawlProgress, CrawlTarget, Document, VisitedRecord

__all__ = [
    "CrawlEngine",
    "CrawlState",
    "Fetcher",
    "Frontier",
    "MemoryFrontier",
    "SqliteFrontier",
    "LinkFilter",
    "is_eligible",
    "CrawlProgress",
    "CrawlTarget",
    "Document",
    "VisitedRecord",
]
