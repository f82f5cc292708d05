# File: tests/conftest.py
from typing import Dict, List, Union

import pytest

from site_index.crawler.frontier import MemoryFrontier, SqliteFrontier
from site_index.crawler.models import CrawlTarget, Document
from site_index.errors import FetchFailure
from site_index.logger import configure

DOMAIN = "example.com"


class FakeFetcher:
    """
    In-memory fetcher: maps URL -> HTML. Unknown URLs and URLs mapped to an
    exception fail with FetchFailure. Records every requested URL.
    """

    def __init__(self, pages: Dict[str, Union[str, Exception]]) -> None:
        self.pages = pages
        self.requested: List[str] = []

    async def fetch(self, url: str) -> Document:
        self.requested.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchFailure(url, "HTTP 404")
        if isinstance(page, Exception):
            raise page
        return Document(url=url, content=page)


def links_page(*hrefs: str) -> str:
    """Build a small HTML page with one anchor per href."""
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


@pytest.fixture(autouse=True)
def reset_logging():
    """
    CLI tests rebind the project logger to CliRunner streams; point it back
    at the current stdout so later tests do not log into closed buffers.
    """
    configure(level="DEBUG")
    yield


@pytest.fixture()
def target() -> CrawlTarget:
    return CrawlTarget(domain=DOMAIN, exclusions=("/private",))


@pytest.fixture(params=["memory", "sqlite"])
def frontier(request, tmp_path):
    """
    Both frontier storages, so every contract test runs against each of them.
    """
    if request.param == "memory":
        fr = MemoryFrontier()
    else:
        fr = SqliteFrontier(tmp_path / "state.db")
    yield fr
    fr.close()
