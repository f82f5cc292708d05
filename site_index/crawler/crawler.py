# === FILE: site_index/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Set

from site_index.crawler.fetcher import PageFetcher
from site_index.crawler.frontier import Frontier
from site_index.crawler.link_filter import LinkFilter
from site_index.crawler.models import CrawlProgress, CrawlTarget, VisitedRecord
from site_index.crawler.urls import normalize
from site_index.errors import EmptyFrontier, FetchFailure

__all__ = ("CrawlState", "CrawlEngine", "ProgressCallback")

ProgressCallback = Callable[[CrawlProgress], None]


class CrawlState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class CrawlEngine:
    """
    Обход одного домена: берёт URL из frontier, загружает страницу,
    фильтрует найденные ссылки и кладёт подходящие обратно в пул.

    Обход заканчивается, когда пул пуст и ни одной загрузки не выполняется.
    Ошибки загрузки не прерывают обход: URL просто отбрасывается.
    DuplicateVisit и FrontierError считаются фатальными и пробрасываются.
    """

    def __init__(self, frontier: Frontier, fetcher: PageFetcher) -> None:
        self.frontier = frontier
        self.fetcher = fetcher
        self.state = CrawlState.IDLE
        self.failed: List[str] = []
        self.logger = logging.getLogger("SiteIndex")

    async def start(
        self,
        target: CrawlTarget,
        *,
        is_single: bool = False,
        concurrency: int = 1,
        progress: Optional[ProgressCallback] = None,
    ) -> List[VisitedRecord]:
        """Run the crawl to completion and return the visited records in crawl order."""
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"crawl engine already {self.state.value}")
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.state = CrawlState.RUNNING
        self.logger.info("Старт обхода: %s", target.root_url)
        started = time.monotonic()

        if self.frontier.pool_size() == 0:
            # a finished crawl restored from storage has nothing left to do
            if self.frontier.has_been_attempted(target.root_url):
                self.logger.info("Обход уже завершён: %s", target.root_url)
            else:
                self.frontier.push_pool(target.root_url)
        else:
            self.logger.info("Продолжение обхода: в пуле %d URL", self.frontier.pool_size())

        link_filter = LinkFilter(target, self.frontier)
        limit = 1 if is_single else concurrency
        in_flight: Set[asyncio.Task[None]] = set()
        stop = False
        try:
            while True:
                while not stop and len(in_flight) < limit:
                    try:
                        url = self.frontier.pop_pool()
                    except EmptyFrontier:
                        break
                    in_flight.add(
                        asyncio.create_task(self._step(url, link_filter, is_single, progress))
                    )
                if not in_flight:
                    break
                done, in_flight = await asyncio.wait(in_flight, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    task.result()
                # single-page mode: the first fetch decides, whatever its outcome
                stop = is_single
        finally:
            for task in in_flight:
                task.cancel()
            if in_flight:
                await asyncio.gather(*in_flight, return_exceptions=True)
            self.state = CrawlState.DONE

        records = self.frontier.all_visited()
        duration = time.monotonic() - started
        self.logger.info(
            "Завершено: %d страниц за %.2f с (%.2f стр/с)",
            len(records),
            duration,
            len(records) / duration if duration else 0,
        )
        if self.failed:
            self.logger.info("Не удалось загрузить: %d", len(self.failed))
        return records

    async def _step(
        self,
        url: str,
        link_filter: LinkFilter,
        is_single: bool,
        progress: Optional[ProgressCallback],
    ) -> None:
        url = normalize(url)
        try:
            document = await self.fetcher.fetch(url)
        except FetchFailure as exc:
            self.logger.debug("Пропуск %s: %s", url, exc.reason)
            self.failed.append(url)
            return

        record = self.frontier.mark_visited(url, document.content)
        self.logger.debug("Visited #%d %s", record.index, url)
        if progress is not None:
            progress(
                CrawlProgress(
                    url=url,
                    content=document.content,
                    total_visited=record.index,
                    remaining_pool_size=self.frontier.pool_size(),
                )
            )
        if is_single:
            return

        added = 0
        for link in document.links():
            if self.frontier.admit(normalize(link), link_filter):
                added += 1
        self.logger.debug("%s: %d new links queued", url, added)
