# File: site_index/engine.py
"""site_index.engine: сборка frontier, fetcher и CrawlEngine для одного запуска обхода."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from site_index.config import CrawlConfig
from site_index.crawler.crawler import CrawlEngine, ProgressCallback
from site_index.crawler.fetcher import Fetcher
from site_index.crawler.frontier import Frontier, MemoryFrontier, SqliteFrontier
from site_index.crawler.models import VisitedRecord
from site_index.logger import logger

__all__ = ["open_frontier", "start_crawl"]


def open_frontier(cfg: CrawlConfig) -> Frontier:
    """SQLite frontier when ``state_file`` is configured, in-memory otherwise."""
    if cfg.state_file is not None:
        logger.debug("Using crawl state file %s", cfg.state_file)
        return SqliteFrontier(cfg.state_file)
    return MemoryFrontier()


async def start_crawl(
    cfg: CrawlConfig, progress: Optional[ProgressCallback] = None
) -> List[VisitedRecord]:
    """
    Обходит домен из конфигурации и возвращает посещённые страницы в порядке обхода.

    Parameters
    ----------
    cfg : CrawlConfig
        Конфигурация обхода.
    progress : callable, optional
        Вызывается после каждой успешной загрузки с CrawlProgress.

    Returns
    -------
    List[VisitedRecord]
        Список страниц (url, content).
    """
    with open_frontier(cfg) as frontier:
        async with Fetcher(cfg) as fetcher:
            engine = CrawlEngine(frontier, fetcher)
            run = engine.start(
                cfg.target,
                is_single=cfg.is_single,
                concurrency=cfg.concurrency,
                progress=progress,
            )
            if cfg.crawl_timeout is None:
                return await run
            try:
                return await asyncio.wait_for(run, timeout=cfg.crawl_timeout)
            except asyncio.TimeoutError:
                logger.error("Crawl did not finish within %s seconds", cfg.crawl_timeout)
                raise
