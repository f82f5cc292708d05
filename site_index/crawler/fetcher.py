# site_index/crawler/fetcher.py
"""
Fetcher module: retrieves HTML pages over HTTP with timeout and optional retry/backoff.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_index.crawler.models import Document
from site_index.errors import FetchFailure

if TYPE_CHECKING:
    from site_index.config import CrawlConfig

__all__ = ["PageFetcher", "Fetcher", "RETRY_STATUS"]

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class PageFetcher(Protocol):
    """Anything the crawl engine can pull documents from."""

    async def fetch(self, url: str) -> Document: ...


class Fetcher:
    """Fetches HTML documents with aiohttp. Every failure surfaces as :class:`FetchFailure`."""

    def __init__(
        self,
        config: CrawlConfig,
        session: Optional[ClientSession] = None,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.config = config
        self.session = session
        self._own_session = session is None
        self._retry_status = retry_status
        self.logger = logging.getLogger("SiteIndex")

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_session and self.session and not self.session.closed:
            await self.session.close()

    @staticmethod
    def _backoff_delay(attempts: int) -> float:
        # exponential backoff, cap at 60s
        return min(60, 2**attempts + random.random())

    async def fetch(self, url: str) -> Document:
        """
        Download ``url`` and return it as a :class:`Document`.

        Non-2xx responses, non-HTML content types, network errors, timeouts and
        undecodable bodies raise :class:`FetchFailure`. Statuses from
        ``retry_status`` and connection-level ``ClientError``s are retried up to
        ``config.retry_times`` times; timeouts are not retried.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    if resp.status in self._retry_status:
                        raise ClientError(f"retryable status {resp.status}")
                    if not 200 <= resp.status < 300:
                        raise FetchFailure(url, f"HTTP {resp.status}")
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if mime not in ("text/html", "application/xhtml+xml"):
                        raise FetchFailure(url, f"not an HTML document ({mime or 'no content type'})")
                    try:
                        text = await resp.text()
                    except (UnicodeDecodeError, LookupError) as exc:
                        raise FetchFailure(url, f"cannot decode body: {exc}") from exc
                    return Document(url=str(resp.url), content=text)
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchFailure(url, "timeout") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    if self.config.retry_times:
                        self.logger.warning("Failed %s after %d attempts: %s", url, attempts, exc)
                    raise FetchFailure(url, str(exc) or type(exc).__name__) from exc
                backoff = self._backoff_delay(attempts)
                self.logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)
