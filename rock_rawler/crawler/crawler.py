from __future__ import annotations

import asyncio
import time
from typing import List, Mapping, Optional
from urllib.parse import urlsplit

from aiohttp import ClientSession
from aiohttp.abc import AbstractResolver
from rock_rawler.config import CrawlRequest
from rock_rawler.crawler.fetcher import Fetcher, open_session
from rock_rawler.crawler.link_extractor import extract_links
from rock_rawler.crawler.models import CrawlTarget, LinkKind, PageData
from rock_rawler.crawler.scope import ScopePolicy
from rock_rawler.crawler.visited import VisitedSet
from rock_rawler.logger import get_logger

__all__ = ("AsyncCrawler",)

_FETCHABLE_SCHEMES = ("http", "https")


class AsyncCrawler:
    """Асинхронный краулер: пул из ``threads`` воркеров, обход в ширину до ``max_depth``."""

    def __init__(
        self,
        request: CrawlRequest,
        scope: ScopePolicy,
        headers: Mapping[str, str],
        resolver: Optional[AbstractResolver] = None,
    ) -> None:
        self.request = request
        self.scope = scope
        self.headers = dict(headers)
        self.resolver = resolver
        self.visited = VisitedSet()
        self.scheduled = VisitedSet()
        self.results: List[str] = []
        self.session: Optional[ClientSession] = None
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> AsyncCrawler:
        self.session = open_session(self.request, self.resolver)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> List[str]:
        if not self.session:
            raise RuntimeError("Session not initialized")
        self.logger.info("Старт обхода: %s", self.request.seed_url)
        start = time.monotonic()
        fetcher = Fetcher(self.session, self.headers, self.scope)
        queue: asyncio.Queue[CrawlTarget] = asyncio.Queue()
        self.scheduled.check_and_mark(self.request.seed_url)
        queue.put_nowait(CrawlTarget(self.request.seed_url, 0))
        workers = [
            asyncio.create_task(self._worker(queue, fetcher)) for _ in range(self.request.threads)
        ]
        try:
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
        self.logger.info(
            "Завершено: %s, %d URL в очереди, %d результатов за %.2f с",
            self.request.seed_url, len(self.scheduled), len(self.results), time.monotonic() - start,
        )
        return self.results

    async def _worker(self, queue: asyncio.Queue[CrawlTarget], fetcher: Fetcher) -> None:
        while True:
            target = await queue.get()
            try:
                page = await fetcher.fetch(target.url)
                if page is not None:
                    self._process(page, target.depth, queue)
            except Exception:
                self.logger.debug("Error processing %s", target.url, exc_info=True)
            finally:
                queue.task_done()

    def _process(self, page: PageData, depth: int, queue: asyncio.Queue[CrawlTarget]) -> None:
        for link in extract_links(page):
            if not link.url:
                continue
            if self.visited.check_and_mark(link.url):
                self.results.append(link.url)
            if link.kind is LinkKind.ANCHOR:
                self._schedule(link.url, depth + 1, queue)

    def _schedule(self, url: str, depth: int, queue: asyncio.Queue[CrawlTarget]) -> None:
        if depth > self.request.max_depth:
            return
        if urlsplit(url).scheme not in _FETCHABLE_SCHEMES:
            return
        if not self.scope.allows(url):
            self.logger.debug("Out of scope: %s", url)
            return
        if self.scheduled.check_and_mark(url):
            queue.put_nowait(CrawlTarget(url, depth))
