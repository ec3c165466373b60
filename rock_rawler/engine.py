"""rock_rawler.engine: точка входа ядра — один вызов на один seed URL."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

from aiohttp.abc import AbstractResolver

from rock_rawler.config import CrawlRequest
from rock_rawler.crawler.crawler import AsyncCrawler
from rock_rawler.crawler.headers import parse_headers
from rock_rawler.crawler.scope import resolve_scope
from rock_rawler.exceptions import InvalidURL, MalformedHeaders
from rock_rawler.logger import logger

__all__ = ["start_crawl", "crawl"]


def _headers_or_empty(raw: str) -> Dict[str, str]:
    try:
        return parse_headers(raw)
    except MalformedHeaders as exc:
        logger.warning("Ignoring custom headers: %s", exc)
        return {}


async def start_crawl(request: CrawlRequest, *, resolver: Optional[AbstractResolver] = None) -> List[str]:
    """
    Обходит сайт, начиная с ``request.seed_url``, и возвращает найденные URL.

    Parameters
    ----------
    request : CrawlRequest
        Параметры обхода.
    resolver : AbstractResolver, optional
        DNS-резолвер aiohttp для соединений этого обхода.

    Returns
    -------
    List[str]
        Уникальные абсолютные URL (ссылки, скрипты, action форм) в порядке обнаружения.
        Пустой список, если из seed URL нельзя получить hostname.
    """
    headers = _headers_or_empty(request.raw_headers)
    try:
        scope = resolve_scope(request.seed_url, request.include_subdomains)
    except InvalidURL as exc:
        logger.info("Skipping seed: %s", exc)
        return []

    async with AsyncCrawler(request, scope, headers, resolver=resolver) as crawler:
        return await crawler.crawl()


def crawl(request: CrawlRequest) -> List[str]:
    """Blocking wrapper around :func:`start_crawl`; returns once the crawl has drained."""
    return asyncio.run(start_crawl(request))
