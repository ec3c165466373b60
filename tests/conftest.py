# File: tests/conftest.py
from __future__ import annotations

import asyncio
import socket
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.abc import AbstractResolver

from rock_rawler.config import CrawlRequest
from rock_rawler.crawler.models import PageData


class LoopbackResolver(AbstractResolver):
    """Resolve every hostname to 127.0.0.1 so scope rules can use real-looking domains."""

    def __init__(self) -> None:
        self.resolved: List[str] = []

    async def resolve(self, host, port=0, family=socket.AF_INET):
        self.resolved.append(host)
        return [
            {
                "hostname": host,
                "host": "127.0.0.1",
                "port": port,
                "family": socket.AF_INET,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    async def close(self) -> None:
        pass


@dataclass
class Page:
    body: str = ""
    status: int = 200
    content_type: str = "text/html"
    location: Optional[str] = None
    delay: float = 0.0


@dataclass
class FakeSite:
    """Virtual hosts served by one local aiohttp app, keyed by (hostname, path)."""

    port: int
    pages: Dict[Tuple[str, str], Page] = field(default_factory=dict)
    hits: List[Tuple[str, str]] = field(default_factory=list)
    request_headers: List[Dict[str, str]] = field(default_factory=list)
    in_flight: int = 0
    max_in_flight: int = 0

    def url(self, host: str, path: str = "/") -> str:
        return f"http://{host}:{self.port}{path}"

    def add(self, host: str, path: str, body: str = "", **kwargs) -> str:
        self.pages[(host, path)] = Page(body, **kwargs)
        return self.url(host, path)

    def redirect(self, host: str, path: str, location: str) -> str:
        self.pages[(host, path)] = Page(status=302, location=location)
        return self.url(host, path)

    def fetched(self, host: str, path: str = "/") -> bool:
        return (host, path) in self.hits

    def hosts(self) -> set:
        return {host for host, _ in self.hits}


@pytest.fixture()
def resolver() -> LoopbackResolver:
    return LoopbackResolver()


@pytest_asyncio.fixture
async def fake_site(unused_tcp_port: int) -> AsyncIterator[FakeSite]:
    site = FakeSite(port=unused_tcp_port)

    async def handle(request: web.Request) -> web.StreamResponse:
        host = request.url.host or ""
        site.hits.append((host, request.path))
        site.request_headers.append(dict(request.headers))
        page = site.pages.get((host, request.path))
        if page is None:
            return web.Response(status=404, text="not found")
        site.in_flight += 1
        site.max_in_flight = max(site.max_in_flight, site.in_flight)
        try:
            if page.delay:
                await asyncio.sleep(page.delay)
        finally:
            site.in_flight -= 1
        if page.location is not None:
            raise web.HTTPFound(location=page.location)
        return web.Response(status=page.status, text=page.body, content_type=page.content_type)

    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", handle)
    runner = web.AppRunner(app)
    await runner.setup()
    tcp = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
    await tcp.start()
    try:
        yield site
    finally:
        await runner.cleanup()


@pytest.fixture()
def make_request():
    """Factory for CrawlRequest with test-friendly defaults."""

    def _make(seed_url: str, **kwargs) -> CrawlRequest:
        kwargs.setdefault("threads", 2)
        kwargs.setdefault("max_depth", 2)
        kwargs.setdefault("timeout", 5.0)
        return CrawlRequest(seed_url=seed_url, **kwargs)

    return _make


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with anchors, scripts and a form.
    """
    html = (
        '<html><head><script src="/static/app.js"></script></head><body>'
        '<a href="/link1">L1</a><a href="http://external.com/x#frag">X</a>'
        '<a href="#top">Top</a>'
        '<form action="/login" method="post"></form>'
        "</body></html>"
    )
    return PageData(url="http://example.com/dir/", content=html)
